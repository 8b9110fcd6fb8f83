"""
Constrained string types for AT Protocol identifiers.

See https://atproto.com/specs/at-uri-scheme and https://github.com/multiformats/cid
"""
import re
from typing import Annotated

from pydantic import AfterValidator, StringConstraints

_DID_PART = r"did:[a-z0-9]+:(?:[A-Za-z0-9._%-]+:)*[A-Za-z0-9._%-]+"
_RECORD_KEY = r"[A-Za-z0-9._~:-]{1,512}"

FEED_GENERATOR_COLLECTION = "app.bsky.feed.generator"
POST_COLLECTION = "app.bsky.feed.post"
REPOST_COLLECTION = "app.bsky.feed.repost"


def _at_uri_pattern(collection: str) -> str:
    return rf"^at://{_DID_PART}/{re.escape(collection)}/{_RECORD_KEY}$"


def _check_record_key(value: str) -> str:
    if value.rsplit("/", 1)[-1] in {".", ".."}:
        raise ValueError("Record key must not be '.' or '..'")
    return value


FeedUri = Annotated[
    str,
    StringConstraints(pattern=_at_uri_pattern(FEED_GENERATOR_COLLECTION)),
    AfterValidator(_check_record_key),
]
PostUri = Annotated[
    str,
    StringConstraints(pattern=_at_uri_pattern(POST_COLLECTION)),
    AfterValidator(_check_record_key),
]
RepostUri = Annotated[
    str,
    StringConstraints(pattern=_at_uri_pattern(REPOST_COLLECTION)),
    AfterValidator(_check_record_key),
]
Did = Annotated[str, StringConstraints(pattern=rf"^{_DID_PART}$")]
Cid = Annotated[str, StringConstraints(min_length=8, max_length=128, pattern=r"^[a-zA-Z0-9+=]+$")]


def did_from_uri(uri: str) -> str:
    """Extract the authority (DID) of an AT-URI: at://<did>/<collection>/<rkey>."""
    return uri.split("/")[2]
