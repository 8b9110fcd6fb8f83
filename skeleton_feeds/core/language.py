"""
Language tag normalization shared by post ingestion and skeleton reads.

Tags are reduced to their primary subtag ("en-US" -> "en"), lowercased and
de-duplicated while keeping the order in which they first appear.
"""
import re
from collections.abc import Iterable

from skeleton_feeds.core.errors import InvalidLanguageError

ALL_LANGUAGES = "*"

MAX_LANGUAGE_PREFERENCES = 10

_LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2,3}$")


def primary_subtag(tag: str) -> str:
    return tag.strip().split("-")[0].strip().lower()


def is_valid_code(code: str) -> bool:
    return code == ALL_LANGUAGES or bool(_LANGUAGE_CODE_RE.match(code))


def _unique(codes: Iterable[str]) -> list[str]:
    # dict preserves insertion order
    return list(dict.fromkeys(code for code in codes if code))


def normalize_languages(tags: Iterable[str] | None) -> list[str]:
    """
    Normalize the languages attached to a post.

    No tags at all means the post matches every language filter, so the
    wildcard code is returned. Codes that are neither the wildcard nor
    two or three latin letters reject the whole input.
    """
    tags = list(tags or [])
    if not tags:
        return [ALL_LANGUAGES]

    codes = _unique(primary_subtag(tag) for tag in tags)
    if not codes:
        raise InvalidLanguageError("At least one valid language code is required", languages=tags)

    if invalid := [code for code in codes if not is_valid_code(code)]:
        raise InvalidLanguageError(
            "All primary language tags must be exactly two or three lowercase alphabetic "
            'characters (e.g., "en", "ja")',
            languages=invalid,
        )

    # the wildcard already matches everything, other codes next to it carry no meaning
    if ALL_LANGUAGES in codes:
        return [ALL_LANGUAGES]

    return codes


def parse_language_preferences(header: str | None) -> list[str]:
    """
    Parse an Accept-Language style preference list.

    Quality weights are discarded and the declared order is kept. Entries
    that cannot be used as a filter (blank, wildcard, malformed) are skipped
    and at most MAX_LANGUAGE_PREFERENCES distinct codes are returned.
    """
    if not header:
        return []

    entries = (entry.split(";")[0] for entry in header.split(","))
    codes = _unique(primary_subtag(entry) for entry in entries)
    codes = [code for code in codes if code != ALL_LANGUAGES and is_valid_code(code)]

    return codes[:MAX_LANGUAGE_PREFERENCES]


def content_language(codes: list[str]) -> str | None:
    if not codes:
        return None
    return ", ".join(codes)


def public_languages(codes: list[str]) -> list[str] | None:
    """Languages of a post as shown to callers: an unrestricted post has none."""
    if codes == [ALL_LANGUAGES]:
        return None
    return codes
