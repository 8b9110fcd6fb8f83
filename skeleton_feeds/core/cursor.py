import re
from dataclasses import dataclass
from datetime import datetime

from skeleton_feeds.core.errors import MalformedCursorError
from skeleton_feeds.utils.dtime import from_epoch_ms, to_canonical_instant, to_epoch_ms

SEPARATOR = "::"

_EPOCH_MS_RE = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class PageCursor:
    """
    Position of the last post of a page, as (indexed_at, cid).

    The token is "<epoch-millis>::<cid>". Whether the referenced post still
    exists is never checked here, a stale cursor simply yields an empty page.
    """

    indexed_at: datetime
    cid: str

    def encode(self) -> str:
        return f"{to_epoch_ms(self.indexed_at)}{SEPARATOR}{self.cid}"

    @classmethod
    def decode(cls, token: str) -> "PageCursor":
        parts = token.split(SEPARATOR)
        if len(parts) != 2 or any(part == "" for part in parts):
            raise MalformedCursorError("Malformed cursor", cursor=token)

        epoch_ms, cid = parts
        if not _EPOCH_MS_RE.fullmatch(epoch_ms):
            raise MalformedCursorError("Malformed cursor", cursor=token)

        try:
            indexed_at = from_epoch_ms(int(epoch_ms))
        except (ValueError, OverflowError):
            # too many digits to convert, or outside the datetime range
            raise MalformedCursorError("Malformed cursor", cursor=token)

        return cls(indexed_at=indexed_at, cid=cid)

    @classmethod
    def from_post(cls, indexed_at: datetime, cid: str) -> "PageCursor":
        return cls(indexed_at=to_canonical_instant(indexed_at), cid=cid)
