"""Request URL parsing with a memoizing cache.

A dev middleware sees the same handful of URLs over and over, so parsed
results are kept in a ``ParseCache`` keyed by the raw string. The default
cache never evicts: the set of distinct URLs a development server sees is
small compared with the process lifetime, and growth is accepted rather
than bounded. Pass ``maxsize`` to get LRU eviction instead.

Free-threading safety:
    - Cache mutation happens under a ``threading.Lock``
    - Parsing itself runs outside the lock; two threads parsing the same
      key produce equal values and the last write wins harmlessly
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from urllib.parse import quote, urlsplit

from devmount.errors import UrlParseError

# Characters left alone when escaping a pathname. ``%`` is kept so that
# already-escaped sequences are not escaped a second time.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """The parts of a request target the resolver cares about.

    ``pathname`` is the path component with unsafe characters
    percent-escaped; existing ``%XX`` escapes are preserved, so decoding is
    left to whoever strips a prefix from it.
    """

    raw: str
    pathname: str
    search: str = ""
    query: str = ""
    hash: str = ""


def parse_url(raw: str) -> ParsedUrl:
    """Parse a request target (path, query and fragment).

    A leading ``//`` denotes a host, which is dropped from the pathname.
    Backslashes in the path are read as ``/``.

    Raises:
        UrlParseError: If *raw* is not a string, cannot be split, or holds
            characters that cannot be percent-escaped (lone surrogates).
    """
    if not isinstance(raw, str):
        msg = f"URL must be a string, got {type(raw).__name__}"
        raise UrlParseError(msg)

    # UnicodeEncodeError is a ValueError
    try:
        parts = urlsplit(raw)
        pathname = quote(parts.path.replace("\\", "/"), safe=_PATH_SAFE)
    except ValueError as exc:
        msg = f"Malformed URL {raw!r}: {exc}"
        raise UrlParseError(msg) from exc

    return ParsedUrl(
        raw=raw,
        pathname=pathname,
        search=f"?{parts.query}" if parts.query else "",
        query=parts.query,
        hash=f"#{parts.fragment}" if parts.fragment else "",
    )


class ParseCache:
    """Memoized ``parse_url`` keyed by the raw input string.

    Repeated lookups of the same string return the identical ``ParsedUrl``
    object. Failures are not cached.
    """

    __slots__ = ("_entries", "_lock", "_maxsize")

    def __init__(self, maxsize: int | None = None) -> None:
        if maxsize is not None and maxsize < 1:
            msg = f"maxsize must be a positive integer or None, got {maxsize!r}"
            raise ValueError(msg)
        self._maxsize = maxsize
        self._entries: OrderedDict[str, ParsedUrl] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def maxsize(self) -> int | None:
        return self._maxsize

    def parse(self, raw: str) -> ParsedUrl:
        """Return the cached parse of *raw*, parsing it on first use."""
        if not isinstance(raw, str):
            return parse_url(raw)

        with self._lock:
            cached = self._entries.get(raw)
            if cached is not None:
                if self._maxsize is not None:
                    self._entries.move_to_end(raw)
                return cached

        result = parse_url(raw)

        with self._lock:
            self._entries[raw] = result
            if self._maxsize is not None and len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, raw: object) -> bool:
        return isinstance(raw, str) and raw in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ParseCache(size={len(self._entries)}, maxsize={self._maxsize!r})"


# Process-wide cache used when a caller does not bring its own
default_cache = ParseCache()
memoized_parse = default_cache.parse
