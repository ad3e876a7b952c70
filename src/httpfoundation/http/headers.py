"""
=============================================================================
HEADER BAG
=============================================================================

Immutable storage for HTTP header fields.

HTTP header names are case-insensitive (RFC 7230 section 3.2), but the
casing a caller used is what should go out on the wire. HeaderBag keeps
both views:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        HEADER BAG LAYOUT                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   _names   (lookup)              _headers   (storage, ordered)      │
    │   ──────────────────             ─────────────────────────────      │
    │   "content-type" ─────────────►  "Content-Type": ["text/html"]      │
    │   "x-trace"      ─────────────►  "X-TRACE":      ["a", "b"]         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Every header holds a list of values; get_line() joins them with ", ".
Nothing here interprets header values - that belongs to higher layers.

=============================================================================
"""

import re
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..errors import InvalidArgumentError


HeaderValue = Union[str, List[str], Tuple[str, ...]]
HeadersInput = Union[Mapping[str, HeaderValue], Iterable[Tuple[str, HeaderValue]]]

# field-name = token (RFC 7230 section 3.2.6)
_TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _filter_name(name: object) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Header name must be a non-empty string")
    if not _TOKEN_PATTERN.fullmatch(name):
        raise InvalidArgumentError(f"Invalid header name: {name!r}")
    return name


def _filter_values(name: str, value: object) -> List[str]:
    """Turn a value or list of values into a list of trimmed strings."""
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple)) and value:
        values = list(value)
    else:
        raise InvalidArgumentError(
            f"Header {name!r} value must be a string or a non-empty list of strings"
        )

    filtered = []
    for item in values:
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"Header {name!r} value must be a string or a non-empty list of strings"
            )
        # Reject CR/LF so a value can't smuggle in an extra header line
        if "\r" in item or "\n" in item:
            raise InvalidArgumentError(f"Header {name!r} value must not contain CR or LF")
        filtered.append(item.strip(" \t"))

    return filtered


class HeaderBag:
    """
    Case-insensitive, case-preserving, ordered multi-value header storage.

    Example:
        bag = HeaderBag({"Content-Type": "text/html"})
        bag = bag.with_added("Accept", ["text/html", "application/json"])

        bag.has("content-type")       # True
        bag.get("ACCEPT")             # ["text/html", "application/json"]
        bag.get_line("accept")        # "text/html, application/json"
        bag.to_dict()                 # {"Content-Type": [...], "Accept": [...]}
    """

    __slots__ = ("_headers", "_names")

    def __init__(self, headers: Optional[HeadersInput] = None):
        self._headers: Dict[str, List[str]] = {}
        self._names: Dict[str, str] = {}

        if headers is None:
            return

        items = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in items:
            self._append(name, value)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _append(self, name: object, value: object) -> None:
        name = _filter_name(name)
        values = _filter_values(name, value)
        normalized = name.lower()

        if normalized in self._names:
            self._headers[self._names[normalized]].extend(values)
        else:
            self._names[normalized] = name
            self._headers[name] = values

    def _copy(self) -> "HeaderBag":
        bag = HeaderBag()
        bag._headers = {name: list(values) for name, values in self._headers.items()}
        bag._names = dict(self._names)
        return bag

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    def has(self, name: str) -> bool:
        """Check whether a header exists (case-insensitive)."""
        return isinstance(name, str) and name.lower() in self._names

    def get(self, name: str) -> List[str]:
        """All values for a header, or [] when it is missing."""
        if not self.has(name):
            return []
        return list(self._headers[self._names[name.lower()]])

    def get_line(self, name: str) -> str:
        """All values for a header joined with ", ", or "" when missing."""
        return ", ".join(self.get(name))

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Iterate (original-case name, values) pairs in insertion order."""
        for name, values in self._headers.items():
            yield name, list(values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._headers.items()}

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._headers))

    def __len__(self) -> int:
        return len(self._headers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderBag):
            return NotImplemented
        return self._headers == other._headers

    def __repr__(self) -> str:
        return f"HeaderBag({self._headers!r})"

    # =========================================================================
    # COPY-ON-WRITE UPDATES
    # =========================================================================

    def with_value(self, name: str, value: HeaderValue) -> "HeaderBag":
        """
        Return a bag where name holds exactly value.

        The spelling of name replaces whatever spelling was stored before.
        """
        name = _filter_name(name)
        values = _filter_values(name, value)

        bag = self._copy()
        normalized = name.lower()
        if normalized in bag._names:
            del bag._headers[bag._names[normalized]]

        bag._names[normalized] = name
        bag._headers[name] = values
        return bag

    def with_added(self, name: str, value: HeaderValue) -> "HeaderBag":
        """Return a bag with value appended to name, keeping existing values."""
        bag = self._copy()
        bag._append(name, value)
        return bag

    def without(self, name: str) -> "HeaderBag":
        """Return a bag without name; the same bag if it isn't present."""
        if not self.has(name):
            return self

        bag = self._copy()
        stored = bag._names.pop(name.lower())
        del bag._headers[stored]
        return bag
