"""
=============================================================================
HTTP MESSAGE BASE
=============================================================================

State shared by requests and responses: protocol version, headers, body.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         MESSAGE STATE                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   start line         (Request / Response specific)                  │
    │   protocol_version   "1.1"                                          │
    │   headers            HeaderBag - case-insensitive, multi-value      │
    │   body               StreamInterface                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Messages are immutable: every with_*() method returns a copy with one
field changed. The body stream is shared between copies, because a stream
is a handle to data, not the data itself.

=============================================================================
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..config import get_config
from ..core import StreamInterface
from ..errors import InvalidArgumentError
from ..helpers import stream_for
from .headers import HeaderBag, HeadersInput, HeaderValue


class Message(ABC):
    """
    Immutable HTTP message: protocol version, headers and body.

    Subclasses add their start line (Request, Response).
    """

    def __init__(
        self,
        headers: Optional[HeadersInput] = None,
        body: Any = None,
        version: Optional[str] = None,
    ):
        self._protocol_version = version or get_config().protocol_version
        self._headers = headers if isinstance(headers, HeaderBag) else HeaderBag(headers)
        self._body: StreamInterface = stream_for(body)

    def _with(self, **changes: Any) -> "Message":
        message = copy.copy(self)
        for name, value in changes.items():
            setattr(message, name, value)
        return message

    # =========================================================================
    # PROTOCOL VERSION
    # =========================================================================

    @property
    def protocol_version(self) -> str:
        """HTTP version number only, e.g. "1.1" (no "HTTP/" prefix)."""
        return self._protocol_version

    def with_protocol_version(self, version: str) -> "Message":
        if not isinstance(version, str) or not version:
            raise InvalidArgumentError("Protocol version must be a non-empty string")
        if version == self._protocol_version:
            return self
        return self._with(_protocol_version=version)

    # =========================================================================
    # HEADERS
    # =========================================================================

    @property
    def headers(self) -> Dict[str, List[str]]:
        """
        All headers as {original-case name: [values]}.

        The dict is a copy; changing it doesn't change the message.
        """
        return self._headers.to_dict()

    def has_header(self, name: str) -> bool:
        return self._headers.has(name)

    def get_header(self, name: str) -> List[str]:
        """All values of a header (case-insensitive), [] when missing."""
        return self._headers.get(name)

    def get_header_line(self, name: str) -> str:
        """
        Values of a header joined with ", ".

        Not every header survives comma-joining (Set-Cookie, for one);
        use get_header() for those.
        """
        return self._headers.get_line(name)

    def with_header(self, name: str, value: HeaderValue) -> "Message":
        """Return a copy where name holds exactly value."""
        return self._with(_headers=self._headers.with_value(name, value))

    def with_added_header(self, name: str, value: HeaderValue) -> "Message":
        """Return a copy with value appended to any existing values of name."""
        return self._with(_headers=self._headers.with_added(name, value))

    def without_header(self, name: str) -> "Message":
        if not self._headers.has(name):
            return self
        return self._with(_headers=self._headers.without(name))

    # =========================================================================
    # BODY
    # =========================================================================

    @property
    def body(self) -> StreamInterface:
        return self._body

    def with_body(self, body: StreamInterface) -> "Message":
        """
        Return a copy with a new body stream.

        Raises:
            InvalidArgumentError: If body is not a StreamInterface; use
                stream_for() to wrap bytes, files or iterators.
        """
        if not isinstance(body, StreamInterface):
            raise InvalidArgumentError("Body must be a StreamInterface")
        if body is self._body:
            return self
        return self._with(_body=body)

    @property
    @abstractmethod
    def start_line(self) -> str:
        """First line of the message on the wire, without CRLF."""
