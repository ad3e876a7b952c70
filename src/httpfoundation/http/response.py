"""
HTTP response.

    Response(404)                   → HTTP/1.1 404 Not Found
    Response(299)                   → HTTP/1.1 299        (no known phrase)
    Response(200, reason="Fine")    → HTTP/1.1 200 Fine

The reason phrase defaults to the standard one for the status code.
"""

from typing import Any, Optional

from ..errors import InvalidArgumentError
from .headers import HeadersInput
from .message import Message
from .status_codes import reason_phrase


def _filter_status(code: Any) -> int:
    if isinstance(code, bool):
        raise InvalidArgumentError(f"Invalid status code: {code!r}")
    try:
        code = int(code)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid status code: {code!r}") from None
    if code < 100 or code > 599:
        raise InvalidArgumentError(f"Invalid status code: {code}. Must be between 100 and 599")
    return code


class Response(Message):
    """Immutable HTTP response."""

    def __init__(
        self,
        status: int = 200,
        headers: Optional[HeadersInput] = None,
        body: Any = None,
        version: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(headers=headers, body=body, version=version)
        self._status_code = _filter_status(status)
        self._reason_phrase = reason if reason else reason_phrase(self._status_code)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def reason_phrase(self) -> str:
        return self._reason_phrase

    def with_status(self, code: int, reason: str = "") -> "Response":
        """Return a copy with a new status; an empty reason means the default phrase."""
        code = _filter_status(code)
        return self._with(
            _status_code=code,
            _reason_phrase=reason or reason_phrase(code),
        )

    @property
    def start_line(self) -> str:
        return f"HTTP/{self._protocol_version} {self._status_code} {self._reason_phrase}".rstrip()

    def __repr__(self) -> str:
        return f"<Response {self._status_code} {self._reason_phrase}>"
