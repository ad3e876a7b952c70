"""
=============================================================================
HTTP MESSAGE PARSER AND SERIALIZER
=============================================================================

Converts between raw HTTP/1.x bytes and Request/Response objects.

=============================================================================
MESSAGE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   START LINE     GET /api/users?page=1 HTTP/1.1\r\n                 │
    │                  (or)  HTTP/1.1 200 OK\r\n                          │
    │                                                                      │
    │   HEADERS        Host: example.com\r\n                              │
    │                  Accept: application/json\r\n                       │
    │                                                                      │
    │   SEPARATOR      \r\n                                                │
    │                                                                      │
    │   BODY           {"users": [...]}                                    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Header names keep the case they arrived in; a repeated header becomes
multiple values of one header. Obsolete line folding (a line starting
with SP or HTAB) is joined onto the previous value.

The body is taken as is: no Content-Length or chunked handling happens
here, that is transport work.

=============================================================================
REQUEST TARGET FORMS (RFC 7230 section 5.3)
=============================================================================

    origin form      GET /where?q=now HTTP/1.1       + Host header → URI
    absolute form    GET http://example.com/ HTTP/1.1              → URI
    authority form   CONNECT example.com:443 HTTP/1.1
    asterisk form    OPTIONS * HTTP/1.1

For the last two the URI is built from the Host header and the raw target
is kept via with_request_target().

=============================================================================
"""

import re
from typing import List, Tuple, Union

from ..errors import InvalidArgumentError, MessageParseError
from .request import Request
from .response import Response
from .uri import Uri


class MessageParser:
    """
    Parses raw HTTP/1.x messages.

    =========================================================================
    REGEX PATTERNS
    =========================================================================

    REQUEST_LINE_PATTERN: ^(token) (\\S+) HTTP/(\\d(?:\\.\\d)?)$
        method, request target, version number

    STATUS_LINE_PATTERN: ^HTTP/(\\d(?:\\.\\d)?) (\\d{3})(?: (.*))?$
        version number, status code, optional reason phrase

    HEADER_PATTERN: ^([^:\\s]+):[ \\t]*(.*?)[ \\t]*$
        field name, field value without surrounding whitespace

    =========================================================================
    """

    REQUEST_LINE_PATTERN = re.compile(r"^([!#$%&'*+\-.^_`|~0-9A-Za-z]+) (\S+) HTTP/(\d(?:\.\d)?)$")
    STATUS_LINE_PATTERN = re.compile(r"^HTTP/(\d(?:\.\d)?) (\d{3})(?: (.*))?$")
    HEADER_PATTERN = re.compile(r"^([^:\s]+):[ \t]*(.*?)[ \t]*$")

    def __init__(self, max_message_size: int = 10 * 1024 * 1024):
        """
        Args:
            max_message_size: Largest message accepted, in bytes (10 MB).
        """
        self.max_message_size = max_message_size

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def parse_request(self, data: bytes) -> Request:
        """
        Parse raw bytes into a Request.

        Raises:
            MessageParseError: If the bytes are not a valid HTTP request.
        """
        start_line, headers, body = self._split(data)

        match = self.REQUEST_LINE_PATTERN.match(start_line)
        if not match:
            raise MessageParseError(f"Invalid request line: {start_line!r}")
        method, target, version = match.groups()

        host = ""
        for name, value in headers:
            if name.lower() == "host":
                host = value
                break

        keep_target = False
        try:
            if target.startswith("/"):
                # Origin form: port 443 in Host suggests https
                scheme = "https" if host.endswith(":443") else "http"
                uri = Uri(f"{scheme}://{host}{target}") if host else Uri(target)
            elif "://" in target:
                uri = Uri(target)
            else:
                uri = Uri(f"http://{host}") if host else Uri()
                keep_target = True

            request = Request(method, uri, headers=headers, body=body, version=version)
        except InvalidArgumentError as e:
            raise MessageParseError(str(e)) from e

        if keep_target:
            request = request.with_request_target(target)
        return request

    def parse_response(self, data: bytes) -> Response:
        """
        Parse raw bytes into a Response.

        Raises:
            MessageParseError: If the bytes are not a valid HTTP response.
        """
        start_line, headers, body = self._split(data)

        match = self.STATUS_LINE_PATTERN.match(start_line)
        if not match:
            raise MessageParseError(f"Invalid status line: {start_line!r}")
        version, status, reason = match.groups()

        try:
            return Response(int(status), headers=headers, body=body, version=version, reason=reason)
        except InvalidArgumentError as e:
            raise MessageParseError(str(e)) from e

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _split(self, data: bytes) -> Tuple[str, List[Tuple[str, str]], bytes]:
        """Split a message into start line, header pairs and body."""
        if not isinstance(data, (bytes, bytearray)):
            raise MessageParseError("Message must be bytes")

        if len(data) > self.max_message_size:
            raise MessageParseError(f"Message too large: {len(data)} bytes")

        header_end = data.find(b"\r\n\r\n")
        if header_end == -1:
            raise MessageParseError("Incomplete message: no header terminator")

        # latin-1 maps every byte, so decoding can't fail (RFC 7230 section 3.2.4)
        head = bytes(data[:header_end]).decode("latin-1")
        body = bytes(data[header_end + 4:])

        lines = head.split("\r\n")
        start_line = lines[0]
        if not start_line:
            raise MessageParseError("Empty start line")

        return start_line, self._parse_headers(lines[1:]), body

    def _parse_headers(self, lines: List[str]) -> List[Tuple[str, str]]:
        headers: List[Tuple[str, str]] = []

        for line in lines:
            if not line:
                continue

            # Obsolete line folding continues the previous value
            if line[0] in (" ", "\t"):
                if not headers:
                    raise MessageParseError("Header continuation without a header")
                name, value = headers[-1]
                headers[-1] = (name, f"{value} {line.strip()}")
                continue

            match = self.HEADER_PATTERN.match(line)
            if not match:
                raise MessageParseError(f"Invalid header line: {line!r}")
            headers.append(match.groups())

        return headers


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def parse_request(data: bytes) -> Request:
    """Parse raw bytes into a Request with default limits."""
    return MessageParser().parse_request(data)


def parse_response(data: bytes) -> Response:
    """Parse raw bytes into a Response with default limits."""
    return MessageParser().parse_response(data)


def message_to_string(message: Union[Request, Response]) -> bytes:
    """
    Render a message in HTTP/1.x wire format.

    Requests without a Host header get one from their URI. Multiple
    Cookie values are joined with "; ", all other headers with ", ".
    The body is read in full from position 0.

    Raises:
        MessageParseError: For objects that are neither Request nor Response.
    """
    if not isinstance(message, (Request, Response)):
        raise MessageParseError(f"Unknown message type: {type(message).__name__}")

    lines = [message.start_line]
    if isinstance(message, Request) and not message.has_header("host"):
        lines.append(f"Host: {message.uri.host}")

    for name, values in message.headers.items():
        separator = "; " if name.lower() == "cookie" else ", "
        lines.append(f"{name}: {separator.join(values)}")

    head = "\r\n".join(lines) + "\r\n\r\n"
    return head.encode("latin-1") + bytes(message.body)
