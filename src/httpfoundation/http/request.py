"""
=============================================================================
HTTP REQUEST
=============================================================================

Immutable outgoing/incoming request: method, URI, request target,
plus the Message state (version, headers, body).

=============================================================================
REQUEST LINE AND HOST
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    Request("GET", "http://example.com:8080/users?page=2")           │
    │                                                                      │
    │        GET /users?page=2 HTTP/1.1          ← start_line             │
    │        ─┬─ ──────┬─────                                             │
    │         │        └── request_target  (path or "/", plus ?query)     │
    │         └── method                                                  │
    │                                                                      │
    │        Host: example.com:8080              ← derived from the URI   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The Host header is taken from the URI when none was given, and put first.
It carries the port only when the port is not the scheme's default, which
the Uri already guarantees by dropping default ports.

=============================================================================
"""

import re
from typing import Any, Optional, Union

from ..errors import InvalidArgumentError
from .headers import HeaderBag, HeadersInput
from .message import Message
from .uri import Uri, uri_for


# method = token (RFC 7230 section 3.1.1)
_METHOD_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _filter_method(method: Any) -> str:
    if not isinstance(method, str) or not _METHOD_PATTERN.fullmatch(method):
        raise InvalidArgumentError(f"Invalid HTTP method: {method!r}")
    return method


class Request(Message):
    """
    Immutable HTTP request.

    Example:
        request = Request("POST", "https://api.example.com/users",
                          headers={"Content-Type": "application/json"},
                          body=b'{"name": "Ada"}')

        request.method               # "POST"
        request.uri.host             # "api.example.com"
        request.get_header("host")   # ["api.example.com"]
        request.request_target       # "/users"
    """

    def __init__(
        self,
        method: str,
        uri: Union[Uri, str],
        headers: Optional[HeadersInput] = None,
        body: Any = None,
        version: Optional[str] = None,
    ):
        super().__init__(headers=headers, body=body, version=version)
        self._method = _filter_method(method)
        self._uri = uri_for(uri)
        self._request_target: Optional[str] = None

        if not self._headers.has("Host"):
            self._headers = self._host_headers(self._uri)

    def _host_headers(self, uri: Uri) -> HeaderBag:
        """Headers with Host set from uri and moved to the front."""
        host = uri.host
        if not host:
            return self._headers
        if uri.port is not None:
            host += f":{uri.port}"

        name = "Host"
        for existing in self._headers:
            if existing.lower() == "host":
                name = existing

        others = [(n, v) for n, v in self._headers.items() if n.lower() != "host"]
        return HeaderBag([(name, host)] + others)

    # =========================================================================
    # METHOD
    # =========================================================================

    @property
    def method(self) -> str:
        """The method exactly as given; it is case-sensitive."""
        return self._method

    def with_method(self, method: str) -> "Request":
        method = _filter_method(method)
        if method == self._method:
            return self
        return self._with(_method=method)

    # =========================================================================
    # URI
    # =========================================================================

    @property
    def uri(self) -> Uri:
        return self._uri

    def with_uri(self, uri: Union[Uri, str], preserve_host: bool = False) -> "Request":
        """
        Return a copy targeting uri.

        The Host header follows the new URI, unless preserve_host is True
        and the request already has a Host header.
        """
        uri = uri_for(uri)
        if uri == self._uri:
            return self

        request = self._with(_uri=uri)
        if not preserve_host or not self._headers.has("Host"):
            request._headers = request._host_headers(uri)
        return request

    # =========================================================================
    # REQUEST TARGET
    # =========================================================================

    @property
    def request_target(self) -> str:
        """
        The target in the request line.

        Defaults to origin form built from the URI ("/path?query");
        with_request_target() overrides it, e.g. "*" for OPTIONS.
        """
        if self._request_target is not None:
            return self._request_target

        target = self._uri.path or "/"
        if self._uri.query:
            target += "?" + self._uri.query
        return target

    def with_request_target(self, request_target: str) -> "Request":
        if not isinstance(request_target, str) or re.search(r"\s", request_target):
            raise InvalidArgumentError("Invalid request target provided; cannot contain whitespace")
        return self._with(_request_target=request_target)

    @property
    def start_line(self) -> str:
        return f"{self._method} {self.request_target} HTTP/{self._protocol_version}"

    def __repr__(self) -> str:
        return f"<Request {self._method} {self._uri}>"
