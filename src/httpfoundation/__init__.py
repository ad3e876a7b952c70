"""
=============================================================================
HTTPFOUNDATION - HTTP Message Objects for Python
=============================================================================

Immutable HTTP requests, responses and URIs, with the body streams they
carry. No networking: this is the layer servers and clients build on.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpfoundation/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI (python -m httpfoundation URI)
    ├── config.py            # FoundationConfig dataclass
    ├── errors.py            # Exception hierarchy
    ├── helpers.py           # stream_for, copy_to_stream, copy_to_string
    ├── core/                # Body streams
    │   ├── stream.py        # StreamInterface, Stream, try_fopen
    │   ├── buffer_stream.py # In-memory FIFO
    │   ├── pump_stream.py   # Pull-based stream
    │   └── lazy_open_stream.py
    └── http/                # Messages
        ├── uri.py           # Uri value object
        ├── headers.py       # HeaderBag
        ├── message.py       # Message base class
        ├── request.py       # Request
        ├── response.py      # Response
        ├── status_codes.py  # HTTPStatus
        ├── parser.py        # Wire format
        └── uploaded_file.py # UploadedFile

=============================================================================
QUICK START
=============================================================================

    from httpfoundation import Request, Uri, message_to_string

    uri = Uri("HTTP://Example.com:80/a b?q=1")
    str(uri)                          # "http://example.com/a%20b?q=1"

    request = Request("GET", uri.with_port(8080))
    request.get_header_line("Host")   # "example.com:8080"

    message_to_string(request)
    # b"GET /a%20b?q=1 HTTP/1.1\\r\\nHost: example.com:8080\\r\\n\\r\\n"

=============================================================================
"""

__version__ = "1.0.0"

from .errors import (
    HTTPFoundationError,
    InvalidArgumentError,
    MessageParseError,
    StreamError,
    UploadError,
)
from .config import FoundationConfig, get_config, set_config, setup_logging
from .core import (
    BufferStream,
    LazyOpenStream,
    PumpStream,
    Stream,
    StreamDecorator,
    StreamInterface,
)
from .helpers import copy_to_stream, copy_to_string, stream_for, try_fopen
from .http import (
    HeaderBag,
    HTTPStatus,
    Message,
    Request,
    Response,
    UploadedFile,
    UploadStatus,
    Uri,
    message_to_string,
    parse_request,
    parse_response,
    uri_for,
)

__all__ = [
    "Uri",
    "uri_for",
    "HeaderBag",
    "Message",
    "Request",
    "Response",
    "HTTPStatus",
    "UploadedFile",
    "UploadStatus",
    "parse_request",
    "parse_response",
    "message_to_string",
    "StreamInterface",
    "Stream",
    "BufferStream",
    "PumpStream",
    "StreamDecorator",
    "LazyOpenStream",
    "stream_for",
    "try_fopen",
    "copy_to_stream",
    "copy_to_string",
    "FoundationConfig",
    "get_config",
    "set_config",
    "setup_logging",
    "HTTPFoundationError",
    "InvalidArgumentError",
    "MessageParseError",
    "StreamError",
    "UploadError",
    "__version__",
]
