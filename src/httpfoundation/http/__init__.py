"""
=============================================================================
HTTP MESSAGE LAYER
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   uri.py            Uri value object, RFC 3986 normalization        │
    │   headers.py        HeaderBag, case-insensitive multi-value map     │
    │   message.py        Message base: version, headers, body            │
    │   request.py        Request: method, URI, request target            │
    │   response.py       Response: status code, reason phrase            │
    │   status_codes.py   HTTPStatus enum                                 │
    │   parser.py         bytes ⇄ Request/Response                        │
    │   uploaded_file.py  UploadedFile for multipart uploads              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .uri import (
    DEFAULT_HOST,
    DEFAULT_PORTS,
    Uri,
    compose_components,
    filter_host,
    filter_path,
    filter_port,
    filter_query_and_fragment,
    filter_scheme,
    filter_user_info,
    is_default_port,
    uri_for,
)
from .headers import HeaderBag
from .status_codes import HTTPStatus, reason_phrase
from .message import Message
from .request import Request
from .response import Response
from .parser import MessageParser, message_to_string, parse_request, parse_response
from .uploaded_file import UploadedFile, UploadStatus

__all__ = [
    # URI
    "Uri",
    "uri_for",
    "compose_components",
    "is_default_port",
    "filter_scheme",
    "filter_host",
    "filter_port",
    "filter_path",
    "filter_query_and_fragment",
    "filter_user_info",
    "DEFAULT_HOST",
    "DEFAULT_PORTS",
    # Messages
    "HeaderBag",
    "Message",
    "Request",
    "Response",
    "HTTPStatus",
    "reason_phrase",
    # Wire format
    "MessageParser",
    "parse_request",
    "parse_response",
    "message_to_string",
    # Uploads
    "UploadedFile",
    "UploadStatus",
]
