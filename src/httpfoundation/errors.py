"""
=============================================================================
EXCEPTIONS
=============================================================================

Every error raised by the package derives from HTTPFoundationError, so
callers can catch the whole family in one place:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       EXCEPTION HIERARCHY                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTPFoundationError                                               │
    │   ├── InvalidArgumentError   (also a ValueError)                    │
    │   │   └── MessageParseError  (raw bytes are not an HTTP message)    │
    │   ├── StreamError            (also a RuntimeError)                  │
    │   └── UploadError            (also a RuntimeError)                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Invalid input is a programming error, not a transient condition: all of
these are raised synchronously where the bad value enters the system and
there is nothing to retry.

=============================================================================
"""


class HTTPFoundationError(Exception):
    """Base class for all httpfoundation errors."""


class InvalidArgumentError(HTTPFoundationError, ValueError):
    """
    Raised when a value cannot be accepted by a URI, header or message.

    Examples:
        - a port outside 1-65535
        - a path starting with "//" on a URI without an authority
        - a header name containing whitespace
    """


class MessageParseError(InvalidArgumentError):
    """Raised when raw bytes cannot be parsed as an HTTP message."""


class StreamError(HTTPFoundationError, RuntimeError):
    """
    Raised when a stream operation cannot be performed.

    Detached streams, reads from write-only streams, seeks on pipes and
    files that fail to open all end up here.
    """


class UploadError(HTTPFoundationError, RuntimeError):
    """Raised when an uploaded file is used after a failed upload or a move."""
