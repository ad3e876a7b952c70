"""
=============================================================================
STREAM HELPERS
=============================================================================

Functions for turning arbitrary Python values into body streams and for
moving bytes between streams.

    stream_for(b"hello")              → Stream over io.BytesIO
    stream_for(open("f.bin", "rb"))   → Stream over the file
    stream_for(iter([b"a", b"b"]))    → PumpStream
    stream_for(existing_stream)       → existing_stream (unchanged)

    copy_to_stream(src, dst)          → copy everything
    copy_to_string(src, 10)           → first 10 bytes as bytes

=============================================================================
"""

import io
import logging
from typing import Any, Dict, Iterable, Optional

from .config import get_config
from .core import PumpStream, Stream, StreamInterface, try_fopen
from .errors import InvalidArgumentError


logger = logging.getLogger(__name__)

__all__ = [
    "stream_for",
    "copy_to_stream",
    "copy_to_string",
    "try_fopen",
]


def _is_file_like(resource: Any) -> bool:
    return callable(getattr(resource, "read", None)) or callable(getattr(resource, "write", None))


def _pump_from_iterable(resource: Iterable[Any]):
    iterator = iter(resource)

    def pump(length: int):
        return next(iterator, None)

    return pump


def stream_for(
    resource: Any = b"",
    size: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> StreamInterface:
    """
    Create a stream from almost anything that can be a body.

    =========================================================================
    ACCEPTED RESOURCES
    =========================================================================

        StreamInterface        returned unchanged
        bytes / bytearray      in-memory stream positioned at 0
        str                    UTF-8 encoded, then as bytes
        int / float / bool     str() of the value, then as str
        None                   empty in-memory stream
        binary file object     wrapped in Stream
        iterator / iterable    PumpStream yielding each item
        callable               PumpStream calling it with the wanted length
        object with __str__    str() of the object

    =========================================================================

    Args:
        resource: The body data.
        size: Known size, passed to the created stream.
        metadata: Custom metadata, passed to the created stream.

    Raises:
        InvalidArgumentError: If resource can't be turned into a stream.
    """
    if isinstance(resource, StreamInterface):
        return resource

    if resource is None:
        return Stream(io.BytesIO(), size=size, metadata=metadata)

    if isinstance(resource, (int, float)):
        resource = str(resource)

    if isinstance(resource, str):
        resource = resource.encode("utf-8")

    if isinstance(resource, (bytes, bytearray, memoryview)):
        return Stream(io.BytesIO(bytes(resource)), size=size, metadata=metadata)

    if _is_file_like(resource):
        return Stream(resource, size=size, metadata=metadata)

    if hasattr(resource, "__iter__") or hasattr(resource, "__next__"):
        return PumpStream(_pump_from_iterable(resource), size=size, metadata=metadata)

    if callable(resource):
        return PumpStream(resource, size=size, metadata=metadata)

    if type(resource).__str__ is not object.__str__:
        return stream_for(str(resource), size=size, metadata=metadata)

    raise InvalidArgumentError(f"Resource is invalid: {type(resource).__name__}")


def copy_to_stream(source: StreamInterface, dest: StreamInterface, max_len: int = -1) -> int:
    """
    Copy bytes from source into dest.

    Args:
        source: Stream to read from.
        dest: Stream to write to.
        max_len: Maximum number of bytes to copy; -1 copies everything.

    Returns:
        Number of bytes written to dest.

    Copying stops early when dest accepts nothing (a full BufferStream).
    """
    chunk_size = get_config().copy_chunk_size
    copied = 0

    if max_len == -1:
        while not source.eof():
            written = dest.write(source.read(chunk_size))
            if not written:
                break
            copied += written
    else:
        remaining = max_len
        while remaining > 0 and not source.eof():
            buf = source.read(min(chunk_size, remaining))
            if not buf:
                break
            remaining -= len(buf)
            written = dest.write(buf)
            if not written:
                break
            copied += written

    logger.debug(f"Copied {copied} bytes between streams")
    return copied


def copy_to_string(stream: StreamInterface, max_len: int = -1) -> bytes:
    """
    Read up to max_len bytes from stream (-1 reads to the end).

    The name follows the stream-to-string idiom; the result is bytes.
    """
    chunk_size = get_config().read_chunk_size
    buffer = bytearray()

    if max_len == -1:
        while not stream.eof():
            buf = stream.read(chunk_size)
            if not buf:
                break
            buffer.extend(buf)
        return bytes(buffer)

    remaining = max_len
    while remaining > 0 and not stream.eof():
        buf = stream.read(min(chunk_size, remaining))
        if not buf:
            break
        remaining -= len(buf)
        buffer.extend(buf)
    return bytes(buffer)
