"""
=============================================================================
STREAMS
=============================================================================

Message bodies are streams, not byte strings. A body may be a 2 GB file,
a socket-backed pipe or a generator of chunks; holding all of it in memory
is not an option.

=============================================================================
STREAM INTERFACE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        STREAM OPERATIONS                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Capabilities    readable()  writable()  seekable()                │
    │   Reading         read(n)  get_contents()  eof()                    │
    │   Writing         write(data)                                       │
    │   Positioning     tell()  seek(offset, whence)  rewind()            │
    │   Lifecycle       close()  detach()                                 │
    │   Introspection   get_size()  get_metadata(key)                     │
    │   Conversion      bytes(stream) - whole body from position 0        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Implementations in this package:

    Stream          - wraps a binary file object (open(), io.BytesIO, ...)
    BufferStream    - in-memory FIFO with a high water mark
    PumpStream      - pulls chunks from a callable or iterator
    LazyOpenStream  - opens a file on first use

=============================================================================
"""

import io
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional, Union

from ..errors import InvalidArgumentError, StreamError


logger = logging.getLogger(__name__)

Data = Union[bytes, bytearray, memoryview, str]


def _to_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidArgumentError("Stream data must be bytes or str")


class StreamInterface(ABC):
    """
    Abstract base for every body stream.

    Streams are also context managers; leaving the block closes them:

        with Stream(open("body.bin", "rb")) as body:
            chunk = body.read(1024)
    """

    @abstractmethod
    def close(self) -> None:
        """Close the stream and any underlying resource."""

    @abstractmethod
    def detach(self) -> Optional[Any]:
        """Separate the underlying resource from the stream and return it."""

    @abstractmethod
    def get_size(self) -> Optional[int]:
        """Size in bytes if known, else None."""

    @abstractmethod
    def tell(self) -> int:
        """Current position of the read/write pointer."""

    @abstractmethod
    def eof(self) -> bool:
        """True when the stream is at its end."""

    @abstractmethod
    def seekable(self) -> bool:
        ...

    @abstractmethod
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        """Move the pointer; whence follows io.SEEK_SET/SEEK_CUR/SEEK_END."""

    def rewind(self) -> None:
        """Seek to the beginning of the stream."""
        self.seek(0)

    @abstractmethod
    def writable(self) -> bool:
        ...

    @abstractmethod
    def write(self, data: Data) -> int:
        """Write data and return the number of bytes written."""

    @abstractmethod
    def readable(self) -> bool:
        ...

    @abstractmethod
    def read(self, length: int) -> bytes:
        """Read up to length bytes; fewer may be returned."""

    @abstractmethod
    def get_contents(self) -> bytes:
        """Read everything from the current position to the end."""

    @abstractmethod
    def get_metadata(self, key: Optional[str] = None) -> Any:
        """All metadata as a dict, or the value for key (None if unknown)."""

    def __bytes__(self) -> bytes:
        """
        Read the whole stream from the beginning.

        Never raises: a stream that can't be read converts to b"".
        """
        try:
            if self.seekable():
                self.seek(0)
            return self.get_contents()
        except StreamError:
            return b""

    def __enter__(self) -> "StreamInterface":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# =============================================================================
# MODE HELPERS
# =============================================================================
#
# Mode strings follow open(): "rb", "r+b", "wb", "ab", "xb", ...
#

def _mode_readable(mode: str) -> bool:
    return "r" in mode or "+" in mode


def _mode_writable(mode: str) -> bool:
    return any(flag in mode for flag in ("w", "+", "a", "x"))


def _probe(stream: Any, check: str, method: str) -> bool:
    """Ask stream.readable()/writable(), falling back to whether it has read/write."""
    probe = getattr(stream, check, None)
    if callable(probe):
        return bool(probe())
    return callable(getattr(stream, method, None))


def try_fopen(filename: Union[str, "os.PathLike[str]"], mode: str) -> BinaryIO:
    """
    Open a file in binary mode, turning OSError into StreamError.

    Args:
        filename: Path to open.
        mode: open() mode; "b" is added when missing.

    Raises:
        StreamError: If the file can't be opened.
    """
    if "b" not in mode:
        mode += "b"

    try:
        handle = open(filename, mode)
    except OSError as e:
        raise StreamError(f"Unable to open {filename} using mode {mode}: {e}") from e

    logger.debug(f"Opened {filename} with mode {mode}")
    return handle


class Stream(StreamInterface):
    """
    Stream over a binary file object.

    =========================================================================
    EXAMPLES
    =========================================================================

        Stream(io.BytesIO(b"hello"))            # in-memory body
        Stream(open("upload.bin", "rb"))        # file on disk
        Stream(fp, size=1024, metadata={"uri": "memory://body"})

    Readability and writability come from the file's mode when it has one
    ("rb" → read-only, "wb" → write-only, "r+b" → both), otherwise from its
    readable()/writable() methods.

    =========================================================================
    """

    def __init__(
        self,
        stream: BinaryIO,
        size: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if isinstance(stream, io.TextIOBase):
            raise InvalidArgumentError("Stream must be a binary file object, not a text file")
        if not (callable(getattr(stream, "read", None)) or callable(getattr(stream, "write", None))):
            raise InvalidArgumentError("Stream must be a file-like object")

        self._stream: Optional[BinaryIO] = stream
        self._size = size
        self._custom_metadata: Dict[str, Any] = dict(metadata or {})
        self._hit_eof = False

        self._seekable = bool(getattr(stream, "seekable", lambda: False)())

        mode = getattr(stream, "mode", None)
        if isinstance(mode, str) and mode:
            self._readable = _mode_readable(mode)
            self._writable = _mode_writable(mode)
        else:
            self._readable = _probe(stream, "readable", "read")
            self._writable = _probe(stream, "writable", "write")

        name = getattr(stream, "name", None)
        self._uri: Optional[str] = os.fspath(name) if isinstance(name, (str, os.PathLike)) else None

    def _validate(self) -> BinaryIO:
        if self._stream is None or getattr(self._stream, "closed", False):
            raise StreamError("Stream is detached")
        return self._stream

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        if self._stream is None:
            return

        handle = self.detach()
        if handle is not None and not getattr(handle, "closed", False):
            handle.close()
        logger.debug(f"Closed stream {self._describe()}")

    def detach(self) -> Optional[BinaryIO]:
        if self._stream is None:
            return None

        handle = self._stream
        self._stream = None
        self._size = None
        self._readable = self._writable = self._seekable = False
        return handle

    def _describe(self) -> str:
        return self._custom_metadata.get("uri") or self._uri or "<memory>"

    # =========================================================================
    # SIZE AND POSITION
    # =========================================================================

    def get_size(self) -> Optional[int]:
        if self._size is not None:
            return self._size

        if self._stream is None:
            return None

        handle = self._stream
        getbuffer = getattr(handle, "getbuffer", None)
        if callable(getbuffer):
            # io.BytesIO
            self._size = getbuffer().nbytes
            return self._size

        try:
            if self._writable:
                handle.flush()
            self._size = os.fstat(handle.fileno()).st_size
            return self._size
        except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
            pass

        if self._seekable:
            position = handle.tell()
            self._size = handle.seek(0, io.SEEK_END)
            handle.seek(position)
            return self._size

        return None

    def tell(self) -> int:
        handle = self._validate()
        try:
            return handle.tell()
        except (OSError, ValueError) as e:
            raise StreamError("Unable to determine stream position") from e

    def eof(self) -> bool:
        handle = self._validate()

        if self._seekable:
            size = self.get_size()
            if size is not None:
                return handle.tell() >= size

        return self._hit_eof

    def seekable(self) -> bool:
        return self._seekable

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        handle = self._validate()

        if not self._seekable:
            raise StreamError("Stream is not seekable")

        try:
            handle.seek(offset, whence)
        except (OSError, ValueError) as e:
            raise StreamError(
                f"Unable to seek to stream position {offset} with whence {whence}"
            ) from e
        self._hit_eof = False

    # =========================================================================
    # READ / WRITE
    # =========================================================================

    def writable(self) -> bool:
        return self._writable

    def write(self, data: Data) -> int:
        handle = self._validate()

        if not self._writable:
            raise StreamError("Cannot write to a non-writable stream")

        payload = _to_bytes(data)

        # The size is unknown again once anything has been written
        self._size = None
        try:
            written = handle.write(payload)
        except (OSError, ValueError) as e:
            raise StreamError("Unable to write to stream") from e

        return len(payload) if written is None else written

    def readable(self) -> bool:
        return self._readable

    def read(self, length: int) -> bytes:
        handle = self._validate()

        if not self._readable:
            raise StreamError("Cannot read from a non-readable stream")
        if length < 0:
            raise StreamError("Length parameter cannot be negative")
        if length == 0:
            return b""

        try:
            data = handle.read(length)
        except (OSError, ValueError) as e:
            raise StreamError("Unable to read from stream") from e

        if not data:
            self._hit_eof = True
            return b""
        return bytes(data)

    def get_contents(self) -> bytes:
        handle = self._validate()

        if not self._readable:
            raise StreamError("Cannot read from a non-readable stream")

        try:
            data = handle.read()
        except (OSError, ValueError) as e:
            raise StreamError("Unable to read stream contents") from e

        self._hit_eof = True
        return bytes(data or b"")

    # =========================================================================
    # METADATA
    # =========================================================================

    def get_metadata(self, key: Optional[str] = None) -> Any:
        """
        Stream metadata; custom entries override the native ones.

        Native keys: "mode", "seekable", "uri", "closed".
        """
        if self._stream is None:
            return None if key else {}

        metadata = {
            "mode": getattr(self._stream, "mode", None),
            "seekable": self._seekable,
            "uri": self._uri,
            "closed": bool(getattr(self._stream, "closed", False)),
        }
        metadata.update(self._custom_metadata)

        if not key:
            return metadata
        return metadata.get(key)

    def __repr__(self) -> str:
        return f"<Stream {self._describe()} size={self._size}>"
