"""
Read-only stream fed by a callable.

The source is called with the number of bytes wanted and returns a chunk
of bytes (any length), or None / b"" when there is nothing more:

    chunks = iter([b"hello ", b"world"])
    stream = PumpStream(lambda length: next(chunks, None))

    stream.read(3)          # b"hel"
    stream.get_contents()   # b"lo world"

Chunks larger than requested are kept in an internal buffer for the next
read(). The stream can't be written or seeked.
"""

import io
from typing import Any, Callable, Dict, Optional, Union

from ..errors import InvalidArgumentError, StreamError
from .stream import Data, StreamInterface


PumpSource = Callable[[int], Optional[Union[bytes, str]]]

_DRAIN_CHUNK = 8192


class PumpStream(StreamInterface):
    """Stream that pulls its data from a source callable on demand."""

    def __init__(
        self,
        source: PumpSource,
        size: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if not callable(source):
            raise InvalidArgumentError("PumpStream source must be callable")

        self._source: Optional[PumpSource] = source
        self._size = size
        self._metadata: Dict[str, Any] = dict(metadata or {})
        self._buffer = bytearray()
        self._position = 0

    def close(self) -> None:
        self.detach()

    def detach(self) -> None:
        self._source = None
        self._buffer = bytearray()
        return None

    def get_size(self) -> Optional[int]:
        return self._size

    def tell(self) -> int:
        return self._position

    def eof(self) -> bool:
        return self._source is None and not self._buffer

    def seekable(self) -> bool:
        return False

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        raise StreamError("Cannot seek a PumpStream")

    def writable(self) -> bool:
        return False

    def write(self, data: Data) -> int:
        raise StreamError("Cannot write to a PumpStream")

    def readable(self) -> bool:
        return True

    def read(self, length: int) -> bytes:
        if length < 0:
            raise StreamError("Length parameter cannot be negative")

        if len(self._buffer) < length:
            self._pump(length - len(self._buffer))

        data = bytes(self._buffer[:length])
        del self._buffer[:length]
        self._position += len(data)
        return data

    def get_contents(self) -> bytes:
        result = bytearray()
        while not self.eof():
            result.extend(self.read(_DRAIN_CHUNK))
        return bytes(result)

    def get_metadata(self, key: Optional[str] = None) -> Any:
        if not key:
            return dict(self._metadata)
        return self._metadata.get(key)

    def _pump(self, length: int) -> None:
        while length > 0 and self._source is not None:
            chunk = self._source(length)
            if not chunk:
                self._source = None
                return

            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            self._buffer.extend(chunk)
            length -= len(chunk)
