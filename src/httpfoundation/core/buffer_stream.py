"""
In-memory FIFO stream.

Bytes written to a BufferStream are appended at the end and consumed from
the front by read(). It is not seekable: once read, data is gone.

The high water mark lets a producer back off: when the buffer already
holds at least that many bytes, write() stores nothing and returns 0.

    buffer = BufferStream(high_water_mark=4)
    buffer.write(b"abcdef")   # 6  (buffer was below the mark)
    buffer.write(b"gh")       # 0  (buffer is full)
    buffer.read(2)            # b"ab"
"""

import io
from typing import Any, Optional

from ..config import get_config
from ..errors import StreamError
from .stream import Data, StreamInterface, _to_bytes


class BufferStream(StreamInterface):
    """Read/write FIFO buffer with a high water mark."""

    def __init__(self, high_water_mark: Optional[int] = None):
        if high_water_mark is None:
            high_water_mark = get_config().buffer_high_water_mark
        self._hwm = high_water_mark
        self._buffer = bytearray()

    def close(self) -> None:
        self._buffer = bytearray()

    def detach(self) -> None:
        self.close()
        return None

    def get_size(self) -> int:
        return len(self._buffer)

    def tell(self) -> int:
        raise StreamError("Cannot determine the position of a BufferStream")

    def eof(self) -> bool:
        return len(self._buffer) == 0

    def seekable(self) -> bool:
        return False

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        raise StreamError("Cannot seek a BufferStream")

    def writable(self) -> bool:
        return True

    def write(self, data: Data) -> int:
        """Append data; returns 0 without storing anything when full."""
        if self.is_full():
            return 0

        payload = _to_bytes(data)
        self._buffer.extend(payload)
        return len(payload)

    def is_full(self) -> bool:
        return len(self._buffer) >= self._hwm

    def readable(self) -> bool:
        return True

    def read(self, length: int) -> bytes:
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise StreamError(f"Invalid read length: {length!r}")

        if length == 0:
            return b""

        result = bytes(self._buffer[:length])
        del self._buffer[:length]
        return result

    def get_contents(self) -> bytes:
        result = bytes(self._buffer)
        self._buffer = bytearray()
        return result

    def get_metadata(self, key: Optional[str] = None) -> Any:
        if key == "hwm":
            return self._hwm
        return None if key else {"hwm": self._hwm}
