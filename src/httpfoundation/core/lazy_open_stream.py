"""
Stream decorators.

StreamDecorator forwards every operation to an inner stream. The inner
stream can be passed in, or created on first use by _create_stream():

    class LazyOpenStream(StreamDecorator):
        def _create_stream(self):
            return Stream(try_fopen(self.filename, self.mode))

LazyOpenStream uses this to avoid opening a file (and holding a file
descriptor) until a body is actually read or written.
"""

import io
import logging
import os
from typing import Any, Optional, Union

from .stream import Data, Stream, StreamInterface, try_fopen


logger = logging.getLogger(__name__)


class StreamDecorator(StreamInterface):
    """Forwards all stream operations to a (possibly lazily created) inner stream."""

    def __init__(self, stream: Optional[StreamInterface] = None):
        self._stream = stream

    @property
    def stream(self) -> StreamInterface:
        if self._stream is None:
            self._stream = self._create_stream()
        return self._stream

    def _create_stream(self) -> StreamInterface:
        raise NotImplementedError(f"{type(self).__name__} has no stream to decorate")

    def close(self) -> None:
        # Closing a stream that was never opened must not open it
        if self._stream is not None:
            self._stream.close()

    def detach(self) -> Optional[Any]:
        if self._stream is None:
            return None
        return self._stream.detach()

    def get_size(self) -> Optional[int]:
        return self.stream.get_size()

    def tell(self) -> int:
        return self.stream.tell()

    def eof(self) -> bool:
        return self.stream.eof()

    def seekable(self) -> bool:
        return self.stream.seekable()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        self.stream.seek(offset, whence)

    def writable(self) -> bool:
        return self.stream.writable()

    def write(self, data: Data) -> int:
        return self.stream.write(data)

    def readable(self) -> bool:
        return self.stream.readable()

    def read(self, length: int) -> bytes:
        return self.stream.read(length)

    def get_contents(self) -> bytes:
        return self.stream.get_contents()

    def get_metadata(self, key: Optional[str] = None) -> Any:
        return self.stream.get_metadata(key)


class LazyOpenStream(StreamDecorator):
    """
    File stream that opens the file on first use.

    Args:
        filename: File to open.
        mode: open() mode, e.g. "rb", "r+b", "wb".

    Raises (on first use):
        StreamError: If the file can't be opened.
    """

    def __init__(self, filename: Union[str, "os.PathLike[str]"], mode: str):
        super().__init__()
        self.filename = filename
        self.mode = mode

    @property
    def opened(self) -> bool:
        return self._stream is not None

    def _create_stream(self) -> StreamInterface:
        logger.debug(f"Lazily opening {self.filename} ({self.mode})")
        return Stream(try_fopen(self.filename, self.mode))

    def __repr__(self) -> str:
        return f"<LazyOpenStream {self.filename} mode={self.mode} opened={self.opened}>"
