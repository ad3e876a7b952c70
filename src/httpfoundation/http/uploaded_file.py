"""
=============================================================================
UPLOADED FILES
=============================================================================

One file from a multipart/form-data upload.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   UploadedFile("/tmp/upload-a1b2", 1024, UploadStatus.OK,           │
    │                client_filename="report.pdf",                        │
    │                client_media_type="application/pdf")                 │
    │                                                                      │
    │   get_stream()   → LazyOpenStream over the temp file                │
    │   move_to(path)  → file lands at path; the upload is then spent     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The client filename and media type are whatever the client sent; treat
them as untrusted.

=============================================================================
"""

import io
import logging
import os
import shutil
from enum import IntEnum
from typing import Any, Optional, Union

from ..core import LazyOpenStream, Stream, StreamInterface
from ..errors import InvalidArgumentError, StreamError, UploadError
from ..helpers import copy_to_stream

logger = logging.getLogger(__name__)


class UploadStatus(IntEnum):
    """Upload error codes as reported by the form parser; 5 is unassigned."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


class UploadedFile:
    """
    A file received in an upload.

    The source is either a path on disk or an open stream. A path is
    moved on move_to(); a stream is copied to the target.
    """

    def __init__(
        self,
        stream_or_file: Union[str, os.PathLike, io.IOBase, StreamInterface, None],
        size: Optional[int],
        error: int,
        client_filename: Optional[str] = None,
        client_media_type: Optional[str] = None,
    ):
        self._error = self._filter_error(error)
        self._size = self._filter_size(size)
        self._client_filename = self._filter_optional_str(client_filename, "client filename")
        self._client_media_type = self._filter_optional_str(client_media_type, "client media type")

        self._file: Optional[str] = None
        self._stream: Optional[StreamInterface] = None
        self._moved = False

        if self.is_ok:
            self._set_source(stream_or_file)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @staticmethod
    def _filter_error(error: Any) -> UploadStatus:
        if isinstance(error, bool) or not isinstance(error, int):
            raise InvalidArgumentError("Upload file error status must be an integer")
        try:
            return UploadStatus(error)
        except ValueError:
            raise InvalidArgumentError(f"Invalid error status for UploadedFile: {error}") from None

    @staticmethod
    def _filter_size(size: Any) -> Optional[int]:
        if size is None:
            return None
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidArgumentError("Upload file size must be an integer")
        return size

    @staticmethod
    def _filter_optional_str(value: Any, label: str) -> Optional[str]:
        if value is not None and not isinstance(value, str):
            raise InvalidArgumentError(f"Upload file {label} must be a string or None")
        return value

    def _set_source(self, source: Any) -> None:
        if isinstance(source, (str, os.PathLike)):
            self._file = os.fspath(source)
        elif isinstance(source, StreamInterface):
            self._stream = source
        elif isinstance(source, io.IOBase) and not isinstance(source, io.TextIOBase):
            self._stream = Stream(source)
        else:
            raise InvalidArgumentError("Invalid stream or file provided for UploadedFile")

    def _validate_active(self) -> None:
        if not self.is_ok:
            raise UploadError("Cannot retrieve stream due to upload error")
        if self._moved:
            raise UploadError("Cannot retrieve stream after it has already been moved")

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def is_ok(self) -> bool:
        return self._error == UploadStatus.OK

    @property
    def is_moved(self) -> bool:
        return self._moved

    @property
    def size(self) -> Optional[int]:
        return self._size

    @property
    def error(self) -> UploadStatus:
        return self._error

    @property
    def client_filename(self) -> Optional[str]:
        return self._client_filename

    @property
    def client_media_type(self) -> Optional[str]:
        return self._client_media_type

    def get_stream(self) -> StreamInterface:
        """
        Stream over the uploaded content.

        Raises:
            UploadError: If the upload failed or the file was moved.
        """
        self._validate_active()

        if self._stream is not None:
            return self._stream
        return LazyOpenStream(self._file, "r+b")

    def move_to(self, target_path: Union[str, os.PathLike]) -> None:
        """
        Move the upload to target_path. Can be called once.

        Args:
            target_path: Destination file path.

        Raises:
            InvalidArgumentError: If target_path is empty.
            UploadError: If the upload failed, was already moved, or the
                move itself failed.
        """
        self._validate_active()

        if not isinstance(target_path, (str, os.PathLike)) or not os.fspath(target_path):
            raise InvalidArgumentError("Invalid path provided for move operation; must be a non-empty string")
        target = os.fspath(target_path)

        if self._file is not None:
            try:
                shutil.move(self._file, target)
            except OSError as e:
                raise UploadError(f"Uploaded file could not be moved to {target}: {e}") from e
        else:
            dest = LazyOpenStream(target, "wb")
            try:
                copy_to_stream(self.get_stream(), dest)
            except StreamError as e:
                raise UploadError(f"Uploaded file could not be moved to {target}: {e}") from e
            finally:
                dest.close()

        self._moved = True
        logger.info(f"Uploaded file {self._client_filename or '<unnamed>'} moved to {target}")

    def __repr__(self) -> str:
        return f"<UploadedFile {self._client_filename!r} {self._error.name}>"
