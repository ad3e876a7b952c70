"""
Unit tests for UploadedFile.
"""

import io
import logging
from pathlib import Path

import pytest

from httpfoundation import (
    InvalidArgumentError,
    LazyOpenStream,
    UploadedFile,
    UploadError,
    UploadStatus,
    stream_for,
)


@pytest.fixture
def temp_upload(tmp_path: Path) -> Path:
    path = tmp_path / "upload.tmp"
    path.write_bytes(b"uploaded content")
    return path


class TestUploadedFileConstruction:
    """Tests for argument validation and accessors."""

    def test_accessors(self, temp_upload: Path):
        upload = UploadedFile(str(temp_upload), 16, UploadStatus.OK, "report.pdf", "application/pdf")

        assert upload.size == 16
        assert upload.error == UploadStatus.OK
        assert upload.error == 0
        assert upload.client_filename == "report.pdf"
        assert upload.client_media_type == "application/pdf"
        assert not upload.is_moved

    def test_plain_int_error_code(self):
        upload = UploadedFile(None, 0, 4)
        assert upload.error is UploadStatus.NO_FILE

    @pytest.mark.parametrize("error", [5, 9, -1, "0", True, None])
    def test_invalid_error_code(self, error):
        with pytest.raises(InvalidArgumentError):
            UploadedFile(None, 0, error)

    @pytest.mark.parametrize("size", ["10", 1.5, True])
    def test_invalid_size(self, size):
        with pytest.raises(InvalidArgumentError):
            UploadedFile(None, size, UploadStatus.NO_FILE)

    def test_invalid_client_metadata(self):
        with pytest.raises(InvalidArgumentError):
            UploadedFile(None, 0, UploadStatus.NO_FILE, client_filename=1)
        with pytest.raises(InvalidArgumentError):
            UploadedFile(None, 0, UploadStatus.NO_FILE, client_media_type=b"text/plain")

    def test_invalid_source_when_ok(self):
        with pytest.raises(InvalidArgumentError):
            UploadedFile(12345, 0, UploadStatus.OK)
        with pytest.raises(InvalidArgumentError):
            UploadedFile(io.StringIO("text"), 0, UploadStatus.OK)


class TestUploadedFileStream:
    """Tests for get_stream()."""

    def test_path_source_gives_lazy_stream(self, temp_upload: Path):
        upload = UploadedFile(temp_upload, 16, UploadStatus.OK)
        stream = upload.get_stream()

        assert isinstance(stream, LazyOpenStream)
        assert stream.get_contents() == b"uploaded content"
        stream.close()

    def test_stream_source_is_returned(self):
        body = stream_for(b"in memory")
        upload = UploadedFile(body, 9, UploadStatus.OK)

        assert upload.get_stream() is body

    def test_file_object_source(self):
        upload = UploadedFile(io.BytesIO(b"bytes"), 5, UploadStatus.OK)
        assert bytes(upload.get_stream()) == b"bytes"

    def test_failed_upload_has_no_stream(self):
        upload = UploadedFile(None, 0, UploadStatus.PARTIAL)

        with pytest.raises(UploadError):
            upload.get_stream()
        with pytest.raises(UploadError):
            upload.move_to("/tmp/anywhere")


class TestUploadedFileMove:
    """Tests for move_to()."""

    def test_move_path_source(self, temp_upload: Path, tmp_path: Path, caplog):
        target = tmp_path / "moved.bin"
        upload = UploadedFile(temp_upload, 16, UploadStatus.OK, "report.pdf")

        with caplog.at_level(logging.INFO, logger="httpfoundation"):
            upload.move_to(target)

        assert target.read_bytes() == b"uploaded content"
        assert not temp_upload.exists()
        assert upload.is_moved
        assert "moved to" in caplog.text

    def test_move_stream_source(self, tmp_path: Path):
        target = tmp_path / "copied.bin"
        upload = UploadedFile(stream_for(b"streamed"), 8, UploadStatus.OK)

        upload.move_to(str(target))

        assert target.read_bytes() == b"streamed"

    def test_cannot_use_after_move(self, temp_upload: Path, tmp_path: Path):
        upload = UploadedFile(temp_upload, 16, UploadStatus.OK)
        upload.move_to(tmp_path / "first.bin")

        with pytest.raises(UploadError):
            upload.move_to(tmp_path / "second.bin")
        with pytest.raises(UploadError):
            upload.get_stream()

    def test_empty_target(self, temp_upload: Path):
        upload = UploadedFile(temp_upload, 16, UploadStatus.OK)
        with pytest.raises(InvalidArgumentError):
            upload.move_to("")

    def test_move_failure(self, temp_upload: Path, tmp_path: Path):
        upload = UploadedFile(temp_upload, 16, UploadStatus.OK)

        with pytest.raises(UploadError):
            upload.move_to(tmp_path / "no" / "such" / "dir" / "file.bin")
        assert not upload.is_moved

    def test_stream_move_failure(self, tmp_path: Path):
        upload = UploadedFile(stream_for(b"data"), 4, UploadStatus.OK)

        with pytest.raises(UploadError):
            upload.move_to(tmp_path / "missing-dir" / "file.bin")
