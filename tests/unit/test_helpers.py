"""
Unit tests for stream_for, copy_to_stream and copy_to_string.
"""

import io

import pytest

from httpfoundation import (
    BufferStream,
    FoundationConfig,
    InvalidArgumentError,
    PumpStream,
    Stream,
    copy_to_stream,
    copy_to_string,
    set_config,
    stream_for,
)


class Greeting:
    def __str__(self) -> str:
        return "hi there"


class TestStreamFor:
    """Tests for stream_for()."""

    def test_default_is_empty(self):
        assert bytes(stream_for()) == b""
        assert bytes(stream_for(None)) == b""

    @pytest.mark.parametrize("resource, expected", [
        (b"raw", b"raw"),
        (bytearray(b"array"), b"array"),
        ("héllo", "héllo".encode("utf-8")),
        (42, b"42"),
        (1.5, b"1.5"),
        (Greeting(), b"hi there"),
    ])
    def test_scalar_resources(self, resource, expected):
        stream = stream_for(resource)

        assert isinstance(stream, Stream)
        assert stream.tell() == 0
        assert bytes(stream) == expected

    def test_stream_passes_through(self):
        stream = BufferStream()
        assert stream_for(stream) is stream

    def test_file_object(self):
        stream = stream_for(io.BytesIO(b"file data"))
        assert stream.get_contents() == b"file data"

    def test_iterables_become_pump_streams(self):
        for resource in ([b"a", "b"], iter([b"a", "b"]), (chunk for chunk in (b"a", b"b"))):
            stream = stream_for(resource)
            assert isinstance(stream, PumpStream)
            assert stream.get_contents() == b"ab"

    def test_callable_becomes_pump_stream(self):
        data = [b"x", b"y"]
        stream = stream_for(lambda length: data.pop(0) if data else None)

        assert isinstance(stream, PumpStream)
        assert stream.get_contents() == b"xy"

    def test_size_and_metadata(self):
        stream = stream_for(b"abc", size=10, metadata={"uri": "memory://x"})

        assert stream.get_size() == 10
        assert stream.get_metadata("uri") == "memory://x"

    def test_invalid_resource(self):
        with pytest.raises(InvalidArgumentError):
            stream_for(object())


class TestCopyToStream:
    """Tests for copy_to_stream()."""

    def test_copies_everything(self):
        source = stream_for(b"x" * 20000)
        dest = Stream(io.BytesIO())

        assert copy_to_stream(source, dest) == 20000
        assert bytes(dest) == b"x" * 20000

    def test_max_len(self):
        source = stream_for(b"0123456789")
        dest = Stream(io.BytesIO())

        assert copy_to_stream(source, dest, max_len=4) == 4
        assert bytes(dest) == b"0123"
        assert source.tell() == 4

    def test_small_chunks_from_config(self):
        set_config(FoundationConfig(copy_chunk_size=3))
        dest = Stream(io.BytesIO())

        assert copy_to_stream(stream_for(b"abcdefgh"), dest) == 8
        assert bytes(dest) == b"abcdefgh"

    def test_stops_when_destination_is_full(self):
        source = stream_for(b"x" * 20000)
        dest = BufferStream(high_water_mark=16384)

        assert copy_to_stream(source, dest) == 16384
        assert dest.get_size() == 16384

    def test_from_pump_stream(self):
        dest = Stream(io.BytesIO())
        copy_to_stream(stream_for([b"one", b"two"]), dest)
        assert bytes(dest) == b"onetwo"


class TestCopyToString:
    """Tests for copy_to_string()."""

    def test_reads_rest_of_stream(self, hello_stream: Stream):
        hello_stream.read(6)
        assert copy_to_string(hello_stream) == b"world"

    def test_max_len(self, hello_stream: Stream):
        assert copy_to_string(hello_stream, max_len=5) == b"hello"
        assert copy_to_string(hello_stream, max_len=100) == b" world"

    def test_non_seekable_source(self):
        assert copy_to_string(stream_for(iter([b"a", b"b", b"c"]))) == b"abc"
