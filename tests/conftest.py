"""
pytest configuration and fixtures.
"""

import io
from typing import Generator

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpfoundation import Stream, set_config


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    """Every test starts from the environment/default configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /api/users?page=1&limit=10 HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with JSON body."""
    body = b'{"name": "John", "email": "john@example.com"}'
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        b"Content-Length: %d\r\n"
        b"\r\n" % len(body)
    ) + body


@pytest.fixture
def sample_response() -> bytes:
    """Sample HTTP response with a repeated header."""
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"Set-Cookie: a=1\r\n"
        b"Set-Cookie: b=2\r\n"
        b"\r\n"
        b"hello"
    )


@pytest.fixture
def hello_stream() -> Stream:
    """Seekable in-memory stream holding b"hello world"."""
    return Stream(io.BytesIO(b"hello world"))
