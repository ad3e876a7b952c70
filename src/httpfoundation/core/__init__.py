"""
=============================================================================
STREAM PLUMBING
=============================================================================

Body streams used by the message layer:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          STREAM TYPES                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   StreamInterface      abstract base, defines the operations        │
    │   ├── Stream           binary file object (file, BytesIO, ...)      │
    │   ├── BufferStream     FIFO in memory, high water mark              │
    │   ├── PumpStream       chunks pulled from a callable                │
    │   └── StreamDecorator  forwards to an inner stream                  │
    │       └── LazyOpenStream   opens a file on first use                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .stream import Stream, StreamInterface, try_fopen
from .buffer_stream import BufferStream
from .pump_stream import PumpStream
from .lazy_open_stream import LazyOpenStream, StreamDecorator

__all__ = [
    "StreamInterface",
    "Stream",
    "BufferStream",
    "PumpStream",
    "StreamDecorator",
    "LazyOpenStream",
    "try_fopen",
]
