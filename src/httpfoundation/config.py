"""
=============================================================================
LIBRARY CONFIGURATION
=============================================================================

Centralized tunables for the message layer.

The URI rules themselves (default ports, the "localhost" placeholder host)
are fixed by RFC 3986 and are NOT configurable. What can be tuned
is the plumbing around them:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       CONFIGURATION GROUPS                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   MESSAGES                                                          │
    │     protocol_version        default for new requests/responses      │
    │                                                                      │
    │   STREAMS                                                           │
    │     buffer_high_water_mark  BufferStream refuses writes past this  │
    │     copy_chunk_size         chunk size for copy_to_stream          │
    │     read_chunk_size         chunk size for copy_to_string          │
    │                                                                      │
    │   LOGGING                                                           │
    │     log_level               used by setup_logging() and the CLI    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Priority (highest to lowest):

    1. set_config(FoundationConfig(...)) from code
    2. Environment variables (FoundationConfig.from_env())
    3. Defaults below

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


SUPPORTED_PROTOCOL_VERSIONS = ("1.0", "1.1", "2", "2.0", "3")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FoundationConfig:
    """
    Configuration for the message and stream layer.

    Development:
        FoundationConfig(log_level="DEBUG")

    Large bodies:
        FoundationConfig(copy_chunk_size=64 * 1024, buffer_high_water_mark=1 << 20)
    """

    # ─────────────────────────────────────────────────────────────────────
    # MESSAGES
    # ─────────────────────────────────────────────────────────────────────

    protocol_version: str = "1.1"
    """HTTP version given to messages that don't specify one."""

    # ─────────────────────────────────────────────────────────────────────
    # STREAMS
    # ─────────────────────────────────────────────────────────────────────

    buffer_high_water_mark: int = 16384
    """
    Size in bytes at which a BufferStream reports itself full.
    Writes past this point return 0 so producers can back off.
    """

    copy_chunk_size: int = 8192
    """Bytes read per iteration when copying one stream into another."""

    read_chunk_size: int = 1024 * 1024
    """Bytes read per iteration when draining a stream into memory."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows every stream open, close and copy.
    """

    @classmethod
    def from_env(cls) -> "FoundationConfig":
        """
        Create configuration from environment variables.

        HTTPFOUNDATION_PROTOCOL_VERSION  Default HTTP version (default: 1.1)
        HTTPFOUNDATION_BUFFER_HWM        BufferStream high water mark (default: 16384)
        HTTPFOUNDATION_COPY_CHUNK        copy_to_stream chunk size (default: 8192)
        HTTPFOUNDATION_READ_CHUNK        copy_to_string chunk size (default: 1048576)
        HTTPFOUNDATION_LOG_LEVEL         Logging level (default: WARNING)
        """
        return cls(
            protocol_version=os.getenv("HTTPFOUNDATION_PROTOCOL_VERSION", "1.1"),
            buffer_high_water_mark=int(os.getenv("HTTPFOUNDATION_BUFFER_HWM", "16384")),
            copy_chunk_size=int(os.getenv("HTTPFOUNDATION_COPY_CHUNK", "8192")),
            read_chunk_size=int(os.getenv("HTTPFOUNDATION_READ_CHUNK", str(1024 * 1024))),
            log_level=os.getenv("HTTPFOUNDATION_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Fail fast: a bad chunk size should surface here, not halfway
        through copying a request body.
        """
        if self.protocol_version not in SUPPORTED_PROTOCOL_VERSIONS:
            raise ValueError(
                f"Invalid protocol_version: {self.protocol_version!r}. "
                f"Must be one of {', '.join(SUPPORTED_PROTOCOL_VERSIONS)}."
            )

        if self.buffer_high_water_mark < 1:
            raise ValueError("buffer_high_water_mark must be >= 1")

        if self.copy_chunk_size < 1:
            raise ValueError("copy_chunk_size must be >= 1")

        if self.read_chunk_size < 1:
            raise ValueError("read_chunk_size must be >= 1")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level!r}")


# =============================================================================
# ACTIVE CONFIGURATION
# =============================================================================
#
# Library code reads the active config through get_config() at call time,
# so set_config() takes effect for everything created afterwards.
#

_active_config: Optional[FoundationConfig] = None


def get_config() -> FoundationConfig:
    """Return the active configuration, read from the environment on first use."""
    global _active_config
    if _active_config is None:
        config = FoundationConfig.from_env()
        config.validate()
        _active_config = config
    return _active_config


def set_config(config: Optional[FoundationConfig]) -> None:
    """
    Replace the active configuration.

    The config is validated first; passing None makes the next get_config() read the environment again.
    """
    global _active_config
    if config is not None:
        config.validate()
    _active_config = config


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for applications and the CLI.

    The library itself never installs handlers; it only logs to the
    "httpfoundation" logger hierarchy.
    """
    level_name = (level or get_config().log_level).upper()
    numeric = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpfoundation").setLevel(numeric)
