"""Exception types raised by the designer and its collaborators."""

from __future__ import annotations


class SpeakerboxError(Exception):
    """Base class for errors raised by ``speakerbox_core``."""


class UnsupportedTopologyError(SpeakerboxError, ValueError):
    """Raised when a topology outside the supported set is requested."""

    def __init__(self, topology: object) -> None:
        super().__init__(f"Unsupported enclosure topology: {topology!r}")
        self.topology = topology


class ConfigError(SpeakerboxError, ValueError):
    """Raised when a configuration file holds a value that cannot be parsed."""


__all__ = ["SpeakerboxError", "UnsupportedTopologyError", "ConfigError"]
