"""Exceptions raised by mvndeps."""

from typing import Optional


class DependencyPluginError(Exception):
    """Base class for all mvndeps errors."""


class ConfigurationError(DependencyPluginError):
    """Invalid or self-contradictory filter or goal configuration."""


class ResolutionError(DependencyPluginError):
    """An artifact coordinate could not be resolved."""

    def __init__(self, coordinate, message: Optional[str] = None):
        self.coordinate = coordinate
        super().__init__(message or f"error resolving: {coordinate}")


class SerializationIOError(DependencyPluginError):
    """The output sink could not be written."""

    def __init__(self, path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot write to {path}: {cause}")


class VersionParseError(DependencyPluginError):
    """A version or version range string could not be parsed."""
