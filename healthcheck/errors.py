"""Exceptions and warnings raised by the health check registry."""

from __future__ import annotations


class HealthCheckError(Exception):
    """Base class for registry errors."""


class UsageError(HealthCheckError):
    """Raised when an instance-only operation is called on the class."""


class ConfigurationError(HealthCheckError):
    """Raised when a check cannot be registered or the registry cannot run."""


class InvalidResultWarning(UserWarning):
    """Emitted when a check returns something that is not a result record."""
