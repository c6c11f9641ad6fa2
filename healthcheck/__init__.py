"""Health check aggregator — register checks, run them, fold the results."""

from .core import CheckEntry, CheckSource, HasDefaultTags, HealthCheck, ResultRecord, Status
from .errors import ConfigurationError, HealthCheckError, InvalidResultWarning, UsageError

__all__ = [
    "CheckEntry",
    "CheckSource",
    "ConfigurationError",
    "HasDefaultTags",
    "HealthCheck",
    "HealthCheckError",
    "InvalidResultWarning",
    "ResultRecord",
    "Status",
    "UsageError",
]
