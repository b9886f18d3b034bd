"""
Core infrastructure module for the diagram model.

Provides logging, tracing and metrics.
"""

from .observability import (
    LogLevel,
    ObservabilityConfig,
    ObservabilityManager,
    Timer,
    record_metric,
)

__all__ = [
    "LogLevel",
    "ObservabilityConfig",
    "ObservabilityManager",
    "Timer",
    "record_metric",
]
