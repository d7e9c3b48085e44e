"""Shared utilities for the headless renderer.

This module provides the configuration objects, exception hierarchy, commit
metrics and logging helpers used by every layer of the renderer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    EngineConfig,
    GlobalConfig,
    RendererConfig,
)
from .exceptions import (
    InvariantViolation,
    RendererError,
    SchedulingError,
    ValidationError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import CommitMetrics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "EngineConfig",
    "GlobalConfig",
    "RendererConfig",
    "InvariantViolation",
    "RendererError",
    "SchedulingError",
    "ValidationError",
    "CorrelationLogger",
    "get_logger",
    "CommitMetrics",
]
