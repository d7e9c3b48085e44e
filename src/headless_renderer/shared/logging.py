"""Structured logging utilities for the headless renderer.

Every record carries the emitting component and the renderer's correlation
ID, so the renders and commits of one renderer can be traced through shared
handlers. Levels of the underlying loggers are left to the application; a
renderer's configured ``logging_level`` only gates the records that renderer
emits.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Renderer-scoped view of a standard logger.

    Records below ``level`` are dropped before they reach the standard
    logger, so two renderers with different levels can share one logger
    name without touching its configuration.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
        level: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for tracing one renderer
            component: Component name for structured logging
            level: Minimum level name this view emits; ``None`` emits everything
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split('.')[-1]
        self.level = getattr(logging, level) if level else logging.NOTSET

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool
    ) -> None:
        if level < self.level:
            return
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        self.logger.log(level, message, extra=combined_extra, exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra, False)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra, False)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra, False)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log an error, with the active exception's traceback by default."""
        self._log(logging.ERROR, message, extra, exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None,
    level: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for tracing one renderer
        component: Component name for structured logging
        level: Minimum level name the returned logger emits

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component, level)
