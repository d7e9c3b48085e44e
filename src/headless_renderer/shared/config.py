"""Configuration classes for the headless renderer.

This module provides configuration objects for the reconciliation engine and
the renderer as a whole, with presets for development and production use.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class EngineConfig:
    """Configuration for the reconciliation engine."""

    # Commit scheduling
    deferred_updates: bool = False

    # Structural limits and checks
    max_tree_depth: int = 1000
    verify_after_commit: bool = False

    def __post_init__(self) -> None:
        """Validate engine configuration."""
        if self.max_tree_depth <= 0:
            raise ValueError("max_tree_depth must be > 0")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    # Logging and diagnostics
    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True
    collect_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_COMPONENTS = ["engine", "global_"]


@dataclass(frozen=True)
class RendererConfig:
    """Complete configuration for a headless renderer.

    Immutable; derive variants with :meth:`override` or the preset factories.
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    correlation_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete renderer configuration."""
        try:
            self.engine.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "RendererConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; ``component__field`` addresses a
                field of a nested component configuration

        Returns:
            New RendererConfig instance with overrides applied

        Example:
            >>> config = RendererConfig()
            >>> new_config = config.override(
            ...     engine__deferred_updates=True,
            ...     correlation_id="worker-1"
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                # "global_" ends in an underscore, so match known prefixes first
                component = next(
                    (name for name in _COMPONENTS if key.startswith(f"{name}__")),
                    key.split("__", 1)[0],
                )
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                    )
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENTS:
            current_config = getattr(self, component)
            if component in nested_overrides:
                try:
                    new_fields[component] = replace(
                        current_config, **nested_overrides[component]
                    )
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=component) from e
            else:
                new_fields[component] = current_config

        for key, value in nested_overrides.items():
            if key not in _COMPONENTS:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            """Recursively convert dataclass to dict."""
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RendererConfig":
        """Create configuration from dictionary.

        Args:
            data: Dictionary in the shape produced by :meth:`to_dict`

        Returns:
            RendererConfig instance created from dictionary
        """
        try:
            return cls(
                engine=EngineConfig(**data.get("engine", {})),
                global_=GlobalConfig(**data.get("global_", {})),
                correlation_id=data.get("correlation_id"),
                name=data.get("name"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid configuration data: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "RendererConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def development(cls) -> "RendererConfig":
        """Create preset that verifies tree invariants after every commit."""
        return cls(
            engine=EngineConfig(verify_after_commit=True),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="development",
        )

    @classmethod
    def production(cls) -> "RendererConfig":
        """Create preset with no extra checking and quiet logging."""
        return cls(
            engine=EngineConfig(verify_after_commit=False),
            global_=GlobalConfig(logging_level="WARNING", collect_metrics=False),
            name="production",
        )

    @classmethod
    def deferred(cls) -> "RendererConfig":
        """Create preset that commits through the deferred scheduling hook."""
        return cls(
            engine=EngineConfig(deferred_updates=True),
            name="deferred",
        )
