"""Configuration classes for the xmlx node tree.

This module provides configuration objects for tree building, parser
backends, structured decoding and logging.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

BACKENDS = ("elementtree", "lxml")
LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COMPONENTS = ("tree", "decoding", "global_")


@dataclass
class TreeConfig:
    """Configuration for building node trees from parser events."""

    trim_text: bool = True
    keep_comments: bool = True
    keep_processing_instructions: bool = True
    keep_directives: bool = True

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        for name in (
            "trim_text",
            "keep_comments",
            "keep_processing_instructions",
            "keep_directives",
        ):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a bool")


@dataclass
class DecodingConfig:
    """Configuration for parser backend and structured decoder selection."""

    backend: str = "elementtree"
    default_decoder: str = "elementtree"

    def __post_init__(self) -> None:
        """Validate decoding configuration."""
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {list(BACKENDS)}")
        if not self.default_decoder:
            raise ValueError("default_decoder cannot be empty")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "INFO"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {list(LOGGING_LEVELS)}")


def _split_override_key(key: str) -> Tuple[str, str]:
    # "global___logging_level" belongs to "global_", not "global"
    for component in _COMPONENTS:
        if key.startswith(component + "__"):
            return component, key[len(component) + 2:]
    component, _, field_name = key.partition("__")
    return component, field_name


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration for tree building, parsing and decoding.

    Thread-safe due to frozen dataclass implementation. Component configs are
    replaced, never mutated, by ``override``.
    """

    tree: TreeConfig = field(default_factory=TreeConfig)
    decoding: DecodingConfig = field(default_factory=DecodingConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.tree.__post_init__()
            self.decoding.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; ``component__field`` addresses a field
                of a component configuration

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig()
            >>> new_config = config.override(
            ...     tree__trim_text=False,
            ...     decoding__backend="lxml",
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = _split_override_key(key)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component in _COMPONENTS:
                current = getattr(self, component)
                overrides = nested_overrides.pop(component, None)
                if isinstance(overrides, dict):
                    new_fields[component] = replace(current, **overrides)
                elif overrides is not None:
                    new_fields[component] = overrides
            new_fields.update(nested_overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            if isinstance(obj, dict):
                return {key: _dataclass_to_dict(value) for key, value in obj.items()}
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored so that newer dumps load on older versions.
        """
        components = {
            "tree": TreeConfig,
            "decoding": DecodingConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        try:
            for name in cls.__dataclass_fields__:
                if name not in data:
                    continue
                value = data[name]
                component_class = components.get(name)
                if component_class is not None:
                    known = {
                        key: item for key, item in value.items()
                        if key in component_class.__dataclass_fields__
                    }
                    field_values[name] = component_class(**known)
                else:
                    field_values[name] = value
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigValidationError(
                f"Failed to deserialize to {cls.__name__}: {e}"
            ) from e
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def faithful(cls) -> "ParserConfig":
        """Preset keeping every node kind and the untrimmed text."""
        return cls(
            tree=TreeConfig(trim_text=False),
            name="faithful",
        )

    @classmethod
    def elements_only(cls) -> "ParserConfig":
        """Preset dropping comments, processing instructions and directives."""
        return cls(
            tree=TreeConfig(
                keep_comments=False,
                keep_processing_instructions=False,
                keep_directives=False,
            ),
            name="elements_only",
        )
