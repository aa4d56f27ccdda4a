"""Shared utilities for the xmlx node tree.

This module provides configuration objects, diagnostic result types and
correlation-aware logging used across the tree, parser and decoder layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    DecodingConfig,
    GlobalConfig,
    ParserConfig,
    TreeConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "ConfigError",
    "ConfigValidationError",
    "DecodingConfig",
    "GlobalConfig",
    "ParserConfig",
    "TreeConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
