"""Configuration helpers."""

from .config import (
    HEURISTIC_STRATEGIES,
    LookbackSettings,
    ProcessingOptions,
    SanitizerConfig,
)

__all__ = [
    "HEURISTIC_STRATEGIES",
    "LookbackSettings",
    "ProcessingOptions",
    "SanitizerConfig",
]
