"""
Configuration for jsonmend sanitization and processing.

This module defines the tunable lookback windows used by context-sensitive
repair strategies, the set of strategies enabled for a run, and the options
object accepted by the processor entry point.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from ..core.interfaces import ShapeValidator

# Strategies that guess intent from surrounding text rather than fixing an
# unambiguous syntax error.
HEURISTIC_STRATEGIES = frozenset(
    {
        "fix_concatenation_chains",
        "fix_unescaped_quotes",
        "fix_missing_array_object_braces",
        "fix_unquoted_property_names",
    }
)


@dataclass
class LookbackSettings:
    """Sizes (in characters) of the windows scanned backwards from a match."""

    array_context: int = 500
    comma: int = 10
    unescaped_quote: int = 500


@dataclass
class SanitizerConfig:
    """Granular control over the sanitization strategies."""

    lookbacks: Optional[LookbackSettings] = None
    disabled_strategies: frozenset[str] = field(default_factory=frozenset)
    regex_timeout: float = 2.0

    def __post_init__(self) -> None:
        if self.lookbacks is None:
            self.lookbacks = LookbackSettings()
        self.disabled_strategies = frozenset(self.disabled_strategies)

        for name in ("array_context", "comma", "unescaped_quote"):
            if getattr(self.lookbacks, name) <= 0:
                raise ValueError(f"{name} lookback must be positive")
        if self.regex_timeout <= 0:
            raise ValueError("regex_timeout must be positive")

    @property
    def array_context_lookback(self) -> int:
        """Window scanned backwards when deciding whether a position is inside an array."""
        assert self.lookbacks is not None
        return self.lookbacks.array_context

    @property
    def comma_lookback(self) -> int:
        """Window checked for an already present comma before inserting one."""
        assert self.lookbacks is not None
        return self.lookbacks.comma

    @property
    def unescaped_quote_lookback(self) -> int:
        """Window searched for a property-value opener around embedded quotes."""
        assert self.lookbacks is not None
        return self.lookbacks.unescaped_quote

    def is_enabled(self, strategy_name: str) -> bool:
        """Whether the named strategy should run under this configuration."""
        return strategy_name not in self.disabled_strategies

    @classmethod
    def conservative(cls) -> "SanitizerConfig":
        """Create a configuration that skips the heuristic repairs."""
        return cls(disabled_strategies=HEURISTIC_STRATEGIES)

    @classmethod
    def aggressive(cls) -> "SanitizerConfig":
        """Create a configuration with every strategy enabled."""
        return cls()

    @classmethod
    def from_strategies(
        cls, enabled: Iterable[str], all_strategies: Iterable[str]
    ) -> "SanitizerConfig":
        """Create a configuration where only the given strategies run."""
        enabled_set = set(enabled)
        unknown = enabled_set.difference(all_strategies)
        if unknown:
            raise ValueError(f"Unknown strategies: {', '.join(sorted(unknown))}")
        return cls(
            disabled_strategies=frozenset(
                name for name in all_strategies if name not in enabled_set
            )
        )


@dataclass
class ProcessingOptions:
    """Options for a single parse-and-validate call."""

    shape_validator: Optional[ShapeValidator] = None
    sanitizer_config: Optional[SanitizerConfig] = None
    log_steps: bool = True
