"""
Sanitizer pipeline for composable repair strategies.

This module implements the pipeline pattern over an explicit, ordered list
of strategies. Each strategy sees the output of the previous one; the
pipeline records which of them actually changed the text.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from ..core.error_handling import StrategyError, applied_summary
from ..core.interfaces import SanitizerStrategy
from ..core.results import PipelineResult
from ..utils.config import HEURISTIC_STRATEGIES, SanitizerConfig
from .registry import default_strategies

logger = logging.getLogger(__name__)


def execute(
    strategies: Sequence[SanitizerStrategy],
    text: str,
    config: Optional[SanitizerConfig] = None,
    continue_on_error: bool = True,
) -> PipelineResult:
    """
    Run strategies in order, feeding each the previous output.

    Args:
        strategies: Strategies in execution order
        text: Text to repair
        config: Sanitizer configuration, defaults to SanitizerConfig()
        continue_on_error: Skip a raising strategy instead of propagating

    Raises:
        StrategyError: If a strategy raises and continue_on_error is False
    """
    if not text:
        return PipelineResult(content=text, changed=False)
    if config is None:
        config = SanitizerConfig()

    current = text
    applied: list[str] = []
    diagnostics: list[str] = []

    for strategy in strategies:
        if not strategy.should_apply(config):
            continue
        try:
            outcome = strategy.sanitize(current, config)
        except Exception as e:
            if not continue_on_error:
                raise StrategyError(strategy.name, e) from e
            message = f"strategy {strategy.name} failed: {e}"
            logger.warning(message)
            diagnostics.append(message)
            continue

        if not outcome.changed or outcome.content == current:
            continue
        current = outcome.content
        applied.append(strategy.name)
        notes = outcome.repairs or ((outcome.description,) if outcome.description else ())
        diagnostics.extend(f"{strategy.name}: {note}" for note in notes)

    return PipelineResult(
        content=current,
        changed=bool(applied),
        description=applied_summary(applied),
        diagnostics=tuple(diagnostics),
        applied_strategies=tuple(applied),
    )


class SanitizerPipeline:
    """Manages an ordered sequence of repair strategies."""

    def __init__(
        self,
        strategies: Optional[list[SanitizerStrategy]] = None,
        config: Optional[SanitizerConfig] = None,
        continue_on_error: bool = True,
    ):
        self.strategies = list(strategies) if strategies is not None else []
        self.config = config or SanitizerConfig()
        self.continue_on_error = continue_on_error

    def add_strategy(self, strategy: SanitizerStrategy) -> None:
        """Add a strategy to the end of the pipeline."""
        self.strategies.append(strategy)

    @property
    def names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    def process(self, text: str) -> PipelineResult:
        """Apply every enabled strategy to the text."""
        return execute(self.strategies, text, self.config, self.continue_on_error)

    __call__ = process

    @classmethod
    def create_default_pipeline(
        cls, config: Optional[SanitizerConfig] = None
    ) -> "SanitizerPipeline":
        """Create a pipeline with every built-in strategy in default order."""
        return cls(default_strategies(), config)

    @classmethod
    def create_conservative_pipeline(
        cls, config: Optional[SanitizerConfig] = None
    ) -> "SanitizerPipeline":
        """Create a pipeline without the heuristic repairs."""
        strategies = [s for s in default_strategies() if s.name not in HEURISTIC_STRATEGIES]
        return cls(strategies, config)
