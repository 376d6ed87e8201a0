"""
Base class for sanitizer strategies.

Subclasses implement `sanitize`; callers that must never see an exception
use `apply`, which contains failures at the strategy boundary.
"""

import logging
from typing import Optional

from ..core.results import SanitizerOutcome
from ..utils.config import SanitizerConfig

logger = logging.getLogger(__name__)


class SanitizerStrategyBase:
    """Base class for repair strategies with common functionality."""

    name = "strategy"
    description = ""

    def should_apply(self, config: SanitizerConfig) -> bool:
        return config.is_enabled(self.name)

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        """Repair the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement sanitize()")

    def apply(
        self, text: str, config: Optional[SanitizerConfig] = None
    ) -> SanitizerOutcome:
        """Run the strategy, returning the input untouched if it raises."""
        if config is None:
            config = SanitizerConfig()
        try:
            outcome = self.sanitize(text, config)
        except Exception as e:
            message = f"strategy {self.name} failed: {e}"
            logger.warning(message)
            return SanitizerOutcome.failed(text, message)

        if not outcome.changed or outcome.content == text:
            return SanitizerOutcome.unchanged(text)
        return outcome

    def outcome(
        self, original: str, repaired: str, repairs: list[str]
    ) -> SanitizerOutcome:
        return SanitizerOutcome.from_texts(original, repaired, self.description, repairs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
