"""
Test cases for the strategy base class.
"""

import unittest
from unittest.mock import patch

from jsonmend.core.results import SanitizerOutcome
from jsonmend.sanitizers.base import SanitizerStrategyBase
from jsonmend.sanitizers.commas import TrailingCommaRemover
from jsonmend.utils.config import SanitizerConfig


class NoisyStrategy(SanitizerStrategyBase):
    """Claims a change without changing anything."""

    name = "noisy"

    def sanitize(self, text, config):
        return SanitizerOutcome(content=text, changed=True, description="nothing")


class TestSanitizerStrategyBase(unittest.TestCase):
    """Test contained failures and the no-op invariant."""

    def test_unchanged_outcome_returns_input(self) -> None:
        outcome = NoisyStrategy().apply("abc")
        self.assertFalse(outcome.changed)
        self.assertEqual(outcome.content, "abc")

    def test_exception_is_contained(self) -> None:
        with self.assertLogs("jsonmend.sanitizers.base", level="WARNING"):
            outcome = SanitizerStrategyBase().apply("abc")
        self.assertFalse(outcome.changed)
        self.assertEqual(outcome.content, "abc")
        self.assertTrue(outcome.error.startswith("strategy strategy failed:"))

    def test_regex_timeout_is_contained(self) -> None:
        with patch(
            "jsonmend.sanitizers.commas.safe_finditer",
            side_effect=TimeoutError("regex timed out"),
        ):
            outcome = TrailingCommaRemover().apply('{"a": 1,}')
        self.assertFalse(outcome.changed)
        self.assertEqual(outcome.content, '{"a": 1,}')
        self.assertIn("regex timed out", outcome.error)

    def test_should_apply_follows_config(self) -> None:
        strategy = TrailingCommaRemover()
        self.assertTrue(strategy.should_apply(SanitizerConfig()))
        disabled = SanitizerConfig(disabled_strategies={"remove_trailing_commas"})
        self.assertFalse(strategy.should_apply(disabled))

    def test_repr(self) -> None:
        self.assertEqual(
            repr(TrailingCommaRemover()), "TrailingCommaRemover(name='remove_trailing_commas')"
        )


if __name__ == "__main__":
    unittest.main()
