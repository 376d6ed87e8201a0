"""
Strategy registry.

The execution order of the repair strategies is significant: comma repair
runs before delimiter repair, which runs before truncation completion, which
runs before brace insertion. The order is kept here as an explicit tuple so
it can be inspected and changed deliberately.
"""

from enum import Enum

from .base import SanitizerStrategyBase
from .commas import MissingCommaInserter, TrailingCommaRemover
from .delimiters import MismatchedDelimiterFixer, TruncatedStructureCompleter
from .extractors import (
    CodeFenceRemover,
    DuplicateDocumentCollapser,
    LargestJsonSpanExtractor,
    WhitespaceTrimmer,
)
from .handlers import ConcatenationChainCollapser
from .normalizers import ControlCharNormalizer, OverEscapedSequenceFixer, UndefinedValueFixer
from .repairers import (
    MissingArrayObjectBraceInserter,
    UnescapedQuoteRepairer,
    UnquotedPropertyNameFixer,
)


class StrategyName(str, Enum):
    """Stable identifiers of the built-in strategies."""

    TRIM_WHITESPACE = "trim_whitespace"
    REMOVE_CODE_FENCES = "remove_code_fences"
    REMOVE_CONTROL_CHARS = "remove_control_chars"
    EXTRACT_LARGEST_JSON_SPAN = "extract_largest_json_span"
    COLLAPSE_DUPLICATE_JSON_OBJECT = "collapse_duplicate_json_object"
    ADD_MISSING_COMMAS = "add_missing_commas"
    REMOVE_TRAILING_COMMAS = "remove_trailing_commas"
    FIX_MISMATCHED_DELIMITERS = "fix_mismatched_delimiters"
    FIX_CONCATENATION_CHAINS = "fix_concatenation_chains"
    FIX_OVER_ESCAPED_SEQUENCES = "fix_over_escaped_sequences"
    FIX_UNESCAPED_QUOTES = "fix_unescaped_quotes"
    COMPLETE_TRUNCATED_STRUCTURES = "complete_truncated_structures"
    FIX_MISSING_ARRAY_OBJECT_BRACES = "fix_missing_array_object_braces"
    FIX_UNDEFINED_VALUES = "fix_undefined_values"
    FIX_UNQUOTED_PROPERTY_NAMES = "fix_unquoted_property_names"


STRATEGY_CLASSES: dict[StrategyName, type[SanitizerStrategyBase]] = {
    StrategyName.TRIM_WHITESPACE: WhitespaceTrimmer,
    StrategyName.REMOVE_CODE_FENCES: CodeFenceRemover,
    StrategyName.REMOVE_CONTROL_CHARS: ControlCharNormalizer,
    StrategyName.EXTRACT_LARGEST_JSON_SPAN: LargestJsonSpanExtractor,
    StrategyName.COLLAPSE_DUPLICATE_JSON_OBJECT: DuplicateDocumentCollapser,
    StrategyName.ADD_MISSING_COMMAS: MissingCommaInserter,
    StrategyName.REMOVE_TRAILING_COMMAS: TrailingCommaRemover,
    StrategyName.FIX_MISMATCHED_DELIMITERS: MismatchedDelimiterFixer,
    StrategyName.FIX_CONCATENATION_CHAINS: ConcatenationChainCollapser,
    StrategyName.FIX_OVER_ESCAPED_SEQUENCES: OverEscapedSequenceFixer,
    StrategyName.FIX_UNESCAPED_QUOTES: UnescapedQuoteRepairer,
    StrategyName.COMPLETE_TRUNCATED_STRUCTURES: TruncatedStructureCompleter,
    StrategyName.FIX_MISSING_ARRAY_OBJECT_BRACES: MissingArrayObjectBraceInserter,
    StrategyName.FIX_UNDEFINED_VALUES: UndefinedValueFixer,
    StrategyName.FIX_UNQUOTED_PROPERTY_NAMES: UnquotedPropertyNameFixer,
}

DEFAULT_STRATEGY_ORDER: tuple[StrategyName, ...] = (
    StrategyName.TRIM_WHITESPACE,
    StrategyName.REMOVE_CODE_FENCES,
    StrategyName.REMOVE_CONTROL_CHARS,
    StrategyName.EXTRACT_LARGEST_JSON_SPAN,
    StrategyName.COLLAPSE_DUPLICATE_JSON_OBJECT,
    StrategyName.ADD_MISSING_COMMAS,
    StrategyName.REMOVE_TRAILING_COMMAS,
    StrategyName.FIX_MISMATCHED_DELIMITERS,
    StrategyName.FIX_CONCATENATION_CHAINS,
    StrategyName.FIX_OVER_ESCAPED_SEQUENCES,
    StrategyName.FIX_UNESCAPED_QUOTES,
    StrategyName.COMPLETE_TRUNCATED_STRUCTURES,
    StrategyName.FIX_MISSING_ARRAY_OBJECT_BRACES,
    StrategyName.FIX_UNDEFINED_VALUES,
    StrategyName.FIX_UNQUOTED_PROPERTY_NAMES,
)

ALL_STRATEGY_NAMES = frozenset(name.value for name in DEFAULT_STRATEGY_ORDER)


def create_strategy(name: str) -> SanitizerStrategyBase:
    """Instantiate a built-in strategy by name."""
    try:
        return STRATEGY_CLASSES[StrategyName(name)]()
    except ValueError as e:
        raise ValueError(f"Unknown strategy: {name}") from e


def default_strategies() -> list[SanitizerStrategyBase]:
    """Fresh instances of every built-in strategy in default order."""
    return [STRATEGY_CLASSES[name]() for name in DEFAULT_STRATEGY_ORDER]
