"""
JSON repair strategies.

Each strategy repairs one category of defect and is independent of the
others; the pipeline composes them in a fixed, explicit order.
"""

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
from .pipeline import SanitizerPipeline, execute
from .registry import (
    ALL_STRATEGY_NAMES,
    DEFAULT_STRATEGY_ORDER,
    StrategyName,
    create_strategy,
    default_strategies,
)
from .repairers import (
    MissingArrayObjectBraceInserter,
    UnescapedQuoteRepairer,
    UnquotedPropertyNameFixer,
)

__all__ = [
    "SanitizerPipeline",
    "SanitizerStrategyBase",
    "execute",
    "StrategyName",
    "DEFAULT_STRATEGY_ORDER",
    "ALL_STRATEGY_NAMES",
    "create_strategy",
    "default_strategies",
    "WhitespaceTrimmer",
    "CodeFenceRemover",
    "ControlCharNormalizer",
    "LargestJsonSpanExtractor",
    "DuplicateDocumentCollapser",
    "MissingCommaInserter",
    "TrailingCommaRemover",
    "MismatchedDelimiterFixer",
    "UnescapedQuoteRepairer",
    "TruncatedStructureCompleter",
    "MissingArrayObjectBraceInserter",
    "ConcatenationChainCollapser",
    "OverEscapedSequenceFixer",
    "UndefinedValueFixer",
    "UnquotedPropertyNameFixer",
]
