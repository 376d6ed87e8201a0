"""
jsonmend - repair and validate JSON produced by large language models.

Model output that is supposed to be JSON often is not quite: it arrives in
code fences, with missing or trailing commas, mismatched brackets, stray
tokens or a truncated tail. jsonmend tries the raw text first and then
applies an ordered sequence of independent repair strategies, re-parsing
after each one, until the text parses and matches the expected shape.

Quick Start:
    from jsonmend import parse_and_validate, ProcessingOptions, PydanticValidator

    result = parse_and_validate(llm_text, "summary")
    if result.success:
        print(result.data, result.steps)
    else:
        print(result.error.kind, result.error)

    # Typed output
    options = ProcessingOptions(shape_validator=PydanticValidator(Summary))
    result = parse_and_validate(llm_text, "summary", options)
"""

from .core.error_handling import ErrorKind, JsonProcessingError, StrategyError
from .core.processing_logger import LoggingProcessingLogger
from .core.processor import JsonProcessor, parse_and_validate
from .core.results import PipelineResult, ProcessorFailure, ProcessorSuccess, SanitizerOutcome
from .sanitizers import DEFAULT_STRATEGY_ORDER, SanitizerPipeline, StrategyName
from .utils.config import LookbackSettings, ProcessingOptions, SanitizerConfig
from .validation import CallableValidator, PydanticValidator, ValidationOutcome

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "parse_and_validate", "JsonProcessor",
    # Configuration
    "ProcessingOptions", "SanitizerConfig", "LookbackSettings",
    # Results
    "ProcessorSuccess", "ProcessorFailure", "PipelineResult", "SanitizerOutcome",
    # Errors
    "ErrorKind", "JsonProcessingError", "StrategyError",
    # Pipeline
    "SanitizerPipeline", "StrategyName", "DEFAULT_STRATEGY_ORDER",
    # Collaborators
    "CallableValidator", "PydanticValidator", "ValidationOutcome", "LoggingProcessingLogger",
]
