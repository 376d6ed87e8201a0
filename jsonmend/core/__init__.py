"""
jsonmend core building blocks.

This module provides the scanner, result types, errors and interfaces that
the sanitizers and the processor are built on.
"""

from .error_handling import ErrorKind, JsonProcessingError, StrategyError
from .interfaces import ProcessingLogger, SanitizerStrategy, ShapeValidator, ValidationOutcome
from .results import PipelineResult, ProcessorFailure, ProcessorSuccess, SanitizerOutcome
from .tokenizer import Lexer, ScanResult, Token, TokenType, scan

__all__ = [
    "ErrorKind", "JsonProcessingError", "StrategyError",
    "ProcessingLogger", "SanitizerStrategy", "ShapeValidator", "ValidationOutcome",
    "PipelineResult", "ProcessorFailure", "ProcessorSuccess", "SanitizerOutcome",
    "Lexer", "ScanResult", "Token", "TokenType", "scan",
]
