"""
Regex utilities with timeout protection.

Patterns are compiled once with the `regex` module and cached. Every
substitution carries a timeout so catastrophic backtracking on hostile input
surfaces as a TimeoutError, which strategies contain like any other failure.
"""

from collections.abc import Iterator
from functools import lru_cache
from typing import Any, Callable, Optional, Union

import regex

DEFAULT_TIMEOUT = 2.0

Replacement = Union[str, Callable[[Any], str]]


@lru_cache(maxsize=128)
def compile_pattern(pattern: str, flags: int = 0) -> Any:
    """Compile and cache a pattern."""
    return regex.compile(pattern, flags)


def safe_sub(
    pattern: str,
    repl: Replacement,
    string: str,
    flags: int = 0,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> str:
    """
    Perform regex substitution with timeout protection.

    Args:
        pattern: Regular expression pattern
        repl: Replacement string or function
        string: Input string to process
        flags: Regex flags
        timeout: Timeout in seconds

    Raises:
        TimeoutError: If matching exceeds the timeout
    """
    return compile_pattern(pattern, flags).sub(repl, string, timeout=timeout)


def safe_finditer(
    pattern: str,
    string: str,
    flags: int = 0,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Iterator[Any]:
    """Iterate over matches with timeout protection."""
    return compile_pattern(pattern, flags).finditer(string, timeout=timeout)


def safe_search(
    pattern: str,
    string: str,
    flags: int = 0,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Optional[Any]:
    """Search with timeout protection."""
    return compile_pattern(pattern, flags).search(string, timeout=timeout)
