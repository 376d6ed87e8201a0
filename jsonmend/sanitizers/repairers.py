"""
Heuristic repair strategies.

Unlike the syntax fixes, these guess at what the model meant from the text
around a defect. They only fire on narrow patterns and are skipped entirely
by the conservative configuration.
"""

import logging
from typing import Any, Callable

from ..core.regex_utils import safe_search, safe_sub
from ..core.results import SanitizerOutcome
from ..core.tokenizer import is_in_array_context, scan
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

logger = logging.getLogger(__name__)

JSON_KEYWORDS = frozenset({"true", "false", "null", "undefined"})
DEFAULT_INDENT = "    "
SYNTHETIC_KEY = "name"

STRAY_BEFORE_VALUE = r'(\}\s*,[ \t]*)(\n?)(\s*)([a-zA-Z]{1,3})"([^"]+)"(\s*,)'
STRAY_BEFORE_KEY = r'(\}\s*,[ \t]*)(\n?)(\s*)([a-zA-Z]{1,3})"([^"]+)"(\s*:)'
TRUNCATED_VALUE = r'(\}\s*,)\s*\n(\s*)([a-zA-Z][a-zA-Z0-9_]*)"\s*,'

ATTRIBUTE_QUOTES = r'(?<=[\w-])(\s*=\s*)"([^"\n]*)"(?=\s*>|\s*/>|\s+[a-zA-Z]|\s*")'
ESCAPED_THEN_BARE_QUOTE = r'(?<!\\)\\""(?=\s*[A-Za-z_$+])(?!\s*[A-Za-z_$][\w$]*"?\s*:)'
PROPERTY_VALUE_OPENER = r'"\s*:\s*"'

UNQUOTED_KEY = r"([{,]\s*)([A-Za-z_$][\w$-]*)(\s*):"


class MissingArrayObjectBraceInserter(SanitizerStrategyBase):
    """
    Restores the `{` of an array element whose start was replaced by stray text.

    Handles `}, xy"key":` (stray letters before a property name),
    `}, xy"value",` (stray letters before a bare value, which gets a
    synthetic "name" key) and `},\\n  value",` (a value that lost its opening
    quote and brace). Only applies inside an array.
    """

    name = "fix_missing_array_object_braces"
    description = "Inserted missing array object braces"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "}" not in text:
            return SanitizerOutcome.unchanged(text)

        repairs: list[str] = []
        current = text
        for pattern, build in (
            (STRAY_BEFORE_VALUE, self._rebuild_value),
            (STRAY_BEFORE_KEY, self._rebuild_key),
        ):
            current = self._substitute(current, pattern, 4, build, repairs, config)
        current = self._substitute(
            current, TRUNCATED_VALUE, 3, self._rebuild_truncated, repairs, config
        )
        return self.outcome(text, current, repairs)

    def _substitute(
        self,
        text: str,
        pattern: str,
        stray_group: int,
        build: Callable[[Any], tuple[str, str]],
        repairs: list[str],
        config: SanitizerConfig,
    ) -> str:
        result = scan(text)

        def replace(match: Any) -> str:
            stray = match.group(stray_group)
            if stray.lower() in JSON_KEYWORDS or result.in_string(match.start()):
                return match.group(0)
            if not is_in_array_context(
                result, match.start(stray_group), config.array_context_lookback
            ):
                return match.group(0)
            replacement, note = build(match)
            repairs.append(note)
            return replacement

        return safe_sub(pattern, replace, text, timeout=config.regex_timeout)

    @staticmethod
    def _rebuild_value(match: Any) -> tuple[str, str]:
        brace_comma, newline, indent, stray, value, comma = match.groups()
        indent = indent or DEFAULT_INDENT
        newline = newline or "\n"
        replacement = (
            f'{brace_comma}{newline}{indent}{{\n{indent}  "{SYNTHETIC_KEY}": "{value}"{comma}'
        )
        return replacement, f'Removed stray "{stray}" and opened object before value "{value}"'

    @staticmethod
    def _rebuild_key(match: Any) -> tuple[str, str]:
        brace_comma, newline, indent, stray, key, colon = match.groups()
        indent = indent or DEFAULT_INDENT
        newline = newline or "\n"
        replacement = f'{brace_comma}{newline}{indent}{{\n{indent}  "{key}"{colon}'
        return replacement, f'Removed stray "{stray}" and opened object before key "{key}"'

    @staticmethod
    def _rebuild_truncated(match: Any) -> tuple[str, str]:
        brace_comma, indent, word = match.groups()
        replacement = f'{brace_comma}\n{indent or DEFAULT_INDENT}{{"{SYNTHETIC_KEY}": "{word}",'
        return replacement, f'Restored truncated array element "{word}"'


class UnescapedQuoteRepairer(SanitizerStrategyBase):
    """
    Escapes quotes embedded in string values without a backslash.

    Covers HTML/XML attribute values (`<a href="x">` inside a JSON string)
    and an escaped quote immediately followed by a bare one (`\\""`).
    Both require a `"key": "` opener within the lookback window.
    """

    name = "fix_unescaped_quotes"
    description = "Escaped embedded quotes"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if '"' not in text:
            return SanitizerOutcome.unchanged(text)

        repairs: list[str] = []
        lookback = config.unescaped_quote_lookback

        def in_value(source: str, offset: int) -> bool:
            window = source[max(0, offset - lookback) : offset]
            return safe_search(PROPERTY_VALUE_OPENER, window, timeout=config.regex_timeout) is not None

        def escape_attribute(match: Any) -> str:
            if not in_value(match.string, match.start()):
                return match.group(0)
            repairs.append(f"Escaped attribute quotes around {match.group(2)!r}")
            return f'{match.group(1)}\\"{match.group(2)}\\"'

        def escape_adjacent(match: Any) -> str:
            if not in_value(match.string, match.start()):
                return match.group(0)
            repairs.append('Escaped quote following an escaped quote')
            return '\\"\\"'

        repaired = safe_sub(ATTRIBUTE_QUOTES, escape_attribute, text, timeout=config.regex_timeout)
        repaired = safe_sub(
            ESCAPED_THEN_BARE_QUOTE, escape_adjacent, repaired, timeout=config.regex_timeout
        )
        return self.outcome(text, repaired, repairs)


class UnquotedPropertyNameFixer(SanitizerStrategyBase):
    """Quotes bare identifiers used as property names: `{key: 1}` -> `{"key": 1}`."""

    name = "fix_unquoted_property_names"
    description = "Quoted unquoted property names"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if ":" not in text:
            return SanitizerOutcome.unchanged(text)

        result = scan(text)
        repairs: list[str] = []

        def quote(match: Any) -> str:
            if result.in_string(match.start()) or result.in_string(match.start(2)):
                return match.group(0)
            repairs.append(f"Quoted property name {match.group(2)!r}")
            return f'{match.group(1)}"{match.group(2)}"{match.group(3)}:'

        repaired = safe_sub(UNQUOTED_KEY, quote, text, timeout=config.regex_timeout)
        if repairs:
            logger.debug(f"Quoted {len(repairs)} property name(s)")
        return self.outcome(text, repaired, repairs)
