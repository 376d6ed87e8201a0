"""
Character and literal normalization strategies.
"""

from ..core.edits import Edit, apply_edits
from ..core.regex_utils import safe_finditer
from ..core.results import SanitizerOutcome
from ..core.tokenizer import TokenType, scan
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

CONTROL_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

UNDEFINED_PATTERN = r"([:\[,]\s*)undefined\b"
JSON_ESCAPES = frozenset("\"\\/bfnrtu")


def is_control_char(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def escape_control_char(char: str) -> str:
    return CONTROL_ESCAPES.get(char, f"\\u{ord(char):04x}")


class ControlCharNormalizer(SanitizerStrategyBase):
    """
    Removes control characters between tokens and escapes them inside strings.

    Ordinary whitespace between tokens is left alone; raw newlines and tabs
    inside string literals become their escape sequences.
    """

    name = "remove_control_chars"
    description = "Normalized control characters"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if not any(is_control_char(c) for c in text):
            return SanitizerOutcome.unchanged(text)

        parts = []
        removed = escaped = 0
        for token in scan(text).tokens:
            if token.type is TokenType.STRING:
                chunk = []
                for char in token.value:
                    if is_control_char(char):
                        chunk.append(escape_control_char(char))
                        escaped += 1
                    else:
                        chunk.append(char)
                parts.append("".join(chunk))
            elif token.type is TokenType.OTHER:
                kept = [c for c in token.value if c in " \t\n\r" or not is_control_char(c)]
                removed += len(token.value) - len(kept)
                parts.append("".join(kept))
            else:
                parts.append(token.value)

        repairs = []
        if removed:
            repairs.append(f"Removed {removed} control character(s)")
        if escaped:
            repairs.append(f"Escaped {escaped} control character(s) inside strings")
        return self.outcome(text, "".join(parts), repairs)


class UndefinedValueFixer(SanitizerStrategyBase):
    """Replaces JavaScript `undefined` values with `null`."""

    name = "fix_undefined_values"
    description = "Replaced undefined with null"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "undefined" not in text:
            return SanitizerOutcome.unchanged(text)

        result = scan(text)
        edits = []
        for match in safe_finditer(UNDEFINED_PATTERN, text, timeout=config.regex_timeout):
            start = match.end(1)
            if result.in_string(match.start()) or result.in_string(start):
                continue
            edits.append(Edit(start, match.end(), "null"))

        repairs = [f"Replaced {len(edits)} undefined value(s)"] if edits else []
        return self.outcome(text, apply_edits(text, edits), repairs)


def repair_escapes(content: str) -> tuple[str, int]:
    """
    Drop backslashes that start an escape JSON does not define.

    An odd run of backslashes before a single quote is an over-escaped quote
    and is removed entirely. Before any other character outside the JSON
    escape set only the last backslash goes, so escaped backslashes survive.
    """
    out = []
    fixed = 0
    i = 0
    while i < len(content):
        if content[i] != "\\":
            out.append(content[i])
            i += 1
            continue

        run_end = i
        while run_end < len(content) and content[run_end] == "\\":
            run_end += 1
        run = content[i:run_end]
        following = content[run_end : run_end + 1]

        if len(run) % 2 == 0 or not following or following in JSON_ESCAPES:
            out.append(run)
        elif following == "'":
            fixed += 1
        else:
            out.append(run[:-1])
            fixed += 1
        i = run_end
    return "".join(out), fixed


class OverEscapedSequenceFixer(SanitizerStrategyBase):
    """Removes invalid escape sequences such as `\\'`, `\\,` and `\\)` inside strings."""

    name = "fix_over_escaped_sequences"
    description = "Removed invalid escape sequences"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "\\" not in text:
            return SanitizerOutcome.unchanged(text)

        edits = []
        total = 0
        for token in scan(text).strings:
            closing = 1 if token.terminated else 0
            content = token.value[1 : len(token.value) - closing]
            repaired, fixed = repair_escapes(content)
            if fixed:
                edits.append(Edit(token.start + 1, token.start + 1 + len(content), repaired))
                total += fixed

        repairs = [f"Removed {total} invalid escape sequence(s)"] if total else []
        return self.outcome(text, apply_edits(text, edits), repairs)
