"""
Delimiter repair strategies.

MismatchedDelimiterFixer corrects closers that do not match their opener;
TruncatedStructureCompleter closes whatever is still open when the text
ends early. Both walk the structural tokens of a single scan and ignore
anything inside string literals.
"""

import logging

from ..core.edits import Edit, apply_edits
from ..core.results import SanitizerOutcome
from ..core.tokenizer import CLOSERS, OPENERS, TokenType, next_significant_char, scan
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

logger = logging.getLogger(__name__)


class _Frame:
    """An open delimiter. has_colon tracks `key:` seen directly inside an array."""

    __slots__ = ("opener", "has_colon")

    def __init__(self, opener: str):
        self.opener = opener
        self.has_colon = False

    @property
    def closer(self) -> str:
        return OPENERS[self.opener]


class MismatchedDelimiterFixer(SanitizerStrategyBase):
    """
    Replaces closers that do not match the innermost open delimiter.

    A `}` inside an array whose current element already contains `key:` is
    an object closer whose opener was lost; it is left in place for the
    brace insertion strategy. A `]` where `}` was expected and followed by a
    new string is treated as a missing `}` before a genuine array closer.
    Extra closers with nothing open are left alone.
    """

    name = "fix_mismatched_delimiters"
    description = "Fixed mismatched delimiters"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        result = scan(text)
        stack: list[_Frame] = []
        edits = []

        for token in result.structural:
            char = token.value
            if char in OPENERS:
                stack.append(_Frame(char))
            elif char in ":,":
                if stack and stack[-1].opener == "[":
                    stack[-1].has_colon = char == ":"
            elif char in CLOSERS:
                if not stack:
                    continue
                top = stack[-1]
                if char == top.closer:
                    stack.pop()
                    continue
                if char == "}" and top.opener == "[" and top.has_colon:
                    top.has_colon = False
                    continue

                stack.pop()
                if (
                    char == "]"
                    and stack
                    and stack[-1].opener == "["
                    and next_significant_char(text, token.end) == '"'
                ):
                    stack.pop()
                    edits.append(Edit(token.start, token.end, "}]"))
                else:
                    edits.append(Edit(token.start, token.end, top.closer))

        if not edits:
            return SanitizerOutcome.unchanged(text)

        logger.debug(f"Correcting {len(edits)} mismatched delimiter(s)")
        return self.outcome(
            text,
            apply_edits(text, edits),
            [f"Corrected {len(edits)} mismatched delimiter(s)"],
        )


class TruncatedStructureCompleter(SanitizerStrategyBase):
    """
    Closes an unterminated string and every delimiter still open at the end.

    A dangling comma is dropped and a property left without a value gets
    `null`, so the completed text has a chance to parse.
    """

    name = "complete_truncated_structures"
    description = "Completed truncated structure"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        result = scan(text)
        stack = []
        for token in result.structural:
            if token.value in OPENERS:
                stack.append(token.value)
            elif token.value in CLOSERS and stack and stack[-1] == CLOSERS[token.value]:
                stack.pop()

        if not stack and not result.ends_in_string:
            return SanitizerOutcome.unchanged(text)

        repairs = []
        if result.ends_in_string:
            completed = text
            trailing_backslashes = len(text) - len(text.rstrip("\\"))
            if trailing_backslashes % 2:
                completed += "\\"
            completed += '"'
            repairs.append("Closed unterminated string")
        else:
            completed = text.rstrip()
            if completed.endswith(","):
                completed = completed[:-1].rstrip()
                repairs.append("Dropped dangling comma")
            elif completed.endswith(":"):
                completed += " null"
                repairs.append("Filled missing value with null")

        if stack and stack[-1] == "{" and self._ends_with_bare_key(completed):
            completed += ": null"
            repairs.append("Filled missing value with null")

        closers = "".join(OPENERS[opener] for opener in reversed(stack))
        if closers:
            repairs.append(f"Appended {closers}")
        return self.outcome(text, completed + closers, repairs)

    @staticmethod
    def _ends_with_bare_key(text: str) -> bool:
        """Whether text ends with a string that sits in key position."""
        significant = [
            t for t in scan(text).tokens if not (t.type is TokenType.OTHER and not t.value.strip())
        ]
        if len(significant) < 2 or significant[-1].type is not TokenType.STRING:
            return False
        return significant[-2].value in ("{", ",")
