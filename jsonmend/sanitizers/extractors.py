"""
Content extraction strategies.

These strategies isolate the JSON document from the text an LLM wraps around
it: surrounding whitespace, markdown code fences, explanatory prose, and a
verbatim repetition of the whole document.
"""

from typing import Optional

from ..core.regex_utils import safe_finditer
from ..core.tokenizer import OPENERS, ScanResult, Token, scan
from ..core.results import SanitizerOutcome
from ..core.edits import Edit, apply_edits
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

CODE_FENCE_PATTERN = r"```[A-Za-z0-9_+-]*[ \t]*\r?\n?"
DELIMITER_CHARS = frozenset("{}[]")


def find_matching_end(result: ScanResult, opener: Token) -> Optional[int]:
    """Offset just past the closer that balances opener, or None if the text ends first."""
    depth = 0
    for token in result.structural:
        if token.start < opener.start:
            continue
        if token.value in "{[":
            depth += 1
        elif token.value in "}]":
            depth -= 1
            if depth == 0:
                return token.end
    return None


def looks_like_json_start(text: str, position: int) -> bool:
    """Reject openers that are more likely code or prose than a JSON document."""
    opener = text[position]
    after = text[position + 1 : position + 2]
    if not after:
        return False

    if opener == "{":
        if position > 0 and (text[position - 1].isalpha() or text[position - 1] in "_$"):
            return False
        return after.isspace() or after in '"}' or after.isalpha()

    return after.isspace() or after in ']"{[-' or after.isdigit()


class WhitespaceTrimmer(SanitizerStrategyBase):
    """Strips leading and trailing whitespace."""

    name = "trim_whitespace"
    description = "Trimmed whitespace"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        return self.outcome(text, text.strip(), [])


class CodeFenceRemover(SanitizerStrategyBase):
    """Removes markdown code fence markers such as ```json."""

    name = "remove_code_fences"
    description = "Removed code fences"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "```" not in text:
            return SanitizerOutcome.unchanged(text)

        result = scan(text)
        edits = [
            Edit(match.start(), match.end(), "")
            for match in safe_finditer(CODE_FENCE_PATTERN, text, timeout=config.regex_timeout)
            if not result.in_string(match.start())
        ]
        if not edits:
            return SanitizerOutcome.unchanged(text)
        # Newlines around the fenced block remain after the markers go.
        repaired = apply_edits(text, edits).strip()
        return self.outcome(text, repaired, [f"Removed {len(edits)} code fence marker(s)"])


class LargestJsonSpanExtractor(SanitizerStrategyBase):
    """
    Cuts explanatory text before and after the JSON document.

    The first opener that looks like the start of a document is followed to
    its balancing closer. The span is only extracted when the text outside it
    contains no further delimiters; otherwise the "prose" is more likely to be
    a damaged part of the document itself and is left for the structural
    repairs. A document that never closes is left for truncation completion.
    """

    name = "extract_largest_json_span"
    description = "Extracted JSON span from surrounding text"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        result = scan(text)
        for token in result.structural:
            if token.value not in OPENERS or not looks_like_json_start(text, token.start):
                continue

            end = find_matching_end(result, token)
            if end is None:
                return SanitizerOutcome.unchanged(text)

            before, after = text[: token.start], text[end:]
            if not before.strip() and not after.strip():
                return SanitizerOutcome.unchanged(text)
            if DELIMITER_CHARS.intersection(after):
                return SanitizerOutcome.unchanged(text)

            repairs = []
            if before.strip():
                repairs.append(f"Removed {len(before.strip())} char(s) of leading text")
            if after.strip():
                repairs.append(f"Removed {len(after.strip())} char(s) of trailing text")
            return self.outcome(text, text[token.start : end], repairs)

        return SanitizerOutcome.unchanged(text)


class DuplicateDocumentCollapser(SanitizerStrategyBase):
    """Collapses a document that the model emitted twice in a row."""

    name = "collapse_duplicate_json_object"
    description = "Collapsed duplicated JSON document"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        result = scan(text)
        if not result.structural or result.structural[0].value not in OPENERS:
            return SanitizerOutcome.unchanged(text)

        first = result.structural[0]
        if text[: first.start].strip():
            return SanitizerOutcome.unchanged(text)

        end = find_matching_end(result, first)
        if end is None:
            return SanitizerOutcome.unchanged(text)

        document = text[first.start : end]
        if text[end:].strip() != document:
            return SanitizerOutcome.unchanged(text)
        return self.outcome(text, text[:end], ["Removed repeated copy of the document"])
