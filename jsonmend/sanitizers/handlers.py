"""
Handlers for JavaScript expressions that models write in place of values.
"""

import logging
from typing import Any, Optional

from ..core.edits import Edit, apply_edits
from ..core.regex_utils import safe_finditer
from ..core.results import SanitizerOutcome
from ..core.tokenizer import ScanResult, scan
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

logger = logging.getLogger(__name__)

IDENTIFIER = r"[A-Za-z_$][\w$.()]*"
LITERAL = r'"(?:[^"\\\n]|\\.)*"'
OPERAND = rf"(?:{LITERAL}|{IDENTIFIER})"
CONCATENATION_CHAIN = rf"([:\[,]\s*)({OPERAND}(?:\s*\+\s*{OPERAND})+)(?=\s*[,}}\]\n]|\s*$)"
CHAIN_PART = rf"{LITERAL}|{IDENTIFIER}|\+"


def collapse_chain(parts: list[str]) -> str:
    """
    Reduce the operands of a `+` chain to one string literal.

    Literal-only chains are merged. Once an identifier appears its runtime
    value is unknown, so only the first literal is kept, and a chain of
    identifiers alone becomes the empty string.
    """
    literals = [part for part in parts if part.startswith('"')]
    if len(literals) == len(parts):
        return '"' + "".join(literal[1:-1] for literal in literals) + '"'
    if literals:
        return literals[0]
    return '""'


class ConcatenationChainCollapser(SanitizerStrategyBase):
    """
    Replaces `+` concatenation expressions used as values with a literal.

    `"path": BASE_PATH + "/file.ts"` becomes `"path": "/file.ts"` and
    `"name": "a" + "b"` becomes `"name": "ab"`. Chains that start inside a
    string literal are left alone.
    """

    name = "fix_concatenation_chains"
    description = "Collapsed concatenation chains"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "+" not in text:
            return SanitizerOutcome.unchanged(text)

        result = scan(text)
        edits = []
        for match in safe_finditer(CONCATENATION_CHAIN, text, timeout=config.regex_timeout):
            start = match.start(2)
            parts = self._parts(match, result, config)
            if parts is None:
                continue
            edits.append(Edit(start, match.end(2), collapse_chain(parts)))

        if edits:
            logger.debug(f"Collapsed {len(edits)} concatenation chain(s)")
        repairs = [f"Collapsed {len(edits)} concatenation chain(s)"] if edits else []
        return self.outcome(text, apply_edits(text, edits), repairs)

    @staticmethod
    def _parts(
        match: Any, result: ScanResult, config: SanitizerConfig
    ) -> Optional[list[str]]:
        """Operands of the chain, or None if any piece lies inside a string."""
        if result.in_string(match.start(1)):
            return None

        parts = []
        offset = match.start(2)
        for piece in safe_finditer(CHAIN_PART, match.group(2), timeout=config.regex_timeout):
            if result.in_string(offset + piece.start()):
                return None
            if piece.group(0) != "+":
                parts.append(piece.group(0))
        return parts
