"""
Comma repair strategies.

Missing commas are detected by three independent passes, each run against a
fresh scan of the previous pass's output:

1. a value terminator followed by a newline and a new quoted property name
2. two adjacent string literals inside an array
3. a closing delimiter followed by a new object or array on the next line
"""

from ..core.edits import Edit, apply_edits
from ..core.regex_utils import safe_finditer
from ..core.results import SanitizerOutcome
from ..core.tokenizer import TokenType, is_in_array_context, scan
from ..utils.config import SanitizerConfig
from .base import SanitizerStrategyBase

PROPERTY_AFTER_NEWLINE = (
    r'(["}\]]|\d|\btrue|\bfalse|\bnull)(\s*\n)(\s*")([A-Za-z_$][\w$-]*)"\s*:'
)
VALUE_AFTER_NEWLINE = r"([}\]])(\s*\n\s*)([{\[])"
TRAILING_COMMA = r",\s*([}\]])"


class MissingCommaInserter(SanitizerStrategyBase):
    """Inserts commas that the model left out between members or elements."""

    name = "add_missing_commas"
    description = "Inserted missing commas"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        repairs = []
        current = text
        for label, pass_fn in (
            ("before new property", self._property_pass),
            ("between array strings", self._adjacent_string_pass),
            ("between array elements", self._element_pass),
        ):
            edits = pass_fn(current, config)
            if edits:
                current = apply_edits(current, edits)
                repairs.append(f"Inserted {len(edits)} comma(s) {label}")
        return self.outcome(text, current, repairs)

    def _property_pass(self, text: str, config: SanitizerConfig) -> list[Edit]:
        result = scan(text)
        edits = []
        for match in safe_finditer(PROPERTY_AFTER_NEWLINE, text, timeout=config.regex_timeout):
            key_quote = match.end(3) - 1
            if result.in_string(match.start(1)) or result.in_string(key_quote):
                continue
            window = text[max(0, key_quote - config.comma_lookback) : key_quote]
            if window.rstrip().endswith(","):
                continue
            edits.append(Edit.insert(match.end(1), ","))
        return edits

    def _adjacent_string_pass(self, text: str, config: SanitizerConfig) -> list[Edit]:
        result = scan(text)
        tokens = result.tokens
        edits = []
        for i in range(len(tokens) - 2):
            first, gap, second = tokens[i], tokens[i + 1], tokens[i + 2]
            if first.type is not TokenType.STRING or not first.terminated:
                continue
            if gap.type is not TokenType.OTHER or gap.value.strip():
                continue
            if second.type is not TokenType.STRING:
                continue

            following = tokens[i + 3 : i + 5]
            if following and following[0].type is TokenType.OTHER and not following[0].value.strip():
                following = following[1:]
            if following and following[0].value == ":":
                continue

            if is_in_array_context(result, second.start, config.array_context_lookback):
                edits.append(Edit.insert(first.end, ","))
        return edits

    def _element_pass(self, text: str, config: SanitizerConfig) -> list[Edit]:
        result = scan(text)
        edits = []
        for match in safe_finditer(VALUE_AFTER_NEWLINE, text, timeout=config.regex_timeout):
            if result.in_string(match.start(1)) or result.in_string(match.start(3)):
                continue
            if is_in_array_context(result, match.start(3), config.array_context_lookback):
                edits.append(Edit.insert(match.end(1), ","))
        return edits


class TrailingCommaRemover(SanitizerStrategyBase):
    """Removes a comma that directly precedes a closing brace or bracket."""

    name = "remove_trailing_commas"
    description = "Removed trailing commas"

    def sanitize(self, text: str, config: SanitizerConfig) -> SanitizerOutcome:
        if "," not in text:
            return SanitizerOutcome.unchanged(text)

        result = scan(text)
        edits = [
            Edit(match.start(), match.end(), match.group(1))
            for match in safe_finditer(TRAILING_COMMA, text, timeout=config.regex_timeout)
            if not result.in_string(match.start())
        ]
        repairs = [f"Removed {len(edits)} trailing comma(s)"] if edits else []
        return self.outcome(text, apply_edits(text, edits), repairs)
