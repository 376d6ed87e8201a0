"""
Lexer for jsonmend - splits possibly malformed JSON text into string literals,
structural characters and everything else.

The scan never fails: unterminated strings run to the end of the text and
unknown characters are grouped into OTHER tokens. Strategies consult the
resulting ScanResult instead of re-deriving quote parity for every match.
"""

from bisect import bisect_left
from collections.abc import Iterator
from enum import Enum
from typing import NamedTuple, Optional

STRUCTURAL_CHARS = frozenset("{}[],:")
OPENERS = {"{": "}", "[": "]"}
CLOSERS = {"}": "{", "]": "["}


class TokenType(Enum):
    """Token types produced by the lexer."""

    STRING = "STRING"
    STRUCTURAL = "STRUCTURAL"
    OTHER = "OTHER"


class Token(NamedTuple):
    """Token with type, raw text and half-open [start, end) offsets."""

    type: TokenType
    value: str
    start: int
    end: int
    terminated: bool = True


class Lexer:
    """Single-pass lexical scanner over raw text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def tokens(self) -> Iterator[Token]:
        """Yield tokens until the end of the text."""
        while self.pos < len(self.text):
            char = self.peek()
            if char == '"':
                yield self.read_string()
            elif char in STRUCTURAL_CHARS:
                self.pos += 1
                yield Token(TokenType.STRUCTURAL, char, self.pos - 1, self.pos)
            else:
                yield self.read_other()

    def read_string(self) -> Token:
        """Read a double-quoted literal; a backslash always consumes the next character."""
        start = self.pos
        self.pos += 1
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if char == '"':
                return Token(TokenType.STRING, self.text[start : self.pos], start, self.pos)

        self.pos = len(self.text)
        return Token(TokenType.STRING, self.text[start:], start, self.pos, terminated=False)

    def read_other(self) -> Token:
        """Read a run of characters that are neither quotes nor structural."""
        start = self.pos
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\\":
                self.pos = min(self.pos + 2, len(self.text))
                continue
            if char == '"' or char in STRUCTURAL_CHARS:
                break
            self.pos += 1
        return Token(TokenType.OTHER, self.text[start : self.pos], start, self.pos)


class ScanResult:
    """Token stream plus fast lookups over one version of a text."""

    def __init__(self, text: str, tokens: list[Token]):
        self.text = text
        self.tokens = tokens
        self.strings = [t for t in tokens if t.type is TokenType.STRING]
        self.structural = [t for t in tokens if t.type is TokenType.STRUCTURAL]
        self._string_starts = [t.start for t in self.strings]
        self._structural_starts = [t.start for t in self.structural]

    @property
    def ends_in_string(self) -> bool:
        return bool(self.strings) and not self.strings[-1].terminated

    def in_string(self, position: int) -> bool:
        """Whether position lies inside a literal's content.

        Opening and closing quotes count as outside; an unterminated literal
        runs to the end of the text.
        """
        idx = bisect_left(self._string_starts, position) - 1
        if idx < 0:
            return False
        token = self.strings[idx]
        content_end = token.end - 1 if token.terminated else token.end
        return position < content_end

    def string_at(self, position: int) -> Optional[Token]:
        """The string token whose opening quote sits at position, if any."""
        idx = bisect_left(self._string_starts, position)
        if idx < len(self.strings) and self.strings[idx].start == position:
            return self.strings[idx]
        return None

    def structural_before(self, position: int, window: int) -> list[Token]:
        """Structural tokens starting in [position - window, position), nearest first."""
        lo = bisect_left(self._structural_starts, max(0, position - window))
        hi = bisect_left(self._structural_starts, position)
        return self.structural[lo:hi][::-1]


def scan(text: str) -> ScanResult:
    """Tokenize text in one pass."""
    return ScanResult(text, list(Lexer(text).tokens()))


def is_in_array_context(result: ScanResult, index: int, lookback: int) -> bool:
    """
    Decide whether index lies directly inside an array rather than an object.

    Scans structural characters backwards from index, outside strings, within
    the lookback window. Returns True when an unmatched '[' is met before any
    unmatched '{'.
    """
    brace_depth = 0
    bracket_depth = 0
    for token in result.structural_before(index, lookback):
        char = token.value
        if char == "}":
            brace_depth += 1
        elif char == "]":
            bracket_depth += 1
        elif char == "{":
            if brace_depth == 0:
                return False
            brace_depth -= 1
        elif char == "[":
            if bracket_depth == 0:
                return True
            bracket_depth -= 1
    return False


def next_significant_char(text: str, position: int) -> Optional[str]:
    """First character at or after position that is not whitespace or a comma."""
    for char in text[position:]:
        if not char.isspace() and char != ",":
            return char
    return None
