"""
Test cases for character and literal normalization.
"""

import json

from jsonmend.sanitizers.normalizers import (
    ControlCharNormalizer,
    OverEscapedSequenceFixer,
    UndefinedValueFixer,
    repair_escapes,
)


class TestControlCharNormalizer:
    """Control characters are removed between tokens and escaped inside strings."""

    def test_escapes_newline_inside_string(self) -> None:
        outcome = ControlCharNormalizer().apply('{"a": "line1\nline2"}')
        assert outcome.changed
        assert outcome.content == '{"a": "line1\\nline2"}'
        assert json.loads(outcome.content) == {"a": "line1\nline2"}

    def test_escapes_other_control_chars_inside_string(self) -> None:
        outcome = ControlCharNormalizer().apply('["a\tb\x01"]')
        assert outcome.content == '["a\\tb\\u0001"]'

    def test_removes_control_chars_between_tokens(self) -> None:
        outcome = ControlCharNormalizer().apply('{"a": 1\x00}')
        assert outcome.content == '{"a": 1}'
        assert outcome.repairs == ("Removed 1 control character(s)",)

    def test_keeps_whitespace_between_tokens(self) -> None:
        text = '{\n\t"a": 1\r\n}'
        assert not ControlCharNormalizer().apply(text).changed


class TestUndefinedValueFixer:
    def test_replaces_undefined(self) -> None:
        outcome = UndefinedValueFixer().apply('{"a": undefined, "b": [undefined]}')
        assert outcome.content == '{"a": null, "b": [null]}'

    def test_undefined_inside_string_is_kept(self) -> None:
        for text in ('{"a": "undefined"}', '{"a": "x, undefined"}'):
            assert not UndefinedValueFixer().apply(text).changed

    def test_identifier_prefix_is_kept(self) -> None:
        assert not UndefinedValueFixer().apply('{"a": undefinedValue}').changed


class TestRepairEscapes:
    def test_over_escaped_single_quotes(self) -> None:
        assert repair_escapes(r"it\'s") == ("it's", 1)
        assert repair_escapes(r"it\\\'s") == ("it's", 1)

    def test_stray_backslash_before_punctuation(self) -> None:
        assert repair_escapes(r"value\, next\)") == ("value, next)", 2)

    def test_escaped_backslash_is_kept(self) -> None:
        assert repair_escapes(r"a\\\, b") == (r"a\\, b", 1)
        assert repair_escapes(r"C:\\dir") == (r"C:\\dir", 0)

    def test_valid_escapes_are_kept(self) -> None:
        text = r"x\n\t\"q\" \u00e9 \/"
        assert repair_escapes(text) == (text, 0)


class TestOverEscapedSequenceFixer:
    """Invalid escapes are repaired inside strings only."""

    def test_repairs_string_value(self) -> None:
        outcome = OverEscapedSequenceFixer().apply(r'{"a": "value\, next\)"}')
        assert outcome.changed
        assert outcome.content == '{"a": "value, next)"}'
        assert outcome.repairs == ("Removed 2 invalid escape sequence(s)",)
        assert json.loads(outcome.content) == {"a": "value, next)"}

    def test_over_escaped_quote_in_value(self) -> None:
        outcome = OverEscapedSequenceFixer().apply(r'{"s": "don\\\'t"}')
        assert json.loads(outcome.content) == {"s": "don't"}

    def test_valid_document_is_unchanged(self) -> None:
        text = r'{"path": "C:\\dir", "q": "say \"hi\"\n"}'
        assert not OverEscapedSequenceFixer().apply(text).changed

    def test_unterminated_string_with_trailing_backslash(self) -> None:
        assert not OverEscapedSequenceFixer().apply('{"a": "x\\').changed

    def test_second_application_is_a_no_op(self) -> None:
        first = OverEscapedSequenceFixer().apply(r'["a\,", "b\\\.c"]')
        assert first.content == r'["a,", "b\\.c"]'
        assert not OverEscapedSequenceFixer().apply(first.content).changed
