"""
Test cases for the lexer and scan lookups.

Tests focus on string-region detection, since every structural repair relies
on it to leave string contents alone.
"""

import unittest

from jsonmend.core.tokenizer import (
    Lexer,
    TokenType,
    is_in_array_context,
    next_significant_char,
    scan,
)


class TestLexer(unittest.TestCase):
    """Test token production."""

    def test_token_types(self) -> None:
        tokens = list(Lexer('{"a": 1}').tokens())
        types = [t.type for t in tokens]
        self.assertEqual(
            types,
            [
                TokenType.STRUCTURAL,
                TokenType.STRING,
                TokenType.STRUCTURAL,
                TokenType.OTHER,
                TokenType.STRUCTURAL,
            ],
        )
        self.assertEqual(tokens[1].value, '"a"')
        self.assertEqual(tokens[3].value, " 1")

    def test_offsets_cover_text(self) -> None:
        text = '[ "x", tru, {"k": null} ]'
        tokens = list(Lexer(text).tokens())
        self.assertEqual("".join(t.value for t in tokens), text)
        for prev, cur in zip(tokens, tokens[1:]):
            self.assertEqual(prev.end, cur.start)

    def test_escaped_quote_does_not_end_string(self) -> None:
        result = scan('{"a": "x\\"y"}')
        self.assertEqual([t.value for t in result.strings], ['"a"', '"x\\"y"'])
        self.assertEqual([t.value for t in result.structural], ["{", ":", "}"])

    def test_double_backslash_before_quote_ends_string(self) -> None:
        result = scan('["a\\\\", "b"]')
        self.assertEqual([t.value for t in result.strings], ['"a\\\\"', '"b"'])

    def test_unterminated_string_runs_to_end(self) -> None:
        result = scan('{"a": "hel')
        self.assertTrue(result.ends_in_string)
        self.assertFalse(result.strings[-1].terminated)
        self.assertEqual(result.strings[-1].value, '"hel')


class TestScanResult(unittest.TestCase):
    """Test lookups over a scanned text."""

    def test_in_string(self) -> None:
        text = '{"msg": "a, b]"}'
        result = scan(text)
        self.assertFalse(result.in_string(0))
        self.assertFalse(result.in_string(text.index('"')))
        self.assertTrue(result.in_string(text.index("m")))
        self.assertTrue(result.in_string(text.index(",")))
        self.assertTrue(result.in_string(text.index("]")))
        self.assertFalse(result.in_string(len(text) - 1))

    def test_closing_quote_is_outside(self) -> None:
        text = '"ab"'
        result = scan(text)
        self.assertTrue(result.in_string(1))
        self.assertFalse(result.in_string(3))

    def test_unterminated_string_extends_to_end(self) -> None:
        text = '{"a": "b, c'
        result = scan(text)
        self.assertTrue(result.in_string(len(text) - 1))
        self.assertTrue(result.in_string(text.index(",")))

    def test_string_at(self) -> None:
        result = scan('{"a": 1}')
        token = result.string_at(1)
        self.assertIsNotNone(token)
        assert token is not None
        self.assertEqual(token.value, '"a"')
        self.assertIsNone(result.string_at(2))

    def test_structural_before_is_nearest_first(self) -> None:
        result = scan("[{}, []]")
        values = [t.value for t in result.structural_before(5, 100)]
        self.assertEqual(values, [",", "}", "{", "["])

    def test_structural_before_respects_window(self) -> None:
        result = scan("[" + " " * 20 + "]")
        self.assertEqual(result.structural_before(21, 5), [])


class TestArrayContext(unittest.TestCase):
    """Test the backward array-context scan."""

    def test_element_after_object_in_array(self) -> None:
        text = '[{"a": 1}, "x"'
        result = scan(text)
        self.assertTrue(is_in_array_context(result, text.index('"x"'), 500))

    def test_property_in_object(self) -> None:
        text = '{"a": [1], "b"'
        result = scan(text)
        self.assertFalse(is_in_array_context(result, text.index('"b"'), 500))

    def test_brackets_inside_strings_are_ignored(self) -> None:
        text = '{"a": "[", "b"'
        result = scan(text)
        self.assertFalse(is_in_array_context(result, text.index('"b"'), 500))

    def test_window_limits_scan(self) -> None:
        text = "[" + " " * 50 + '"x"'
        result = scan(text)
        self.assertTrue(is_in_array_context(result, text.index('"x"'), 500))
        self.assertFalse(is_in_array_context(result, text.index('"x"'), 10))


class TestNextSignificantChar(unittest.TestCase):
    def test_skips_whitespace_and_commas(self) -> None:
        self.assertEqual(next_significant_char('] ,\n "a"', 1), '"')

    def test_end_of_text(self) -> None:
        self.assertIsNone(next_significant_char("]  ", 1))


if __name__ == "__main__":
    unittest.main()
