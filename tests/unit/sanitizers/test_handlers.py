"""
Test cases for JavaScript expression handlers.
"""

import json
import unittest

from jsonmend.sanitizers.handlers import ConcatenationChainCollapser, collapse_chain


class TestCollapseChain(unittest.TestCase):
    def test_literals_are_merged(self) -> None:
        self.assertEqual(collapse_chain(['"a"', '"b"', '"c"']), '"abc"')

    def test_identifier_keeps_first_literal(self) -> None:
        self.assertEqual(collapse_chain(["BASE", '"/x"', "TAIL", '"/y"']), '"/x"')

    def test_identifiers_only(self) -> None:
        self.assertEqual(collapse_chain(["A", "B"]), '""')


class TestConcatenationChainCollapser(unittest.TestCase):
    """Test collapsing `+` chains used as values."""

    def test_identifier_before_literal(self) -> None:
        outcome = ConcatenationChainCollapser().apply('{"path": BASE_PATH + "/file.ts"}')
        self.assertTrue(outcome.changed)
        self.assertEqual(outcome.content, '{"path": "/file.ts"}')
        self.assertEqual(outcome.repairs, ("Collapsed 1 concatenation chain(s)",))

    def test_literal_chain_is_merged(self) -> None:
        outcome = ConcatenationChainCollapser().apply('{"name": "My" + "Class", "n": 1}')
        self.assertEqual(json.loads(outcome.content), {"name": "MyClass", "n": 1})

    def test_literal_before_identifier(self) -> None:
        outcome = ConcatenationChainCollapser().apply('{"name": "MyClass" + SUFFIX}')
        self.assertEqual(outcome.content, '{"name": "MyClass"}')

    def test_identifier_only_chain(self) -> None:
        outcome = ConcatenationChainCollapser().apply('{"path": BASE + DIR}')
        self.assertEqual(outcome.content, '{"path": ""}')

    def test_array_elements(self) -> None:
        outcome = ConcatenationChainCollapser().apply('["a" + "b", "c"]')
        self.assertEqual(outcome.content, '["ab", "c"]')

    def test_plus_inside_string_is_kept(self) -> None:
        text = '{"note": "x: A + B, done"}'
        self.assertFalse(ConcatenationChainCollapser().apply(text).changed)

    def test_exponent_is_not_a_chain(self) -> None:
        self.assertFalse(ConcatenationChainCollapser().apply('{"a": 1e+5}').changed)

    def test_second_application_is_a_no_op(self) -> None:
        first = ConcatenationChainCollapser().apply('{"a": X + "1", "b": "2" + "3"}')
        self.assertEqual(first.content, '{"a": "1", "b": "23"}')
        self.assertFalse(ConcatenationChainCollapser().apply(first.content).changed)


if __name__ == "__main__":
    unittest.main()
