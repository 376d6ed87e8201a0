"""
Integration tests for properties that hold across all strategies.
"""

import json
import unittest
from concurrent.futures import ThreadPoolExecutor

from jsonmend import JsonProcessor, ProcessingOptions, SanitizerPipeline, parse_and_validate
from jsonmend.sanitizers.registry import default_strategies
from jsonmend.utils.config import SanitizerConfig
from jsonmend.validation import CallableValidator

VALID_DOCUMENTS = [
    '{"msg": "a, b]"}',
    '{"a": "}, xy\\"id\\": 2", "b": [1, 2]}',
    '["```", "undefined", "{name: 1}"]',
    '{"nested": {"list": [{"x": null}, {"y": true}], "s": "[{]}"}}',
    '{"html": "<a href=\\"x\\">"}',
    "[]",
    '"just a string"',
]


class TestStringLiteralSafety(unittest.TestCase):
    """Valid documents pass through every strategy untouched."""

    def test_valid_documents_parse_without_steps(self) -> None:
        for text in VALID_DOCUMENTS:
            result = parse_and_validate(text, "valid")
            self.assertTrue(result.success, text)
            self.assertEqual(result.steps, (), text)
            self.assertEqual(result.data, json.loads(text))

    def test_no_strategy_changes_valid_documents(self) -> None:
        config = SanitizerConfig()
        for strategy in default_strategies():
            for text in VALID_DOCUMENTS:
                outcome = strategy.apply(text, config)
                self.assertFalse(outcome.changed, f"{strategy.name} changed {text!r}")
                self.assertEqual(outcome.content, text)

    def test_pipeline_on_valid_document(self) -> None:
        result = SanitizerPipeline.create_default_pipeline()('{"msg": "a, b]"}')
        self.assertFalse(result.changed)
        self.assertEqual(result.content, '{"msg": "a, b]"}')


class TestIdempotence(unittest.TestCase):
    """Repaired output gives no strategy anything further to do."""

    TRIGGERS = {
        "trim_whitespace": "  [1] \n",
        "remove_code_fences": '```json\n{"a": 1}\n```',
        "remove_control_chars": '{"a": "x\ny"}',
        "extract_largest_json_span": 'Result: {"a": 1} done',
        "collapse_duplicate_json_object": '{"a": 1}\n{"a": 1}',
        "add_missing_commas": '{"a": 1\n"b": 2}',
        "remove_trailing_commas": '{"a": 1,}',
        "fix_mismatched_delimiters": '{"a": [1, 2}, "b": {"x": "y"]]',
        "fix_concatenation_chains": '{"a": X + "1"}',
        "fix_over_escaped_sequences": r'{"a": "b\,"}',
        "fix_unescaped_quotes": '{"html": "<img src="a.png"/>"}',
        "complete_truncated_structures": '{"a": {"b": 1',
        "fix_missing_array_object_braces": '{"items": [{"id":1}, xy"id":2}]}',
        "fix_undefined_values": '{"a": undefined}',
        "fix_unquoted_property_names": "{a: 1}",
    }

    MALFORMED = [
        '```json\n{"a": 1}\n```',
        '```json\n{"a": 1,}\n```\n',
        '{"a": 1\n"b": 2}',
        '{"a": [1, 2}',
        '{"a": {"b": 1',
        '{"items": [{"id":1}, xy"id":2}]}',
        '{name: "x", value: undefined}',
        'Sure: {"path": BASE + "/x.ts"} ok',
        r'{"a": "value\, next\)"}',
    ]

    def test_every_strategy_has_a_trigger(self) -> None:
        self.assertEqual(set(self.TRIGGERS), {s.name for s in default_strategies()})

    def test_strategy_twice_in_a_row(self) -> None:
        config = SanitizerConfig()
        for strategy in default_strategies():
            first = strategy.apply(self.TRIGGERS[strategy.name], config)
            self.assertTrue(first.changed, strategy.name)
            second = strategy.apply(first.content, config)
            self.assertFalse(second.changed, f"{strategy.name} re-fired on {first.content!r}")
            self.assertEqual(second.content, first.content)

    def test_pipeline_rerun_after_successful_parse(self) -> None:
        pipeline = SanitizerPipeline.create_default_pipeline()
        for text in self.MALFORMED:
            first = pipeline(text)
            json.loads(first.content)
            second = pipeline(first.content)
            self.assertEqual(second.applied_strategies, (), text)
            self.assertEqual(second.content, first.content)


class TestEarlyExit(unittest.TestCase):
    def test_validation_failure_attempts_no_sanitizer(self) -> None:
        def require_y(value):
            if not isinstance(value.get("y"), str):
                raise TypeError("y must be a string")
            return value

        options = ProcessingOptions(shape_validator=CallableValidator(require_y))
        result = parse_and_validate('{"x": 1}', "early", options)
        self.assertFalse(result.success)
        self.assertEqual(result.error.applied_steps, ())
        self.assertEqual(result.error.sanitized_text, '{"x": 1}')


class TestConcurrency(unittest.TestCase):
    """A shared processor gives the same answers from many threads."""

    CASES = {
        '{"a": 1\n"b": 2}': {"a": 1, "b": 2},
        '{"a": 1,}': {"a": 1},
        '{"a": [1, 2}': {"a": [1, 2]},
        '{"a": {"b": 1': {"a": {"b": 1}},
        '{"items": [{"id":1}, xy"id":2}]}': {"items": [{"id": 1}, {"id": 2}]},
    }

    def test_parallel_runs(self) -> None:
        processor = JsonProcessor()
        inputs = list(self.CASES) * 20

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda t: processor.parse_and_validate(t, "t"), inputs))

        for text, result in zip(inputs, results):
            self.assertTrue(result.success)
            self.assertEqual(result.data, self.CASES[text])


if __name__ == "__main__":
    unittest.main()
