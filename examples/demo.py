"""
jsonmend demonstration script.
"""

import logging
from typing import Optional

from pydantic import BaseModel

import jsonmend


class Method(BaseModel):
    name: str
    returns: Optional[str] = None


class ClassSummary(BaseModel):
    purpose: str
    methods: list[Method]


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("jsonmend - LLM JSON Repair Demo")
    print("=" * 40)

    examples = [
        ('```json\n{"a": 1, "b": [1, 2]}\n```', "Code fences"),
        ('Sure! Here it is: {"answer": 42} Anything else?', "Surrounding prose"),
        ('{\n  "a": 1\n  "b": 2\n}', "Missing commas"),
        ('{"items": [1, 2, 3,], "active": true,}', "Trailing commas"),
        ('{"a": [1, 2}, "b": {"x": "y"]]', "Mismatched delimiters"),
        ('{"summary": {"text": "The service stores', "Truncated response"),
        ('{"items": [{"id":1}, xy"id":2}]}', "Stray token before an array object"),
        ('{"html": "<a href="https://example.com">link</a>"}', "Unescaped attribute quotes"),
        ('{name: "widget", value: undefined}', "JavaScript literals"),
    ]

    for i, (text, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {text!r}")

        result = jsonmend.parse_and_validate(text, description)
        if result.success:
            print(f"Output: {result.data}")
            print(f"Steps:  {', '.join(result.steps) or '(none)'}")
        else:
            print(f"Error:  [{result.error.kind.value}] {result.error}")

    print(f"\n{len(examples) + 1}. Shape validation")
    options = jsonmend.ProcessingOptions(
        shape_validator=jsonmend.PydanticValidator(ClassSummary)
    )
    response = '{"purpose": "Billing", "methods": [{"name": "charge", "returns": "Receipt"},]}'
    result = jsonmend.parse_and_validate(response, "ClassSummary", options)
    if result.success:
        print(f"Output: {result.data!r}")

    result = jsonmend.parse_and_validate('{"purpose": 3, "methods": []}', "ClassSummary", options)
    if not result.success:
        print(f"Error:  {result.error}")


if __name__ == "__main__":
    main()
