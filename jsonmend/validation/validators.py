"""
Shape validators.

The processor only needs `validate(value) -> ValidationOutcome`; these
adapters cover the two common cases of a plain checking function and a
pydantic model or type.
"""

from collections.abc import Sequence
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from ..core.interfaces import ValidationOutcome

MAX_RENDERED_ISSUES = 10


def _format_issue(issue: Any) -> str:
    if isinstance(issue, dict) and "msg" in issue:
        location = ".".join(str(part) for part in issue.get("loc", ()))
        return f"{location}: {issue['msg']}" if location else str(issue["msg"])
    return str(issue)


def render_issues(issues: Sequence[Any]) -> str:
    """Render shape violations as a single line."""
    if not issues:
        return "value does not match the expected shape"
    rendered = [_format_issue(issue) for issue in issues[:MAX_RENDERED_ISSUES]]
    if len(issues) > MAX_RENDERED_ISSUES:
        rendered.append(f"... and {len(issues) - MAX_RENDERED_ISSUES} more")
    return "; ".join(rendered)


class CallableValidator:
    """
    Wraps a function that returns the typed value or raises on a bad shape.

    ValueError, TypeError and KeyError count as shape violations; any other
    exception propagates.
    """

    def __init__(self, check: Callable[[Any], Any]):
        self.check = check

    def validate(self, value: Any) -> ValidationOutcome:
        try:
            return ValidationOutcome.ok(self.check(value))
        except (ValueError, TypeError, KeyError) as e:
            return ValidationOutcome.failed([str(e) or type(e).__name__])

    def render_issues(self, issues: Sequence[Any]) -> str:
        return render_issues(issues)


class PydanticValidator:
    """Validates against a pydantic model, dataclass or any type TypeAdapter accepts."""

    def __init__(self, shape: Any):
        self.shape = shape
        self.adapter = TypeAdapter(shape)

    def validate(self, value: Any) -> ValidationOutcome:
        try:
            return ValidationOutcome.ok(self.adapter.validate_python(value))
        except ValidationError as e:
            return ValidationOutcome.failed(e.errors(include_url=False))

    def render_issues(self, issues: Sequence[Any]) -> str:
        return render_issues(issues)
