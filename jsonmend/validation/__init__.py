"""
Shape validation adapters.
"""

from ..core.interfaces import ValidationOutcome
from .validators import CallableValidator, PydanticValidator, render_issues

__all__ = ["CallableValidator", "PydanticValidator", "ValidationOutcome", "render_issues"]
