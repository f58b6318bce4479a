"""
Enum constraint implementation.
"""

from typing import Any, List

from .base import Constraint, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class EnumConstraint(Constraint):
    """
    Constraint that validates a value against an enumeration.
    """

    def __init__(self, values: List[Any], case_sensitive: bool = True):
        """
        Initialize a new enum constraint.

        Args:
            values: Ordered list of allowed values
            case_sensitive: Whether string literals are compared case-sensitively
        """
        self.values = tuple(values)
        self.case_sensitive = case_sensitive

    def _matches(self, value: Any, allowed: Any) -> bool:
        if not self.case_sensitive and isinstance(value, str) and isinstance(allowed, str):
            return value.casefold() == allowed.casefold()
        return TypeUtils.json_equal(value, allowed)

    def validate(self, value: Any, context: ValidationContext) -> bool:
        if any(self._matches(value, allowed) for allowed in self.values):
            return True

        context.add_error(
            ErrorCode.ENUM_MISMATCH,
            f"Value {value!r} not in enumeration: {list(self.values)}",
            detail={"allowedValues": list(self.values)},
            value=value
        )
        return False

    def __str__(self) -> str:
        return f"EnumConstraint(values={list(self.values)})"
