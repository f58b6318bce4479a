"""
Array constraint implementation.
"""

from typing import Any, Optional

from .base import TypeConstraint, ValidationContext, Constraint
from ..api import ErrorCode


class ArrayConstraint(TypeConstraint):
    """
    Constraint for validating array values.
    """

    def __init__(self,
                 items: Optional[Constraint] = None,
                 min_items: Optional[int] = None,
                 max_items: Optional[int] = None,
                 enforce_type: bool = True):
        """
        Initialize a new array constraint.

        Args:
            items: Constraint every item must satisfy
            min_items: Minimum number of items
            max_items: Maximum number of items
            enforce_type: Whether non-array values are reported
        """
        super().__init__(enforce_type=enforce_type)
        self.items = items
        self.min_items = min_items
        self.max_items = max_items

    @property
    def json_type(self) -> str:
        return "array"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        if self.min_items is not None and len(value) < self.min_items:
            context.add_error(
                ErrorCode.ARRAY_TOO_SHORT,
                f"Array has {len(value)} items, but minimum is {self.min_items}",
                detail={"limit": self.min_items},
                value=value
            )
            valid = False

        if self.max_items is not None and len(value) > self.max_items:
            context.add_error(
                ErrorCode.ARRAY_TOO_LONG,
                f"Array has {len(value)} items, but maximum is {self.max_items}",
                detail={"limit": self.max_items},
                value=value
            )
            valid = False

        if self.items is not None:
            with context.with_schema_path("items"):
                for i, item in enumerate(value):
                    with context.with_path(i):
                        if not self.items.validate(item, context):
                            valid = False

        return valid

    def __str__(self) -> str:
        parts = []
        if self.items is not None:
            parts.append(f"items={self.items}")
        if self.min_items is not None:
            parts.append(f"min_items={self.min_items}")
        if self.max_items is not None:
            parts.append(f"max_items={self.max_items}")

        return f"ArrayConstraint({', '.join(parts)})"
