"""
Type constraint implementation.
"""

from typing import Any, List, Union

from .base import Constraint, ValidationContext
from ..api import ErrorCode, InternalInvariantError
from ..utils import TypeUtils


class TypeConstraintImpl(Constraint):
    """
    Constraint that validates a value's type against one or more possible types.
    """

    def __init__(self, types: Union[str, List[str]]):
        """
        Initialize a new type constraint.

        Args:
            types: JSON type name or list of type names

        Raises:
            InternalInvariantError: If a type name is not a JSON type
        """
        self.specified_types = frozenset([types] if isinstance(types, str) else types)

        unknown = self.specified_types - TypeUtils.JSON_TYPES
        if unknown or not self.specified_types:
            raise InternalInvariantError(f"Unknown JSON type(s): {sorted(unknown)}")

    def validate(self, value: Any, context: ValidationContext) -> bool:
        if TypeUtils.matches_type(value, self.specified_types):
            return True

        types_list = sorted(self.specified_types)
        context.add_error(
            ErrorCode.TYPE_ERROR,
            f"Expected {', '.join(types_list)}, got {TypeUtils.get_json_type(value)}",
            detail={"type": ",".join(types_list)},
            value=value
        )
        return False

    def __str__(self) -> str:
        return f"TypeConstraint(types={sorted(self.specified_types)})"
