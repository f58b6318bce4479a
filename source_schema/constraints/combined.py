"""
Combined constraint implementation.
"""

from typing import Any, List

from .base import Constraint, ValidationContext


class CombinedConstraint(Constraint):
    """
    Constraint that combines multiple constraints.

    This is used for schemas that have multiple validations at the same level,
    e.g. ``{"type": "string", "enum": ["zip"]}``. An empty combination accepts
    any value.
    """

    def __init__(self, constraints: List[Constraint]):
        self.constraints = tuple(constraints)

    def validate(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        for constraint in self.constraints:
            if not constraint.validate(value, context):
                valid = False

        return valid

    def __str__(self) -> str:
        return f"CombinedConstraint(constraints={len(self.constraints)})"

    def __repr__(self) -> str:
        return f"CombinedConstraint(constraints={[str(c) for c in self.constraints]})"
