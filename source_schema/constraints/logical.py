"""
Logical constraint implementations.
"""

from typing import Any, List, Tuple

from .base import Constraint, ValidationContext
from ..api import Diagnostic, ErrorCode


class AllOfConstraint(Constraint):
    """
    Constraint that requires a value to satisfy all sub-constraints.
    """

    def __init__(self, constraints: List[Constraint]):
        """
        Initialize a new all-of constraint.

        Args:
            constraints: List of constraints that must all be satisfied
        """
        self.constraints = tuple(constraints)

    def validate(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        for i, constraint in enumerate(self.constraints):
            with context.with_schema_path("allOf", i):
                if not constraint.validate(value, context):
                    valid = False

        return valid

    def __str__(self) -> str:
        return f"AllOfConstraint(constraints={len(self.constraints)})"

    def __repr__(self) -> str:
        return f"AllOfConstraint(constraints={[str(c) for c in self.constraints]})"


class OneOfConstraint(Constraint):
    """
    Constraint that requires a value to satisfy exactly one sub-constraint.

    Every alternative is evaluated in an isolated context. On failure a single
    ``oneOf`` diagnostic is reported at the current path. An alternative that
    rejected the value's type outright is considered irrelevant; when exactly
    one alternative is relevant its diagnostics are reported as well, which
    points the author at the nested field that actually went wrong.
    """

    def __init__(self, constraints: List[Constraint]):
        """
        Initialize a new one-of constraint.

        Args:
            constraints: List of constraints, exactly one of which must be satisfied
        """
        self.constraints = tuple(constraints)

    def _is_relevant(self, errors: List[Diagnostic], context: ValidationContext) -> bool:
        here = tuple(context.path_parts)
        return not any(
            error.code == ErrorCode.TYPE_ERROR and error.path == here
            for error in errors
        )

    def validate(self, value: Any, context: ValidationContext) -> bool:
        matching: List[int] = []
        failures: List[Tuple[int, List[Diagnostic]]] = []

        for i, constraint in enumerate(self.constraints):
            with context.with_schema_path("oneOf", i):
                sub_context = context.spawn()
                if constraint.validate(value, sub_context):
                    matching.append(i)
                else:
                    failures.append((i, sub_context.errors))

        if len(matching) == 1:
            return True

        if not matching:
            relevant = [errors for _, errors in failures if self._is_relevant(errors, context)]
            if len(relevant) == 1:
                context.extend(relevant[0])

            context.add_error(
                ErrorCode.ONE_OF_MISMATCH,
                "Value does not match any of the allowed schemas",
                detail={"passingSchemas": None},
                value=value
            )
        else:
            context.add_error(
                ErrorCode.ONE_OF_MISMATCH,
                f"Value matches {len(matching)} schemas, but should match exactly one",
                detail={"passingSchemas": tuple(matching)},
                value=value
            )

        return False

    def __str__(self) -> str:
        return f"OneOfConstraint(constraints={len(self.constraints)})"

    def __repr__(self) -> str:
        return f"OneOfConstraint(constraints={[str(c) for c in self.constraints]})"
