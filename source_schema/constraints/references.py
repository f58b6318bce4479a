"""
Reference constraint implementation.
"""

from typing import Any, Optional

from .base import Constraint, ValidationContext
from ..api import InternalInvariantError


class ReferenceConstraint(Constraint):
    """
    Constraint that delegates to another, already compiled schema.

    The compiler creates the reference first and binds its target once the
    target has been compiled, which lets recursive schemas refer to
    themselves. A reference is never rebound.
    """

    def __init__(self, reference: str, target: Optional[Constraint] = None):
        """
        Initialize a new reference constraint.

        Args:
            reference: Reference as written in the schema, e.g. ``#/definitions/x``
            target: Compiled target, if already known
        """
        self.reference = reference
        self._target = target

    @property
    def target(self) -> Optional[Constraint]:
        return self._target

    def bind(self, target: Constraint) -> None:
        """
        Attach the compiled target.

        Raises:
            InternalInvariantError: If the reference is already bound
        """
        if self._target is not None:
            raise InternalInvariantError(f"Reference '{self.reference}' is already bound")
        self._target = target

    def validate(self, value: Any, context: ValidationContext) -> bool:
        if self._target is None:
            raise InternalInvariantError(f"Reference '{self.reference}' was never resolved")

        with context.at_schema(self.reference):
            return self._target.validate(value, context)

    def __str__(self) -> str:
        return f"ReferenceConstraint(reference='{self.reference}')"
