"""
Validator implementation.
"""

from typing import Any

from .constraints import Constraint, ValidationContext
from .api import ValidationResult


class Validator:
    """
    Validates data against compiled constraint trees.

    Each call gets its own ValidationContext, so a single Validator and a
    single constraint tree can be shared between threads.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validator.

        Args:
            verbose: Whether to include additional details in error messages
        """
        self.verbose = verbose

    def validate(self, data: Any, constraint: Constraint) -> ValidationResult:
        """
        Validate data against a compiled constraint.

        Args:
            data: Data to validate
            constraint: Compiled constraint to validate against

        Returns:
            ValidationResult containing validation status and errors
        """
        context = ValidationContext(verbose=self.verbose)
        valid = constraint.validate(data, context)

        return ValidationResult(
            valid=valid and not context.errors,
            diagnostics=tuple(context.errors)
        )
