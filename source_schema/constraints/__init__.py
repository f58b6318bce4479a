"""
Constraint package initialization.
"""

from .base import Constraint, TypeConstraint, ValidationContext
from .strings import StringConstraint, FORMAT_CHECKERS
from .arrays import ArrayConstraint
from .objects import ObjectConstraint
from .logical import AllOfConstraint, OneOfConstraint
from .enums import EnumConstraint
from .references import ReferenceConstraint
from .types import TypeConstraintImpl
from .combined import CombinedConstraint

__all__ = [
    "Constraint",
    "TypeConstraint",
    "ValidationContext",
    "StringConstraint",
    "FORMAT_CHECKERS",
    "ArrayConstraint",
    "ObjectConstraint",
    "AllOfConstraint",
    "OneOfConstraint",
    "EnumConstraint",
    "ReferenceConstraint",
    "TypeConstraintImpl",
    "CombinedConstraint"
]
