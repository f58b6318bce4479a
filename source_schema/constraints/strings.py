"""
String constraint implementation.
"""

import re
from typing import Any, Callable, Dict, Optional

from .base import TypeConstraint, ValidationContext
from ..api import ErrorCode, InternalInvariantError

# Local part and domain rules for syntactically valid addresses.
_EMAIL_PATTERN = re.compile(
    r"[a-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
    r"(?:\.[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?)*",
    re.IGNORECASE
)


def _is_email(value: str) -> bool:
    return _EMAIL_PATTERN.fullmatch(value) is not None


FORMAT_CHECKERS: Dict[str, Callable[[str], bool]] = {
    "email": _is_email,
}


class StringConstraint(TypeConstraint):
    """
    Constraint for validating string values.
    """

    def __init__(self,
                 pattern: Optional[str] = None,
                 format: Optional[str] = None,
                 case_insensitive: bool = False,
                 enforce_type: bool = True):
        """
        Initialize a new string constraint.

        Args:
            pattern: Regular expression the whole string must match
            format: Name of a semantic format (see FORMAT_CHECKERS)
            case_insensitive: Whether the pattern ignores case
            enforce_type: Whether non-string values are reported

        Raises:
            InternalInvariantError: If the pattern or format is invalid
        """
        super().__init__(enforce_type=enforce_type)
        self.pattern = pattern
        self.format = format
        self.case_insensitive = case_insensitive
        self._compiled_pattern: Optional[re.Pattern] = None

        if pattern is not None:
            # Case folding stays within ASCII, so U+212A never matches [a-z].
            flags = re.IGNORECASE | re.ASCII if case_insensitive else 0
            try:
                self._compiled_pattern = re.compile(pattern, flags)
            except re.error as e:
                raise InternalInvariantError(f"Invalid regex pattern '{pattern}': {e}") from e

        if format is not None and format not in FORMAT_CHECKERS:
            raise InternalInvariantError(f"Unknown string format '{format}'")

    @property
    def json_type(self) -> str:
        return "string"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        if self._compiled_pattern is not None and not self._compiled_pattern.fullmatch(value):
            context.add_error(
                ErrorCode.PATTERN_MISMATCH,
                f"String '{value}' does not match pattern '{self.pattern}'",
                detail={"pattern": self.pattern},
                value=value
            )
            valid = False

        if self.format is not None and not FORMAT_CHECKERS[self.format](value):
            context.add_error(
                ErrorCode.FORMAT_MISMATCH,
                f"String '{value}' is not a valid {self.format}",
                detail={"format": self.format},
                value=value
            )
            valid = False

        return valid

    def __str__(self) -> str:
        parts = []
        if self.pattern is not None:
            parts.append(f"pattern={self.pattern}")
        if self.format is not None:
            parts.append(f"format={self.format}")
        if self.case_insensitive:
            parts.append("case_insensitive=True")

        return f"StringConstraint({', '.join(parts)})"
