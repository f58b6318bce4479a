"""
Base constraint classes for the source document validator.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Union

from ..api import Diagnostic, ErrorCode
from ..utils import JsonPointer, TypeUtils


class ValidationContext:
    """
    Context for validation operations.

    This class maintains state during one validation call: the current data
    path, the current schema location and the collected diagnostics.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validation context.

        Args:
            verbose: Whether to include additional details in messages
        """
        self.errors: List[Diagnostic] = []
        self.path_parts: List[Union[str, int]] = []
        self.schema_base: str = "#"
        self.schema_path_parts: List[str] = []
        self.verbose = verbose

    @property
    def path(self) -> str:
        """JSON Pointer for the current data location."""
        return JsonPointer.from_parts(self.path_parts)

    def schema_path_for(self, keyword: Optional[str] = None) -> str:
        """
        Get the schema location of ``keyword`` at the current schema node.

        Args:
            keyword: Schema keyword that produced an error

        Returns:
            Schema path such as ``#/properties/type/enum``
        """
        parts = list(self.schema_path_parts)
        if keyword is not None:
            parts.append(keyword)
        return self.schema_base + JsonPointer.from_parts(parts)

    def add_error(self,
                  code: ErrorCode,
                  message: str,
                  detail: Optional[Mapping[str, Any]] = None,
                  value: Any = None) -> None:
        """
        Add a diagnostic at the current location.

        Args:
            code: Error code; its value is also the keyword in the schema path
            message: Error message
            detail: Rule-specific parameters
            value: Value that failed validation
        """
        self.errors.append(Diagnostic(
            code=code,
            path=tuple(self.path_parts),
            message=message,
            schema_path=self.schema_path_for(code.value),
            detail=detail or {},
            value=value
        ))

    def extend(self, errors: List[Diagnostic]) -> None:
        self.errors.extend(errors)

    def spawn(self) -> "ValidationContext":
        """
        Create an isolated context positioned at the same location.

        Errors collected in the child are not visible here until they are
        copied over with :meth:`extend`.
        """
        child = ValidationContext(verbose=self.verbose)
        child.path_parts = self.path_parts.copy()
        child.schema_base = self.schema_base
        child.schema_path_parts = self.schema_path_parts.copy()
        return child

    def with_path(self, part: Union[str, int]):
        """
        Context manager for adding a data path part temporarily.

        Args:
            part: Property name or array index

        Returns:
            Context manager
        """
        return PathContext(self, part)

    def with_schema_path(self, *parts: Any):
        """
        Context manager for adding schema path parts temporarily.

        Args:
            parts: Schema path segments to add

        Returns:
            Context manager
        """
        return SchemaPathContext(self, parts)

    def at_schema(self, base: str):
        """
        Context manager for restarting the schema path at a reference.

        Args:
            base: Reference the schema path restarts from

        Returns:
            Context manager
        """
        return SchemaBaseContext(self, base)

    def __str__(self) -> str:
        """String representation of the validation context."""
        return f"ValidationContext(path={self.path}, errors={len(self.errors)})"


class PathContext:
    """Context manager for temporarily adding a path part."""

    def __init__(self, context: ValidationContext, part: Union[str, int]):
        self.context = context
        self.part = part

    def __enter__(self):
        self.context.path_parts.append(self.part)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.context.path_parts.pop()


class SchemaPathContext:
    """Context manager for temporarily adding schema path parts."""

    def __init__(self, context: ValidationContext, parts: tuple):
        self.context = context
        self.parts = [str(part) for part in parts]

    def __enter__(self):
        self.context.schema_path_parts.extend(self.parts)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        del self.context.schema_path_parts[len(self.context.schema_path_parts) - len(self.parts):]


class SchemaBaseContext:
    """Context manager for temporarily rebasing the schema path."""

    def __init__(self, context: ValidationContext, base: str):
        self.context = context
        self.base = base
        self._saved = None

    def __enter__(self):
        self._saved = (self.context.schema_base, self.context.schema_path_parts)
        self.context.schema_base = self.base
        self.context.schema_path_parts = []
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.context.schema_base, self.context.schema_path_parts = self._saved


class Constraint(ABC):
    """
    Base class for all schema constraints.

    Constraints are built once by the compiler and never modified while a
    document is being validated.
    """

    @abstractmethod
    def validate(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate a value against this constraint.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """

    def __str__(self) -> str:
        return f"{self.__class__.__name__}"

    def __repr__(self) -> str:
        return self.__str__()


class TypeConstraint(Constraint, ABC):
    """
    Base class for type-specific constraints.

    When ``enforce_type`` is False the constraint only applies to values of
    its own type and silently accepts everything else, which is how keywords
    like ``pattern`` behave when a schema omits ``type``.
    """

    def __init__(self, enforce_type: bool = True):
        self.enforce_type = enforce_type

    @property
    @abstractmethod
    def json_type(self) -> str:
        """JSON type handled by this constraint."""

    def validate(self, value: Any, context: ValidationContext) -> bool:
        if not TypeUtils.matches_type(value, self.json_type):
            if not self.enforce_type:
                return True
            context.add_error(
                ErrorCode.TYPE_ERROR,
                f"Expected {self.json_type}, got {TypeUtils.get_json_type(value)}",
                detail={"type": self.json_type},
                value=value
            )
            return False

        return self._validate_type_specific(value, context)

    @abstractmethod
    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        """
        Validate type-specific constraints.

        Args:
            value: Value to validate (guaranteed to be of the correct type)
            context: Validation context

        Returns:
            True if validation succeeds, False otherwise
        """
