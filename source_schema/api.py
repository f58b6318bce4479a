"""
Public API for the source document validator.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class ErrorCode(str, Enum):
    """Rule identifiers reported by diagnostics."""
    TYPE_ERROR = "type"
    ENUM_MISMATCH = "enum"
    PATTERN_MISMATCH = "pattern"
    FORMAT_MISMATCH = "format"
    REQUIRED_PROPERTY_MISSING = "required"
    ADDITIONAL_PROPERTY_NOT_ALLOWED = "additionalProperties"
    ONE_OF_MISMATCH = "oneOf"
    ARRAY_TOO_SHORT = "minItems"
    ARRAY_TOO_LONG = "maxItems"


class SourceSchemaError(Exception):
    """Base class for all errors raised by this package."""


class SchemaConstructionError(SourceSchemaError):
    """The rule document could not be turned into a constraint tree."""


class ReferenceResolutionError(SchemaConstructionError):
    """An external schema document could not be loaded."""

    def __init__(self, uri: str, message: str):
        super().__init__(f"Failed to resolve '{uri}': {message}")
        self.uri = uri


class InternalInvariantError(SourceSchemaError):
    """A constraint violates its own structural invariants."""


def _format_segment(segment: Union[str, int]) -> str:
    if isinstance(segment, int):
        return f"[{segment}]"
    if segment.isidentifier():
        return f".{segment}"
    escaped = segment.replace("\\", "\\\\").replace("'", "\\'")
    return f"['{escaped}']"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single validation failure.

    Attributes:
        code: The rule that failed
        path: Segments leading from the document root to the failing value
        message: Human-readable error message
        schema_path: Location of the failing rule inside the schema
        detail: Rule-specific parameters (missingProperty, additionalProperty, ...)
        value: The value that failed validation
    """
    code: ErrorCode
    path: Tuple[Union[str, int], ...]
    message: str
    schema_path: str = "#"
    detail: Mapping[str, Any] = field(default_factory=dict)
    value: Any = None

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "detail", MappingProxyType(dict(self.detail)))

    def __hash__(self) -> int:
        # detail and value can hold lists, so only the always-hashable fields take part.
        return hash((self.code, self.path, self.schema_path, self.message))

    @property
    def rule(self) -> str:
        return self.code.value

    @property
    def data_path(self) -> str:
        """Dot/bracket rendering of ``path``; the root is the empty string."""
        return "".join(_format_segment(segment) for segment in self.path)

    def __str__(self) -> str:
        return f"Error at '{self.data_path}': {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating one document.

    Attributes:
        valid: Whether the validation was successful
        diagnostics: Ordered validation failures (empty when valid)
    """
    valid: bool = True
    diagnostics: Tuple[Diagnostic, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

    def __bool__(self) -> bool:
        return self.valid

    def by_rule(self, rule: Union[ErrorCode, str]) -> Tuple[Diagnostic, ...]:
        """Return the diagnostics reported for ``rule``."""
        return tuple(d for d in self.diagnostics if d.code == rule)


class SourceValidator:
    """
    Main entrypoint class for source document validation.

    The rule tree is compiled once when the validator is created and is then
    shared read-only by every call to :meth:`validate`, so one instance can
    serve many threads.
    """

    def __init__(self,
                 schema: Optional[Union[Dict[str, Any], str, Path]] = None,
                 resolver=None,
                 verbose: bool = False):
        """
        Initialize a new source validator.

        Args:
            schema: Rule document (mapping or path); defaults to the bundled
                source schema
            resolver: SchemaResolver used for external references; defaults
                to the bundled offline documents
            verbose: Whether to log compilation details

        Raises:
            SchemaConstructionError: If the rule document cannot be compiled
            InternalInvariantError: If the rule document is self-inconsistent
        """
        from .schema import load_source_schema
        from .validator import Validator

        self.verbose = verbose
        self.constraint = load_source_schema(schema, resolver=resolver, verbose=verbose)
        self.validator = Validator(verbose=verbose)

    def validate(self, document: Any) -> ValidationResult:
        """
        Validate one candidate document.

        Args:
            document: Parsed source document

        Returns:
            ValidationResult containing the verdict and diagnostics
        """
        return self.validator.validate(document, self.constraint)

    def is_valid(self, document: Any) -> bool:
        return self.validate(document).valid

    def validate_file(self, path: Union[str, Path]) -> ValidationResult:
        """
        Load a JSON source document from disk and validate it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file contains invalid JSON
        """
        from .loader import load_json

        return self.validate(load_json(path))
