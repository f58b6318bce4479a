"""
Object constraint implementation.
"""

from typing import Any, Dict, List, Optional

from .base import TypeConstraint, ValidationContext, Constraint
from ..api import ErrorCode, InternalInvariantError


class ObjectConstraint(TypeConstraint):
    """
    Constraint for validating object values.

    Objects are checked in three phases and every phase always runs, so a
    document gets its complete diagnosis in one call: required properties,
    then declared properties, then additional properties.
    """

    def __init__(self,
                 properties: Optional[Dict[str, Constraint]] = None,
                 required: Optional[List[str]] = None,
                 additional_properties: bool = True,
                 enforce_type: bool = True):
        """
        Initialize a new object constraint.

        Args:
            properties: Constraints for specific properties
            required: Names that must be present
            additional_properties: Whether undeclared properties are allowed
            enforce_type: Whether non-object values are reported

        Raises:
            InternalInvariantError: If the property set is inconsistent
        """
        super().__init__(enforce_type=enforce_type)
        self.properties = dict(properties or {})
        self.required = tuple(required or ())
        self.additional_properties = additional_properties

        duplicates = sorted({name for name in self.required if self.required.count(name) > 1})
        if duplicates:
            raise InternalInvariantError(f"Duplicate required properties: {duplicates}")

        if not additional_properties:
            undeclared = [name for name in self.required if name not in self.properties]
            if undeclared:
                raise InternalInvariantError(
                    f"Closed object requires undeclared properties: {undeclared}")

    @property
    def json_type(self) -> str:
        return "object"

    def _validate_type_specific(self, value: Any, context: ValidationContext) -> bool:
        valid = True

        for prop in self.required:
            if prop not in value:
                context.add_error(
                    ErrorCode.REQUIRED_PROPERTY_MISSING,
                    f"Missing required property '{prop}'",
                    detail={"missingProperty": prop},
                    value=value
                )
                valid = False

        for prop, constraint in self.properties.items():
            if prop in value:
                with context.with_path(prop), context.with_schema_path("properties", prop):
                    if not constraint.validate(value[prop], context):
                        valid = False

        if not self.additional_properties:
            for prop in value:
                if prop not in self.properties:
                    context.add_error(
                        ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED,
                        f"Additional property '{prop}' not allowed",
                        detail={"additionalProperty": prop},
                        value=value[prop]
                    )
                    valid = False

        return valid

    def __str__(self) -> str:
        parts = []
        if self.properties:
            parts.append(f"properties={list(self.properties.keys())}")
        if self.required:
            parts.append(f"required={list(self.required)}")
        if not self.additional_properties:
            parts.append("additional_properties=False")

        return f"ObjectConstraint({', '.join(parts)})"
