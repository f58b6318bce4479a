"""
Utility classes and functions for the source document validator.
"""

from typing import Any, Iterable, List, Set, Union


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    JSON Pointers are used to reference specific locations within a JSON document.
    """

    @staticmethod
    def from_parts(parts: Iterable[Any]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: Path segments

        Returns:
            JSON Pointer string
        """
        parts = list(parts)
        if not parts:
            return ""

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def escape_part(part: Any) -> str:
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")

    @staticmethod
    def unescape_part(part: str) -> str:
        # Replace ~1 with / and ~0 with ~
        return part.replace("~1", "/").replace("~0", "~")

    @staticmethod
    def to_parts(pointer: str) -> List[str]:
        """
        Split a JSON Pointer into its component parts.

        Args:
            pointer: JSON Pointer string

        Returns:
            List of path segments

        Raises:
            ValueError: If the pointer does not start with '/'
        """
        if not pointer:
            return []

        if not pointer.startswith("/"):
            raise ValueError(f"Invalid JSON Pointer: {pointer}")

        return [JsonPointer.unescape_part(part) for part in pointer[1:].split("/")]

    @staticmethod
    def resolve(document: Any, pointer: str) -> Any:
        """
        Resolve a JSON Pointer within a document.

        Args:
            document: The JSON document to navigate
            pointer: JSON Pointer string

        Returns:
            The referenced value

        Raises:
            ValueError: If the pointer cannot be resolved
        """
        current = document

        for part in JsonPointer.to_parts(pointer):
            if isinstance(current, dict):
                if part not in current:
                    raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, part '{part}' not found")
                current = current[part]
            elif isinstance(current, list):
                if not part.isdigit() or int(part) >= len(current):
                    raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, invalid array index '{part}'")
                current = current[int(part)]
            else:
                raise ValueError(f"Failed to resolve JSON Pointer: {pointer}, cannot navigate into {type(current).__name__}")

        return current


class TypeUtils:
    """Utilities for working with JSON types."""

    JSON_TYPES = frozenset({"string", "integer", "number", "boolean", "array", "object", "null"})

    @staticmethod
    def get_json_type(value: Any) -> str:
        """
        Get the JSON type for a Python value.

        Floats with no fractional part count as integers.

        Args:
            value: Python value

        Returns:
            JSON type name, or "unknown" for non-JSON values
        """
        if value is None:
            return "null"
        elif isinstance(value, bool):
            return "boolean"
        elif isinstance(value, int):
            return "integer"
        elif isinstance(value, float):
            return "integer" if value.is_integer() else "number"
        elif isinstance(value, str):
            return "string"
        elif isinstance(value, list):
            return "array"
        elif isinstance(value, dict):
            return "object"
        else:
            return "unknown"

    @staticmethod
    def matches_type(value: Any, json_types: Union[str, Set[str], frozenset]) -> bool:
        """
        Check whether a value is an instance of any of the given JSON types.

        An integer is also a number.
        """
        if isinstance(json_types, str):
            json_types = {json_types}

        actual = TypeUtils.get_json_type(value)
        if actual in json_types:
            return True
        return actual == "integer" and "number" in json_types

    @staticmethod
    def json_equal(left: Any, right: Any) -> bool:
        """
        Compare two JSON values without Python's bool/int coercion.

        ``True`` does not equal ``1``, while ``1`` equals ``1.0``.
        """
        left_type = TypeUtils.get_json_type(left)
        right_type = TypeUtils.get_json_type(right)
        numeric = {"integer", "number"}
        if left_type != right_type and not (left_type in numeric and right_type in numeric):
            return False

        if left_type == "array":
            return len(left) == len(right) and all(
                TypeUtils.json_equal(a, b) for a, b in zip(left, right))
        if left_type == "object":
            return left.keys() == right.keys() and all(
                TypeUtils.json_equal(left[k], right[k]) for k in left)
        return left == right


class SchemaKeywords:
    """Constants for the supported rule document keywords."""

    TYPE = "type"

    # String keywords
    PATTERN = "pattern"
    FORMAT = "format"
    CASE_INSENSITIVE = "caseInsensitive"

    # Array keywords
    ITEMS = "items"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"

    # Object keywords
    PROPERTIES = "properties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    REQUIRED = "required"

    # Schema composition
    ALL_OF = "allOf"
    ONE_OF = "oneOf"

    ENUM = "enum"

    # References
    REF = "$ref"
    DEFINITIONS = "definitions"

    # Schema metadata, ignored during compilation
    ANNOTATIONS = frozenset({
        "$schema", "$id", "id", "title", "description", "default", "examples", "$comment",
    })

    STRING_KEYWORDS = frozenset({PATTERN, FORMAT})
    ARRAY_KEYWORDS = frozenset({ITEMS, MIN_ITEMS, MAX_ITEMS})
    OBJECT_KEYWORDS = frozenset({PROPERTIES, ADDITIONAL_PROPERTIES, REQUIRED})

    SUPPORTED = frozenset({
        TYPE, CASE_INSENSITIVE, ALL_OF, ONE_OF, ENUM, REF, DEFINITIONS,
    }) | STRING_KEYWORDS | ARRAY_KEYWORDS | OBJECT_KEYWORDS

    @staticmethod
    def is_supported(keyword: str) -> bool:
        return keyword in SchemaKeywords.SUPPORTED or keyword in SchemaKeywords.ANNOTATIONS
