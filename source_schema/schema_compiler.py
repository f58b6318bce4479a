"""
Schema compiler that turns a declarative rule document into a constraint tree.
"""

import logging
from typing import Any, Dict, List, Optional, Set
from urllib.parse import urldefrag, urljoin

from .api import InternalInvariantError, ReferenceResolutionError, SchemaConstructionError
from .constraints import (
    Constraint,
    StringConstraint,
    ArrayConstraint,
    ObjectConstraint,
    AllOfConstraint,
    OneOfConstraint,
    EnumConstraint,
    ReferenceConstraint,
    TypeConstraintImpl,
    CombinedConstraint
)
from .resolver import SchemaResolver
from .utils import JsonPointer, SchemaKeywords, TypeUtils

logger = logging.getLogger("source_schema")


class SchemaCompiler:
    """
    Compiles rule documents into immutable constraint trees.

    Every ``$ref`` reachable from the root, and every entry of the root
    document's ``definitions``, is resolved during :meth:`compile`. External
    documents are requested from the resolver; a failure there aborts
    compilation, so a compiled tree never contains a dangling reference.
    """

    def __init__(self, resolver: Optional[SchemaResolver] = None, verbose: bool = False):
        """
        Initialize a new schema compiler.

        Args:
            resolver: Resolver for documents outside the root schema
            verbose: If True, log compilation details
        """
        self.resolver = resolver
        self.verbose = verbose
        if verbose:
            logger.setLevel(logging.DEBUG)

        self._reset(None, "")

    def _reset(self, root: Optional[Dict[str, Any]], root_uri: str) -> None:
        self.root_uri = root_uri
        self.documents: Dict[str, Dict[str, Any]] = {}
        if root is not None:
            self.documents[root_uri] = root
        self.compiled: Dict[str, Constraint] = {}
        self.waiting: Dict[str, List[ReferenceConstraint]] = {}
        self.references: List[ReferenceConstraint] = []

    def compile(self, schema: Dict[str, Any]) -> Constraint:
        """
        Compile a rule document into a constraint tree.

        Args:
            schema: Rule document

        Returns:
            Root constraint of the compiled schema

        Raises:
            SchemaConstructionError: If the document is malformed or a
                reference cannot be resolved
            InternalInvariantError: If a node violates its own invariants
        """
        if not isinstance(schema, dict):
            raise SchemaConstructionError("Schema document must be an object")

        root_uri = urldefrag(schema.get("$id") or schema.get("id") or "")[0]
        self._reset(schema, root_uri)
        logger.debug(f"Compiling schema document '{root_uri or '<root>'}'")

        root = self._compile_target(root_uri, "")

        definitions = schema.get(SchemaKeywords.DEFINITIONS, {})
        if not isinstance(definitions, dict):
            raise SchemaConstructionError("'definitions' must be an object")
        for name in definitions:
            pointer = JsonPointer.from_parts([SchemaKeywords.DEFINITIONS, name])
            self._compile_target(root_uri, pointer)

        self._check_reference_cycles()
        return root

    def _compile_target(self, uri: str, pointer: str) -> Constraint:
        key = f"{uri}#{pointer}"
        if key in self.compiled:
            return self.compiled[key]

        document = self._document(uri)
        try:
            schema = JsonPointer.resolve(document, pointer)
        except ValueError as e:
            raise SchemaConstructionError(f"Unresolvable reference '{key}': {e}") from e

        self.waiting.setdefault(key, [])
        constraint = self._compile_node(schema, uri, pointer)
        self.compiled[key] = constraint
        for reference in self.waiting.pop(key):
            reference.bind(constraint)
        return constraint

    def _document(self, uri: str) -> Dict[str, Any]:
        if uri in self.documents:
            return self.documents[uri]

        if self.resolver is None:
            raise ReferenceResolutionError(uri, "no resolver configured")

        logger.debug(f"Resolving external schema document '{uri}'")
        document = self.resolver.resolve(uri)
        if not isinstance(document, dict):
            raise ReferenceResolutionError(uri, "document is not an object")

        self.documents[uri] = document
        return document

    def _compile_reference(self, ref: Any, uri: str, pointer: str) -> Constraint:
        if not isinstance(ref, str):
            raise SchemaConstructionError(f"'$ref' at '{uri}#{pointer}' must be a string")

        absolute = urljoin(uri, ref) if uri else ref
        target_uri, fragment = urldefrag(absolute)
        key = f"{target_uri}#{fragment}"

        # Paths inside the root document keep the reference as written.
        display = ref if target_uri == self.root_uri else key
        reference = ReferenceConstraint(display)
        self.references.append(reference)

        if key in self.compiled:
            reference.bind(self.compiled[key])
        elif key in self.waiting:
            # Target is being compiled further up the stack (recursive schema).
            self.waiting[key].append(reference)
        else:
            self.waiting[key] = [reference]
            self._compile_target(target_uri, fragment)

        return reference

    def _check_reference_cycles(self) -> None:
        for reference in self.references:
            seen: Set[int] = set()
            current: Constraint = reference
            while isinstance(current, ReferenceConstraint):
                if id(current) in seen:
                    raise SchemaConstructionError(
                        f"Reference '{reference.reference}' never reaches a schema")
                seen.add(id(current))
                current = current.target

    def _compile_node(self, schema: Any, uri: str, pointer: str) -> Constraint:
        location = f"{uri}#{pointer}"

        if schema is True or schema == {}:
            return CombinedConstraint([])
        if not isinstance(schema, dict):
            raise SchemaConstructionError(f"Schema at '{location}' must be an object")

        if SchemaKeywords.REF in schema:
            return self._compile_reference(schema[SchemaKeywords.REF], uri, pointer)

        for keyword in schema:
            if not SchemaKeywords.is_supported(keyword):
                logger.warning(f"Ignoring unsupported keyword '{keyword}' at '{location}'")

        case_insensitive = schema.get(SchemaKeywords.CASE_INSENSITIVE, False)
        if not isinstance(case_insensitive, bool):
            raise SchemaConstructionError(f"'caseInsensitive' at '{location}' must be a boolean")

        types = self._parse_types(schema, location)
        single = next(iter(types)) if len(types) == 1 else None
        constraints: List[Constraint] = []

        if types and single not in {"string", "object", "array"}:
            constraints.append(TypeConstraintImpl(sorted(types)))

        if single == "string" or SchemaKeywords.STRING_KEYWORDS & schema.keys():
            constraints.append(self._create_string_constraint(
                schema, location, case_insensitive, enforce_type=single == "string"))

        if single == "object" or SchemaKeywords.OBJECT_KEYWORDS & schema.keys():
            constraints.append(self._create_object_constraint(
                schema, uri, pointer, enforce_type=single == "object"))

        if single == "array" or SchemaKeywords.ARRAY_KEYWORDS & schema.keys():
            constraints.append(self._create_array_constraint(
                schema, uri, pointer, enforce_type=single == "array"))

        if SchemaKeywords.ENUM in schema:
            values = schema[SchemaKeywords.ENUM]
            if not isinstance(values, list) or not values:
                raise SchemaConstructionError(f"'enum' at '{location}' must be a non-empty array")
            constraints.append(EnumConstraint(values, case_sensitive=not case_insensitive))

        if SchemaKeywords.ONE_OF in schema:
            branches = self._compile_branches(schema, SchemaKeywords.ONE_OF, uri, pointer)
            constraints.append(OneOfConstraint(branches))

        if SchemaKeywords.ALL_OF in schema:
            branches = self._compile_branches(schema, SchemaKeywords.ALL_OF, uri, pointer)
            constraints.append(AllOfConstraint(branches))

        if len(constraints) == 1:
            return constraints[0]
        return CombinedConstraint(constraints)

    def _parse_types(self, schema: Dict[str, Any], location: str) -> Set[str]:
        if SchemaKeywords.TYPE not in schema:
            return set()

        declared = schema[SchemaKeywords.TYPE]
        types = [declared] if isinstance(declared, str) else declared
        if not isinstance(types, list) or not types or not all(isinstance(t, str) for t in types):
            raise SchemaConstructionError(f"'type' at '{location}' must be a type name or list of names")

        unknown = set(types) - TypeUtils.JSON_TYPES
        if unknown:
            raise SchemaConstructionError(f"Unknown type(s) {sorted(unknown)} at '{location}'")
        return set(types)

    def _compile_branches(self, schema: Dict[str, Any], keyword: str,
                          uri: str, pointer: str) -> List[Constraint]:
        branches = schema[keyword]
        if not isinstance(branches, list) or not branches:
            raise SchemaConstructionError(f"'{keyword}' at '{uri}#{pointer}' must be a non-empty array")

        return [
            self._compile_node(branch, uri, f"{pointer}/{keyword}/{i}")
            for i, branch in enumerate(branches)
        ]

    def _create_string_constraint(self, schema: Dict[str, Any], location: str,
                                  case_insensitive: bool, enforce_type: bool) -> Constraint:
        pattern = schema.get(SchemaKeywords.PATTERN)
        string_format = schema.get(SchemaKeywords.FORMAT)
        if pattern is not None and not isinstance(pattern, str):
            raise SchemaConstructionError(f"'pattern' at '{location}' must be a string")

        try:
            return StringConstraint(
                pattern=pattern,
                format=string_format,
                case_insensitive=case_insensitive,
                enforce_type=enforce_type
            )
        except InternalInvariantError as e:
            raise SchemaConstructionError(f"Invalid string rule at '{location}': {e}") from e

    def _create_object_constraint(self, schema: Dict[str, Any], uri: str, pointer: str,
                                  enforce_type: bool) -> Constraint:
        location = f"{uri}#{pointer}"

        declared = schema.get(SchemaKeywords.PROPERTIES, {})
        if not isinstance(declared, dict):
            raise SchemaConstructionError(f"'properties' at '{location}' must be an object")

        required = schema.get(SchemaKeywords.REQUIRED, [])
        if not isinstance(required, list) or not all(isinstance(name, str) for name in required):
            raise SchemaConstructionError(f"'required' at '{location}' must be an array of strings")

        additional = schema.get(SchemaKeywords.ADDITIONAL_PROPERTIES, True)
        if not isinstance(additional, bool):
            raise SchemaConstructionError(
                f"'additionalProperties' at '{location}' must be a boolean")

        properties = {
            name: self._compile_node(
                sub_schema, uri,
                pointer + JsonPointer.from_parts([SchemaKeywords.PROPERTIES, name]))
            for name, sub_schema in declared.items()
        }

        return ObjectConstraint(
            properties=properties,
            required=required,
            additional_properties=additional,
            enforce_type=enforce_type
        )

    def _create_array_constraint(self, schema: Dict[str, Any], uri: str, pointer: str,
                                 enforce_type: bool) -> Constraint:
        location = f"{uri}#{pointer}"

        limits = {}
        for keyword in (SchemaKeywords.MIN_ITEMS, SchemaKeywords.MAX_ITEMS):
            limit = schema.get(keyword)
            if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
                raise SchemaConstructionError(f"'{keyword}' at '{location}' must be a non-negative integer")
            limits[keyword] = limit

        items = None
        if SchemaKeywords.ITEMS in schema:
            items = self._compile_node(schema[SchemaKeywords.ITEMS], uri, f"{pointer}/items")

        return ArrayConstraint(
            items=items,
            min_items=limits[SchemaKeywords.MIN_ITEMS],
            max_items=limits[SchemaKeywords.MAX_ITEMS],
            enforce_type=enforce_type
        )
