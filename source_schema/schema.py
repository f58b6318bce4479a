"""
Loading of the source document rule set.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constraints import Constraint
from .loader import load_schema_document
from .resolver import BUNDLED_SCHEMA_DIR, SchemaResolver, default_resolver
from .schema_compiler import SchemaCompiler

logger = logging.getLogger("source_schema")

SOURCE_SCHEMA_PATH = BUNDLED_SCHEMA_DIR / "source_schema.json"


def compile_schema(schema: Union[Dict[str, Any], str, Path],
                   resolver: Optional[SchemaResolver] = None,
                   verbose: bool = False) -> Constraint:
    """
    Compile a rule document given as a mapping or a path.

    Args:
        schema: Rule document or path to one
        resolver: Resolver for external references; defaults to the bundled
            offline documents
        verbose: If True, log compilation details

    Returns:
        Root constraint of the compiled rule document
    """
    if not isinstance(schema, dict):
        schema = load_schema_document(schema)
    if resolver is None:
        resolver = default_resolver()

    return SchemaCompiler(resolver=resolver, verbose=verbose).compile(schema)


@lru_cache(maxsize=None)
def default_source_schema() -> Constraint:
    """
    The bundled source rule set, compiled once per process and shared.
    """
    logger.debug(f"Compiling bundled rule set {SOURCE_SCHEMA_PATH}")
    return compile_schema(SOURCE_SCHEMA_PATH)


def load_source_schema(schema: Optional[Union[Dict[str, Any], str, Path]] = None,
                       resolver: Optional[SchemaResolver] = None,
                       verbose: bool = False) -> Constraint:
    """
    Get a compiled source rule set.

    Without arguments this returns the shared bundled rule set. Passing a
    rule document or a resolver compiles a fresh tree.

    Raises:
        SchemaConstructionError: If the rule document cannot be compiled
        InternalInvariantError: If the rule document is self-inconsistent
    """
    if schema is None and resolver is None and not verbose:
        return default_source_schema()

    return compile_schema(schema if schema is not None else SOURCE_SCHEMA_PATH,
                          resolver=resolver, verbose=verbose)
