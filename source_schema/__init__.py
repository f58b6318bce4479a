#!/usr/bin/env python3
"""
Address Source Validator

This package validates address source documents (coverage, fetch parameters
and conform rules) against the bundled source rule set and reports every
problem with its path, rule and details.
"""

import logging

from .api import (
    Diagnostic,
    ErrorCode,
    InternalInvariantError,
    ReferenceResolutionError,
    SchemaConstructionError,
    SourceSchemaError,
    SourceValidator,
    ValidationResult,
)
from .resolver import HttpSchemaResolver, InMemoryResolver, SchemaResolver, default_resolver
from .schema import compile_schema, load_source_schema
from .schema_compiler import SchemaCompiler
from .validator import Validator
from .version import __version__

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("source_schema")

# Export public classes and functions
__all__ = [
    "Diagnostic",
    "ErrorCode",
    "HttpSchemaResolver",
    "InMemoryResolver",
    "InternalInvariantError",
    "ReferenceResolutionError",
    "SchemaCompiler",
    "SchemaConstructionError",
    "SchemaResolver",
    "SourceSchemaError",
    "SourceValidator",
    "ValidationResult",
    "Validator",
    "compile_schema",
    "default_resolver",
    "load_source_schema",
]
