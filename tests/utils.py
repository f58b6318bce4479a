import copy
from typing import Any, Dict

from source_schema import ErrorCode, ValidationResult

NON_STRING_VALUES = [None, 17, {}, [], True]
NON_BOOLEAN_VALUES = [None, 17, {}, [], "string"]

_MINIMAL_SOURCE = {
    "coverage": {
        "country": "some country"
    },
    "type": "http",
    "data": "http://xyz.com/"
}


def minimal_source(**fields: Any) -> Dict[str, Any]:
    """A fresh, valid source document with ``fields`` added or replaced."""
    source = copy.deepcopy(_MINIMAL_SOURCE)
    source.update(fields)
    return source


def conform_source(**conform: Any) -> Dict[str, Any]:
    """A valid source document with a geojson conform block."""
    block = {"type": "geojson"}
    block.update(conform)
    return minimal_source(type="ESRI", conform=block)


def has_error(result: ValidationResult, code: ErrorCode, data_path: str, **detail: Any) -> bool:
    """Whether ``result`` holds a ``code`` diagnostic at ``data_path`` with ``detail``."""
    return any(
        d.code == code and d.data_path == data_path and
        all(d.detail.get(k) == v for k, v in detail.items())
        for d in result.diagnostics
    )


def has_schema_error(result: ValidationResult, schema_path: str) -> bool:
    return any(d.schema_path == schema_path for d in result.diagnostics)
