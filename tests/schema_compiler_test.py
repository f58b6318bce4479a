#!/usr/bin/env python3
"""
Tests for rule document compilation and loading.
"""
import json
import logging

import pytest

from source_schema import (
    InMemoryResolver,
    InternalInvariantError,
    SchemaCompiler,
    SchemaConstructionError,
    Validator,
    compile_schema,
    load_source_schema,
)
from source_schema.loader import load_schema_document, parse_schema_document
from source_schema.schema import SOURCE_SCHEMA_PATH, default_source_schema


def compile_document(schema):
    return SchemaCompiler(resolver=InMemoryResolver()).compile(schema)


class TestSchemaConstruction:
    """Tests for malformed rule documents."""

    @pytest.mark.parametrize("schema", [
        "not a schema",
        {"type": "text"},
        {"type": []},
        {"type": 7},
        {"enum": "zip"},
        {"enum": []},
        {"oneOf": {"type": "string"}},
        {"allOf": []},
        {"pattern": 7},
        {"properties": ["a"]},
        {"required": "a"},
        {"required": [1]},
        {"minItems": -1},
        {"maxItems": "3"},
        {"minItems": True},
        {"caseInsensitive": "yes"},
        {"properties": {"a": 17}},
        {"definitions": []},
    ])
    def test_malformed_schema(self, schema):
        with pytest.raises(SchemaConstructionError):
            compile_document(schema)

    def test_invalid_pattern(self):
        with pytest.raises(SchemaConstructionError, match="Invalid regex"):
            compile_document({"type": "string", "pattern": "[a-z"})

    def test_unknown_format(self):
        with pytest.raises(SchemaConstructionError, match="Unknown string format"):
            compile_document({"type": "string", "format": "hostname"})

    def test_additional_properties_schema_is_not_supported(self):
        with pytest.raises(SchemaConstructionError):
            compile_document({"type": "object", "additionalProperties": {"type": "string"}})

    def test_duplicate_required(self):
        with pytest.raises(InternalInvariantError):
            compile_document({"type": "object", "required": ["a", "a"]})

    def test_closed_object_requiring_undeclared_property(self):
        with pytest.raises(InternalInvariantError):
            compile_document({
                "type": "object",
                "required": ["a"],
                "additionalProperties": False,
                "properties": {"b": {}}
            })

    def test_unknown_keywords_are_ignored_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="source_schema"):
            constraint = compile_document({"type": "string", "minLength": 3})

        assert "minLength" in caplog.text
        assert Validator().validate("a", constraint).valid

    def test_annotations_do_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="source_schema"):
            compile_document({"title": "t", "description": "d", "$schema": "x", "type": "string"})

        assert caplog.records == []


class TestSchemaLoading:
    """Tests for reading rule documents."""

    def test_duplicate_keys_are_rejected(self):
        text = '{"properties": {"a": {"type": "string"}, "a": {"type": "integer"}}}'
        with pytest.raises(InternalInvariantError, match="Duplicate key 'a'"):
            parse_schema_document(text)

    @pytest.mark.parametrize("text", ["{", "[]", "17", ""])
    def test_malformed_document(self, text):
        with pytest.raises(SchemaConstructionError):
            parse_schema_document(text)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaConstructionError):
            load_schema_document(tmp_path / "missing.json")

    def test_compile_from_path(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"type": "object", "required": ["id"]}), encoding="utf-8")

        constraint = compile_schema(path)
        assert not Validator().validate({}, constraint).valid
        assert Validator().validate({"id": 1}, constraint).valid

    def test_bundled_rule_set_is_shared(self):
        assert load_source_schema() is default_source_schema()
        assert load_source_schema() is load_source_schema()

    def test_explicit_rule_set_is_compiled_fresh(self):
        assert load_source_schema(SOURCE_SCHEMA_PATH) is not default_source_schema()

    def test_bundled_rule_set_has_no_duplicate_keys(self):
        load_schema_document(SOURCE_SCHEMA_PATH)
