#!/usr/bin/env python3
"""
Tests for the conform block and its field functions.
"""
import pytest

from source_schema import ErrorCode, SourceValidator
from utils import NON_BOOLEAN_VALUES, NON_STRING_VALUES, conform_source, has_error, has_schema_error


# (conform key, function name, shorthand fields needed for the other keys)
FUNCTIONS = [
    ("number", "prefixed_number", {"street": "street field"}),
    ("street", "postfixed_street", {"number": "number field"}),
    ("unit", "postfixed_unit", {"number": "number field", "street": "street field"}),
]


@pytest.fixture(scope="module")
def validator():
    return SourceValidator()


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
def test_missing_field_property_fails(validator, key, function, others):
    result = validator.validate(conform_source(**{key: {"function": function}}, **others))

    assert not result.valid
    assert has_error(result, ErrorCode.REQUIRED_PROPERTY_MISSING, f".conform.{key}",
                     missingProperty="field")
    assert has_schema_error(result, f"#/definitions/{function}/required")
    assert has_error(result, ErrorCode.ONE_OF_MISMATCH, f".conform.{key}")


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
@pytest.mark.parametrize("value", NON_STRING_VALUES)
def test_non_string_field_value_fails(validator, key, function, others, value):
    result = validator.validate(
        conform_source(**{key: {"function": function, "field": value}}, **others))

    assert not result.valid
    assert has_error(result, ErrorCode.TYPE_ERROR, f".conform.{key}.field")


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
def test_string_field_value_passes(validator, key, function, others):
    result = validator.validate(
        conform_source(**{key: {"function": function, "field": f"{key} field"}}, **others))
    assert result.valid, [str(d) for d in result.diagnostics]


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
def test_unknown_field_fails(validator, key, function, others):
    block = {"function": function, "field": f"{key} field", "unknown_field": "value"}
    result = validator.validate(conform_source(**{key: block}, **others))

    assert not result.valid
    assert has_error(result, ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED, f".conform.{key}",
                     additionalProperty="unknown_field")
    assert not has_error(result, ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED, ".conform")


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
def test_wrong_function_name_fails(validator, key, function, others):
    result = validator.validate(
        conform_source(**{key: {"function": "no_such_function", "field": "f"}}, **others))

    assert not result.valid
    assert has_error(result, ErrorCode.ENUM_MISMATCH, f".conform.{key}.function")
    assert has_schema_error(result, f"#/definitions/{function}/properties/function/enum")


@pytest.mark.parametrize("key, function, others", FUNCTIONS)
def test_missing_function_fails(validator, key, function, others):
    result = validator.validate(conform_source(**{key: {"field": "f"}}, **others))

    assert has_error(result, ErrorCode.REQUIRED_PROPERTY_MISSING, f".conform.{key}",
                     missingProperty="function")


@pytest.mark.parametrize("key, value", [("number", 17), ("street", None), ("unit", ["a"])])
def test_neither_shorthand_nor_function_object(validator, key, value):
    fields = {"number": "n", "street": "s"}
    fields[key] = value
    result = validator.validate(conform_source(**fields))

    assert not result.valid
    assert [d.rule for d in result.diagnostics] == ["oneOf"]
    assert result.diagnostics[0].data_path == f".conform.{key}"


def test_function_shapes_are_not_interchangeable(validator):
    street_shape = {"function": "postfixed_street", "field": "f", "may_contain_units": True}
    result = validator.validate(conform_source(number=street_shape, street="s"))

    assert not result.valid
    assert has_error(result, ErrorCode.ENUM_MISMATCH, ".conform.number.function")
    assert has_error(result, ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED, ".conform.number",
                     additionalProperty="may_contain_units")


class TestPostfixedStreet:
    """Tests for the may_contain_units option of postfixed_street."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = SourceValidator()

    def _source(self, value):
        street = {"function": "postfixed_street", "field": "street field", "may_contain_units": value}
        return conform_source(number="number field", street=street)

    @pytest.mark.parametrize("value", NON_BOOLEAN_VALUES)
    def test_non_boolean_may_contain_units_fails(self, value):
        result = self.validator.validate(self._source(value))
        assert not result.valid
        assert has_error(result, ErrorCode.TYPE_ERROR, ".conform.street.may_contain_units")

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_may_contain_units_passes(self, value):
        assert self.validator.is_valid(self._source(value))


class TestConformBlock:
    """Tests for the conform block itself."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = SourceValidator()

    def test_shorthand_fields_pass(self):
        assert self.validator.is_valid(
            conform_source(number="number field", street="street field", unit="unit field"))

    def test_all_functions_together_pass(self):
        source = conform_source(
            number={"function": "prefixed_number", "field": "ADDRESS"},
            street={"function": "postfixed_street", "field": "ADDRESS", "may_contain_units": True},
            unit={"function": "postfixed_unit", "field": "ADDRESS"},
            lon="X", lat="Y", city="CITY", postcode="ZIP", layer=0, headers=1, skiplines=2,
            srs="EPSG:4326", encoding="utf-8", csvsplit=";"
        )
        result = self.validator.validate(source)
        assert result.valid, [str(d) for d in result.diagnostics]

    def test_conform_requires_type(self):
        source = conform_source(number="n")
        del source["conform"]["type"]

        result = self.validator.validate(source)
        assert has_error(result, ErrorCode.REQUIRED_PROPERTY_MISSING, ".conform", missingProperty="type")

    def test_missing_type_is_the_only_problem_of_a_function_block(self):
        source = conform_source(number={"function": "prefixed_number", "field": "f"})
        del source["conform"]["type"]

        result = self.validator.validate(source)
        assert [(d.rule, d.data_path) for d in result.diagnostics] == [("required", ".conform")]
        assert result.diagnostics[0].schema_path == "#/definitions/conform/required"

    def test_unknown_conform_type_fails(self):
        result = self.validator.validate(conform_source(type="excel"))
        assert has_error(result, ErrorCode.ENUM_MISMATCH, ".conform.type")

    def test_unknown_conform_key_fails(self):
        result = self.validator.validate(conform_source(numbr="typo"))
        assert has_error(result, ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED, ".conform",
                         additionalProperty="numbr")

    def test_non_object_conform_fails(self):
        source = conform_source()
        source["conform"] = "geojson"

        result = self.validator.validate(source)
        assert has_error(result, ErrorCode.TYPE_ERROR, ".conform")

    @pytest.mark.parametrize("value", [1.5, True, None])
    def test_layer_must_be_string_or_integer(self, value):
        result = self.validator.validate(conform_source(layer=value))
        assert has_error(result, ErrorCode.ONE_OF_MISMATCH, ".conform.layer")
