"""
Tests for schema validation of API JSON documents.

Documents produced by the generator always validate; hand-built malformed
documents always fail with a useful diagnostic.
"""

import copy

import pytest

from apisurface.backends import generate_api_json
from apisurface.examples import build_example_package
from apisurface.schema_validation import (
    SCHEMA_PATH,
    SchemaConformanceError,
    ValidationResult,
    load_schema,
    validate_document,
)


@pytest.fixture(scope="module")
def validator():
    return load_schema()


@pytest.fixture
def document():
    return generate_api_json(build_example_package(include_placeholder=False))


class TestSchemaFile:

    def test_schema_ships_with_package(self):
        assert SCHEMA_PATH.is_file()
        assert SCHEMA_PATH.name == "api-json.schema.json"


class TestValidDocuments:

    def test_generated_document_is_valid(self, validator, document):
        result = validate_document(document, validator)
        assert result.is_valid
        assert result.errors == ()
        assert result.details == ""


class TestMalformedDocuments:

    def test_missing_root_kind(self, validator, document):
        del document["kind"]
        result = validate_document(document, validator)
        assert not result.is_valid
        assert "kind" in result.details

    def test_missing_member_kind(self, validator, document):
        broken = copy.deepcopy(document)
        del broken["exports"]["Widget"]["members"]["render"]["kind"]
        assert not validate_document(broken, validator).is_valid

    def test_unknown_discriminator(self, validator, document):
        document["exports"]["Widget"]["kind"] = "struct"
        assert not validate_document(document, validator).is_valid

    def test_constructor_with_method_fields(self, validator, document):
        ctor = document["exports"]["Widget"]["members"]["__constructor"]
        ctor["isStatic"] = False
        assert not validate_document(document, validator).is_valid

    def test_wrong_field_type(self, validator, document):
        document["exports"]["Color"]["values"]["Red"]["value"] = 5
        result = validate_document(document, validator)
        assert not result.is_valid
        assert result.details.startswith("exports/Color")

    def test_doc_element_without_kind(self, validator, document):
        document["summary"] = [{"value": "text only"}]
        result = validate_document(document, validator)
        assert not result.is_valid
        assert result.details.startswith("summary/0")


class TestErrors:

    def test_conformance_error_message(self):
        error = SchemaConformanceError("pkg.api.json", "exports: bad")
        assert error.filename == "pkg.api.json"
        assert error.details == "exports: bad"
        assert str(error).startswith("pkg.api.json does not conform to the expected schema")
        assert str(error).endswith("exports: bad")

    def test_result_details_first_error(self):
        result = ValidationResult(errors=("a: first", "b: second"))
        assert not result.is_valid
        assert result.details == "a: first"

    def test_diagnostic_not_repeated_for_one_violation(self, validator, document):
        """A single bad export yields one diagnostic, not the detail plus its oneOf parent."""
        document["exports"]["Color"]["values"]["Red"]["value"] = 5
        result = validate_document(document, validator)
        assert len(result.errors) == 1
