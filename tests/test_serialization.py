"""
Tests for serialization of declaration trees and API JSON documents.

Declaration trees must survive a JSON/YAML round-trip through the explicit
functions in `apisurface.serialization`; documents must render
deterministically.
"""

import json

import pytest
import yaml

from apisurface.backends import generate_api_json
from apisurface.examples import build_example_package
from apisurface.documentation import Documentation, ReleaseTag
from apisurface.model import CONSTRUCTOR_NAME, Function, Method, Package, Parameter, StructuredType
from apisurface.serialization import (
    DeclarationFormatError,
    OutputFormat,
    document_to_json,
    item_from_dict,
    package_from_dict,
    package_from_json,
    package_from_yaml,
    package_to_dict,
    package_to_json,
    package_to_yaml,
    render_document,
    save_document,
)


def test_json_roundtrip():
    package = build_example_package()
    before = package_to_dict(package)
    restored = package_from_json(package_to_json(package))
    assert package_to_dict(restored) == before


def test_yaml_roundtrip():
    package = build_example_package()
    before = package_to_dict(package)
    restored = package_from_yaml(package_to_yaml(package))
    assert package_to_dict(restored) == before


def test_roundtrip_preserves_report():
    package = build_example_package(include_placeholder=False)
    restored = package_from_json(package_to_json(package))
    assert generate_api_json(restored) == generate_api_json(package)


def test_minimal_declarations_use_defaults():
    package = package_from_dict({
        "kind": "package",
        "name": "tiny",
        "members": [
            {"kind": "class", "name": "Box", "members": [{"kind": "constructor"}]},
        ],
    })
    box = package.get_export("Box")
    assert isinstance(box, StructuredType)
    ctor = box.get_member(CONSTRUCTOR_NAME)
    assert isinstance(ctor, Method)
    assert ctor.is_constructor


def test_unknown_kind_rejected():
    with pytest.raises(DeclarationFormatError, match="Unsupported declaration kind"):
        item_from_dict({"kind": "typedef", "name": "T"})


def test_missing_name_rejected():
    with pytest.raises(DeclarationFormatError, match="has no name"):
        item_from_dict({"kind": "function"})


def test_root_must_be_package():
    with pytest.raises(DeclarationFormatError, match="must be a package"):
        package_from_dict({"kind": "namespace", "name": "ns"})


def test_document_json_keeps_field_order():
    document = generate_api_json(Package(name="p"))
    text = document_to_json(document)
    assert text.endswith("\n")
    assert list(json.loads(text)) == ["kind", "summary", "remarks", "exports"]


def test_document_yaml_rendering():
    document = generate_api_json(build_example_package(include_placeholder=False))
    text = render_document(document, OutputFormat.YAML)
    assert yaml.safe_load(text) == document
    assert text.startswith("kind: package")


def test_save_document(tmp_path):
    document = generate_api_json(Package(name="p"))
    target = tmp_path / "p.api.yaml"
    save_document(document, target, OutputFormat.YAML)
    assert yaml.safe_load(target.read_text(encoding="utf-8")) == document


def test_roundtrip_keeps_parameter_release_tag():
    hidden = Parameter(name="secret", type="string", documentation=Documentation(release_tag=ReleaseTag.INTERNAL))
    func = Function(name="f", parameters=[hidden, Parameter(name="x", type="number")])
    package = Package(name="p", members=[func])

    before = generate_api_json(package)["exports"]["f"]["parameters"]
    for restored in (package_from_json(package_to_json(package)), package_from_yaml(package_to_yaml(package))):
        assert restored.get_export("f").parameters[0].documentation.release_tag == ReleaseTag.INTERNAL
        after = generate_api_json(restored)["exports"]["f"]["parameters"]
        assert list(after) == list(before) == ["x"]
