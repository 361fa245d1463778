"""
Test the example "widgets" package end to end.

Validates that the example builder produces a report containing the public
surface, none of the excluded items, and that the report conforms to the
schema.
"""

import pytest

from apisurface.backends import ApiJsonGenerator, UnsupportedMemberWarning
from apisurface.examples import build_example_package
from apisurface.model import CONSTRUCTOR_NAME


def test_example_package_report():
    package = build_example_package(include_placeholder=False)
    generator = ApiJsonGenerator()
    document = generator.generate(package)

    assert generator.validate(document).is_valid

    exports = document["exports"]
    assert list(exports) == ["Color", "IWidgetOptions", "Widget", "createWidget", "layout"]

    widget = exports["Widget"]
    assert list(widget["members"]) == [CONSTRUCTOR_NAME, "instanceCount", "render", "size"]
    assert widget["members"]["render"]["returnValue"]["type"] == "string"
    assert widget["members"][CONSTRUCTOR_NAME]["parameters"]["options"]["isOptional"] is True

    assert exports["Color"]["values"]["Red"]["value"] == "5"
    assert exports["Color"]["values"]["Green"]["value"] == ""
    assert exports["layout"]["isBeta"] is True
    assert exports["layout"]["exports"]["measure"]["parameters"]["extra"]["isSpread"] is True
    assert exports["createWidget"]["deprecatedMessage"]


def test_example_package_with_placeholder():
    with pytest.warns(UnsupportedMemberWarning):
        document = ApiJsonGenerator().generate(build_example_package())

    members = document["exports"]["Widget"]["members"]
    assert members["__index"] == {"kind": "member", "declarationKind": "IndexSignature"}


def test_excluded_items_absent():
    document = ApiJsonGenerator().generate(build_example_package(include_placeholder=False))
    assert "ExperimentalWidget" not in document["exports"]
    assert "$helper" not in document["exports"]
    assert "debug" not in document["exports"]["Widget"]["members"]
