"""
Serialization helpers for declaration trees and API JSON documents.

Declaration trees round-trip through a plain dict representation (JSON or
YAML), which is how fixtures and front-end dumps are fed to the generators.
Generated documents are rendered as JSON (the canonical form) or YAML.

This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from apisurface.documentation import Documentation, ParamDoc, ReleaseTag
from apisurface.model import (
    CONSTRUCTOR_NAME,
    AccessModifier,
    ApiItem,
    DeclarationKind,
    EnumType,
    EnumValue,
    Function,
    ItemKind,
    Member,
    Method,
    ModuleVariable,
    Namespace,
    Package,
    Parameter,
    Property,
    StructuredType,
)


class DeclarationFormatError(Exception):
    """Raised when a declaration dict cannot be turned into a model item."""
    pass


class OutputFormat(Enum):
    """Renderings of an API JSON document."""
    JSON = "json"
    YAML = "yaml"


# =============================================================================
# DOCUMENTATION
# =============================================================================


def documentation_to_dict(doc: Documentation) -> Dict[str, Any]:
    return {
        "summary": doc.summary,
        "remarks": doc.remarks,
        "deprecated_message": doc.deprecated_message,
        "parameters": {name: p.description for name, p in doc.parameters.items()},
        "returns_message": doc.returns_message,
        "release_tag": doc.release_tag.value,
    }


def documentation_from_dict(d: Dict[str, Any] | None) -> Documentation:
    if d is None:
        return Documentation()
    return Documentation(
        summary=d.get("summary", []),
        remarks=d.get("remarks", []),
        deprecated_message=d.get("deprecated_message", []),
        parameters={
            name: ParamDoc(name=name, description=description or [])
            for name, description in d.get("parameters", {}).items()
        },
        returns_message=d.get("returns_message", []),
        release_tag=ReleaseTag(d.get("release_tag", ReleaseTag.NONE.value)),
    )


# =============================================================================
# DECLARATION ITEMS
# =============================================================================


def parameter_to_dict(p: Parameter) -> Dict[str, Any]:
    return {
        "kind": ItemKind.PARAMETER.value,
        "name": p.name,
        "type": p.type,
        "is_optional": p.is_optional,
        "is_spread": p.is_spread,
        "documentation": documentation_to_dict(p.documentation),
    }


def parameter_from_dict(d: Dict[str, Any]) -> Parameter:
    return Parameter(
        name=d["name"],
        documentation=documentation_from_dict(d.get("documentation")),
        type=d.get("type", ""),
        is_optional=d.get("is_optional", False),
        is_spread=d.get("is_spread", False),
    )


def item_to_dict(item: ApiItem) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "kind": item.kind.value,
        "name": item.name,
        "documentation": documentation_to_dict(item.documentation),
    }
    if isinstance(item, (Package, Namespace)):
        d["members"] = [item_to_dict(m) for m in item.members]
    elif isinstance(item, StructuredType):
        d["extends"] = item.extends
        d["implements"] = item.implements
        d["type_parameters"] = item.type_parameters
        d["members"] = [item_to_dict(m) for m in item.members]
    elif isinstance(item, EnumType):
        d["values"] = [item_to_dict(v) for v in item.values]
    elif isinstance(item, EnumValue):
        d["initializer"] = item.initializer
    elif isinstance(item, Function):
        d["parameters"] = [parameter_to_dict(p) for p in item.parameters]
        d["return_type"] = item.return_type
    elif isinstance(item, Method):
        d["signature"] = item.signature
        d["parameters"] = [parameter_to_dict(p) for p in item.parameters]
        d["return_type"] = item.return_type
        d["access_modifier"] = item.access_modifier.value if item.access_modifier else None
        d["is_optional"] = item.is_optional
        d["is_static"] = item.is_static
    elif isinstance(item, Property):
        d["type"] = item.type
        d["is_optional"] = item.is_optional
        d["is_read_only"] = item.is_read_only
        d["is_static"] = item.is_static
        d["declaration_kind"] = item.declaration_kind.value
    elif isinstance(item, ModuleVariable):
        d["type"] = item.type
        d["value"] = item.value
    elif isinstance(item, Member):
        d["declaration_kind"] = item.declaration_kind
    elif isinstance(item, Parameter):
        return parameter_to_dict(item)
    else:
        raise TypeError(f"Unsupported API item type: {type(item)}")
    return d


def _items_from_list(items: List[Dict[str, Any]] | None) -> List[Any]:
    return [item_from_dict(i) for i in items or []]


def item_from_dict(d: Dict[str, Any]) -> ApiItem:
    kind = d.get("kind")
    if kind == ItemKind.PARAMETER.value:
        return parameter_from_dict(d)

    if kind == ItemKind.CONSTRUCTOR.value:
        name = d.get("name", CONSTRUCTOR_NAME)
    elif "name" in d:
        name = d["name"]
    else:
        raise DeclarationFormatError(f"Declaration of kind {kind!r} has no name")
    doc = documentation_from_dict(d.get("documentation"))

    if kind == ItemKind.PACKAGE.value:
        return Package(name=name, documentation=doc, members=_items_from_list(d.get("members")))
    if kind == ItemKind.NAMESPACE.value:
        return Namespace(name=name, documentation=doc, members=_items_from_list(d.get("members")))
    if kind in (ItemKind.CLASS.value, ItemKind.INTERFACE.value):
        return StructuredType(
            name=name,
            documentation=doc,
            is_interface=kind == ItemKind.INTERFACE.value,
            extends=d.get("extends") or "",
            implements=d.get("implements") or "",
            type_parameters=d.get("type_parameters", []),
            members=_items_from_list(d.get("members")),
        )
    if kind == ItemKind.ENUM.value:
        return EnumType(name=name, documentation=doc, values=_items_from_list(d.get("values")))
    if kind == ItemKind.ENUM_VALUE.value:
        return EnumValue(name=name, documentation=doc, initializer=d.get("initializer"))
    if kind == ItemKind.FUNCTION.value:
        return Function(
            name=name,
            documentation=doc,
            parameters=[parameter_from_dict(p) for p in d.get("parameters", [])],
            return_type=d.get("return_type", ""),
        )
    if kind in (ItemKind.METHOD.value, ItemKind.CONSTRUCTOR.value):
        access = d.get("access_modifier")
        return Method(
            name=name,
            documentation=doc,
            signature=d.get("signature", ""),
            parameters=[parameter_from_dict(p) for p in d.get("parameters", [])],
            return_type=d.get("return_type", ""),
            access_modifier=AccessModifier(access) if access else None,
            is_optional=d.get("is_optional", False),
            is_static=d.get("is_static", False),
        )
    if kind == ItemKind.PROPERTY.value:
        return Property(
            name=name,
            documentation=doc,
            type=d.get("type", ""),
            is_optional=d.get("is_optional", False),
            is_read_only=d.get("is_read_only", False),
            is_static=d.get("is_static", False),
            declaration_kind=DeclarationKind(d.get("declaration_kind", DeclarationKind.PROPERTY.value)),
        )
    if kind == ItemKind.MODULE_VARIABLE.value:
        return ModuleVariable(name=name, documentation=doc, type=d.get("type", ""), value=d.get("value", ""))
    if kind == ItemKind.MEMBER.value:
        return Member(name=name, documentation=doc, declaration_kind=d.get("declaration_kind", ""))
    raise DeclarationFormatError(f"Unsupported declaration kind: {kind!r}")


def package_to_dict(p: Package) -> Dict[str, Any]:
    return item_to_dict(p)


def package_from_dict(d: Dict[str, Any]) -> Package:
    item = item_from_dict(d)
    if not isinstance(item, Package):
        raise DeclarationFormatError(f"Root declaration must be a package, got {d.get('kind')!r}")
    return item


def package_to_json(p: Package) -> str:
    return json.dumps(package_to_dict(p), sort_keys=True)


def package_from_json(s: str) -> Package:
    return package_from_dict(json.loads(s))


def package_to_yaml(p: Package) -> str:
    return yaml.safe_dump(package_to_dict(p))


def package_from_yaml(s: str) -> Package:
    return package_from_dict(yaml.safe_load(s))


# =============================================================================
# API JSON DOCUMENTS
# =============================================================================


def document_to_json(document: Dict[str, Any]) -> str:
    # Key order is the projectors' fixed order, so no sort_keys here
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def document_to_yaml(document: Dict[str, Any]) -> str:
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


def render_document(document: Dict[str, Any], output_format: OutputFormat = OutputFormat.JSON) -> str:
    if output_format == OutputFormat.YAML:
        return document_to_yaml(document)
    return document_to_json(document)


def save_document(
    document: Dict[str, Any],
    filename: Union[str, Path],
    output_format: OutputFormat = OutputFormat.JSON,
) -> None:
    """
    Render a document and save it to file.

    Args:
        document: API JSON document
        filename: Output file path
        output_format: JSON (canonical) or YAML
    """
    text = render_document(document, output_format)
    with open(filename, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
