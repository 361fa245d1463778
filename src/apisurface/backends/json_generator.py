"""
API JSON report generator.

Converts a Package declaration tree into the canonical API JSON document used
to review API changes. The document records *whether* an item is documented
and which shape it has, but it is meant to be committed and diffed, so its
content is fully deterministic:

    - Members are visited in the model's sorted order
    - Each projector writes its fields in a fixed order
    - @alpha and @internal items (and everything below them) are dropped

The finished document is validated against schemas/api-json.schema.json.
"""
from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator

from apisurface.documentation import DocElement, Documentation
from apisurface.filters import NamePredicate, is_name_admitted, is_release_tag_admitted
from apisurface.model import (
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
    is_supported_name,
)
from apisurface.schema_validation import (
    SCHEMA_PATH,
    SchemaConformanceError,
    ValidationResult,
    load_schema,
    validate_document,
)
from apisurface.serialization import OutputFormat, save_document

logger = logging.getLogger(__name__)

MEMBERS_KEY = "members"
EXPORTS_KEY = "exports"
VALUES_KEY = "values"

JsonNode = Dict[str, Any]


class UnsupportedMemberWarning(UserWarning):
    """A class member had no dedicated projector and was emitted as a placeholder."""


def _copy_block(block: List[DocElement]) -> List[DocElement]:
    return [dict(element) for element in block]


def _doc_fields(documentation: Documentation, include_beta: bool = True) -> JsonNode:
    """Fields shared by every documented node: deprecation, summary, remarks, isBeta."""
    fields: JsonNode = {
        "deprecatedMessage": _copy_block(documentation.deprecated_message),
        "summary": _copy_block(documentation.summary),
        "remarks": _copy_block(documentation.remarks),
    }
    if include_beta:
        fields["isBeta"] = documentation.is_beta
    return fields


class ApiJsonGenerator:
    """
    Visitor producing the API JSON document for one package.

    Every item passes through visit(), which applies the release-tag and
    name filters once before handing the item to its projector. Projectors
    install exactly one entry, keyed by item name, in the container they are
    given; parameters instead fill in the record passed to them.

    Args:
        name_predicate: Decides whether a name may appear in the report
        schema_path: Schema file used by validate() and write_json_file()
    """

    def __init__(
        self,
        name_predicate: NamePredicate = is_supported_name,
        schema_path: Union[str, Path] = SCHEMA_PATH,
    ):
        self.name_predicate = name_predicate
        self.schema_path = Path(schema_path)
        self._json_schema: Optional[Draft7Validator] = None

    @property
    def json_schema(self) -> Draft7Validator:
        """Compiled schema, loaded on first use and kept for this generator's lifetime."""
        if self._json_schema is None:
            logger.debug("Loading API JSON schema from %s", self.schema_path)
            self._json_schema = load_schema(self.schema_path)
        return self._json_schema

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def generate(self, package: Package) -> JsonNode:
        """Build the document for a package, without validating it."""
        document: JsonNode = {}
        self.visit(package, document)
        return document

    def validate(self, document: JsonNode) -> ValidationResult:
        return validate_document(document, self.json_schema)

    def write_json_file(
        self,
        report_filename: Union[str, Path],
        package: Package,
        output_format: OutputFormat = OutputFormat.JSON,
    ) -> JsonNode:
        """
        Generate, save and validate the report for a package.

        The file is written before validation so that a non-conforming
        report can be inspected.

        Raises:
            SchemaConformanceError: the generated document violates the schema
        """
        document = self.generate(package)
        save_document(document, report_filename, output_format)

        result = self.validate(document)
        if not result.is_valid:
            error = SchemaConformanceError(os.path.basename(str(report_filename)), result.details)
            logger.error("%s", error)
            raise error

        logger.info("Wrote API report for %s to %s", package.name, report_filename)
        return document

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def visit(self, item: ApiItem, container: JsonNode) -> bool:
        """
        Filter an item and route it to its projector.

        Returns:
            True if the item was projected, False if a filter dropped it
        """
        if not is_release_tag_admitted(item):
            logger.debug(
                "Skipping %s %r: release tag %s",
                item.kind.value, item.name, item.documentation.release_tag.value,
            )
            return False
        if not is_name_admitted(item, self.name_predicate):
            logger.debug("Skipping %s %r: unsupported name", item.kind.value, item.name)
            return False

        if isinstance(item, Package):
            self.visit_package(item, container)
        elif isinstance(item, Namespace):
            self.visit_namespace(item, container)
        elif isinstance(item, StructuredType):
            self.visit_structured_type(item, container)
        elif isinstance(item, EnumType):
            self.visit_enum(item, container)
        elif isinstance(item, EnumValue):
            self.visit_enum_value(item, container)
        elif isinstance(item, Function):
            self.visit_function(item, container)
        elif isinstance(item, Method):
            self.visit_method(item, container)
        elif isinstance(item, Property):
            self.visit_property(item, container)
        elif isinstance(item, ModuleVariable):
            self.visit_module_variable(item, container)
        elif isinstance(item, Parameter):
            self.visit_parameter(item, container)
        elif isinstance(item, Member):
            self.visit_member(item, container)
        else:
            raise TypeError(f"Unsupported API item type: {type(item)}")
        return True

    @staticmethod
    def _install(container: JsonNode, name: str, node: JsonNode) -> None:
        if name in container:
            # Overloads share a name; the last one in sorted order wins
            logger.debug("Replacing existing entry %r", name)
        container[name] = node

    # =========================================================================
    # PROJECTORS
    # =========================================================================

    def visit_package(self, package: Package, container: JsonNode) -> None:
        container["kind"] = ItemKind.PACKAGE.value
        container["summary"] = _copy_block(package.documentation.summary)
        container["remarks"] = _copy_block(package.documentation.remarks)

        exports: JsonNode = {}
        container[EXPORTS_KEY] = exports
        for item in package.get_sorted_members():
            self.visit(item, exports)

    def visit_namespace(self, namespace: Namespace, container: JsonNode) -> None:
        exports: JsonNode = {}
        for item in namespace.get_sorted_members():
            self.visit(item, exports)

        node: JsonNode = {"kind": ItemKind.NAMESPACE.value}
        node.update(_doc_fields(namespace.documentation))
        node[EXPORTS_KEY] = exports
        self._install(container, namespace.name, node)

    def visit_structured_type(self, structured_type: StructuredType, container: JsonNode) -> None:
        node: JsonNode = {
            "kind": structured_type.kind.value,
            "extends": structured_type.extends or "",
            "implements": structured_type.implements or "",
            "typeParameters": list(structured_type.type_parameters),
        }
        node.update(_doc_fields(structured_type.documentation))

        members: JsonNode = {}
        node[MEMBERS_KEY] = members
        self._install(container, structured_type.name, node)

        for member in structured_type.get_sorted_members():
            self.visit(member, members)

    def visit_enum(self, enum: EnumType, container: JsonNode) -> None:
        values: JsonNode = {}
        node: JsonNode = {"kind": ItemKind.ENUM.value, VALUES_KEY: values}
        node.update(_doc_fields(enum.documentation))
        self._install(container, enum.name, node)

        for value in enum.get_sorted_members():
            self.visit(value, values)

    def visit_enum_value(self, enum_value: EnumValue, container: JsonNode) -> None:
        node: JsonNode = {
            "kind": ItemKind.ENUM_VALUE.value,
            "value": enum_value.initializer or "",
        }
        node.update(_doc_fields(enum_value.documentation))
        self._install(container, enum_value.name, node)

    def visit_function(self, function: Function, container: JsonNode) -> None:
        parameters = self._parameters_node(function.parameters, function.documentation)

        node: JsonNode = {
            "kind": ItemKind.FUNCTION.value,
            "returnValue": self._return_value_node(function.return_type, function.documentation),
            "parameters": parameters,
        }
        node.update(_doc_fields(function.documentation))
        self._install(container, function.name, node)

    def visit_method(self, method: Method, container: JsonNode) -> None:
        parameters = self._parameters_node(method.parameters, method.documentation)

        if method.is_constructor:
            node: JsonNode = {
                "kind": ItemKind.CONSTRUCTOR.value,
                "signature": method.signature,
                "parameters": parameters,
            }
            node.update(_doc_fields(method.documentation, include_beta=False))
        else:
            access = method.access_modifier.value.lower() if method.access_modifier else ""
            node = {
                "kind": ItemKind.METHOD.value,
                "signature": method.signature,
                "accessModifier": access,
                "isOptional": bool(method.is_optional),
                "isStatic": bool(method.is_static),
                "returnValue": self._return_value_node(method.return_type, method.documentation),
                "parameters": parameters,
            }
            node.update(_doc_fields(method.documentation))

        self._install(container, method.name, node)

    def visit_property(self, prop: Property, container: JsonNode) -> None:
        if prop.declaration_kind == DeclarationKind.SET_ACCESSOR:
            # The getter of the pair carries the entry
            logger.debug("Suppressing set accessor %r", prop.name)
            return

        node: JsonNode = {
            "kind": ItemKind.PROPERTY.value,
            "isOptional": bool(prop.is_optional),
            "isReadOnly": bool(prop.is_read_only),
            "isStatic": bool(prop.is_static),
            "type": prop.type,
        }
        node.update(_doc_fields(prop.documentation))
        self._install(container, prop.name, node)

    def visit_module_variable(self, variable: ModuleVariable, container: JsonNode) -> None:
        node: JsonNode = {
            "kind": ItemKind.MODULE_VARIABLE.value,
            "type": variable.type,
            "value": variable.value,
        }
        node.update(_doc_fields(variable.documentation))
        self._install(container, variable.name, node)

    def visit_member(self, member: Member, container: JsonNode) -> None:
        warnings.warn(
            f"Member {member.name!r} has unsupported declaration kind "
            f"{member.declaration_kind!r}; emitting a placeholder",
            UnsupportedMemberWarning,
        )
        self._install(container, member.name, {
            "kind": ItemKind.MEMBER.value,
            "declarationKind": member.declaration_kind,
        })

    def visit_parameter(self, parameter: Parameter, record: JsonNode) -> None:
        record["isOptional"] = bool(parameter.is_optional)
        record["isSpread"] = bool(parameter.is_spread)
        record["type"] = parameter.type

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _parameters_node(self, parameters: List[Parameter], documentation: Documentation) -> JsonNode:
        """One record per admitted parameter, seeded from the @param docs."""
        node: JsonNode = {}
        for parameter in parameters:
            param_doc = documentation.parameters.get(parameter.name)
            record: JsonNode = {
                "name": parameter.name,
                "description": _copy_block(param_doc.description) if param_doc else [],
            }
            if self.visit(parameter, record):
                node[parameter.name] = record
        return node

    @staticmethod
    def _return_value_node(return_type: str, documentation: Documentation) -> JsonNode:
        return {
            "type": return_type,
            "description": _copy_block(documentation.returns_message),
        }


def generate_api_json(package: Package, name_predicate: NamePredicate = is_supported_name) -> JsonNode:
    """
    Generate the API JSON document for a package.

    Args:
        package: Root of the declaration tree
        name_predicate: Decides whether a name may appear in the report

    Returns:
        The canonical document (not validated)
    """
    return ApiJsonGenerator(name_predicate=name_predicate).generate(package)


def save_api_json(
    package: Package,
    filename: Union[str, Path],
    output_format: OutputFormat = OutputFormat.JSON,
    name_predicate: NamePredicate = is_supported_name,
) -> None:
    """
    Generate, validate and save the report.

    Args:
        package: Root of the declaration tree
        filename: Output file path (.api.json extension recommended)
        output_format: JSON or YAML rendering
        name_predicate: Decides whether a name may appear in the report
    """
    ApiJsonGenerator(name_predicate=name_predicate).write_json_file(filename, package, output_format=output_format)


__all__ = [
    "ApiJsonGenerator",
    "UnsupportedMemberWarning",
    "generate_api_json",
    "save_api_json",
    "MEMBERS_KEY",
    "EXPORTS_KEY",
    "VALUES_KEY",
]
