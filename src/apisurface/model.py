"""
Declaration Model Objects

Defines the read-only declaration tree consumed by the report generators.

The tree is produced by an upstream front-end that has already parsed the
source and resolved types and documentation tags. These are pure data classes
representing:
    - Packages (root container)
    - Namespaces
    - Structured types (classes and interfaces)
    - Enums and enum values
    - Functions, methods and constructors
    - Properties and module-level variables
    - Parameters
    - Members of unknown shape

ARCHITECTURAL RULE:
    These objects:
        - Form a CLOSED set of kinds (see ItemKind)
        - Are never mutated by a generator
        - Carry resolved text (types, signatures), never source code
        - Represent structure, not behavior
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .documentation import Documentation


# Synthetic name the front-end assigns to class constructors
CONSTRUCTOR_NAME = "__constructor"

_ALLOWED_NAME_RE = re.compile(r"^[a-zA-Z_]+[a-zA-Z_0-9]*$")


class ItemKind(Enum):
    """
    Kind discriminator of a declaration.

    The values are the published discriminator strings written into the
    "kind" field of the canonical document. PARAMETER never appears as a
    node of its own.
    """

    PACKAGE = "package"
    NAMESPACE = "namespace"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ENUM_VALUE = "enum value"
    FUNCTION = "function"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    MODULE_VARIABLE = "module variable"
    MEMBER = "member"
    PARAMETER = "parameter"


class AccessModifier(Enum):
    """Visibility of a class member."""
    PRIVATE = "Private"
    PROTECTED = "Protected"
    PUBLIC = "Public"


class DeclarationKind(Enum):
    """Syntactic form a property was declared with."""
    PROPERTY = "Property"
    GET_ACCESSOR = "GetAccessor"
    SET_ACCESSOR = "SetAccessor"


def is_supported_name(name: str) -> bool:
    """
    Naming-support predicate of the front-end.

    Plain identifiers are supported; computed names such as
    "[Symbol.iterator]" or names using "$" are not. The synthetic
    constructor name is always supported.
    """
    return name == CONSTRUCTOR_NAME or bool(_ALLOWED_NAME_RE.match(name))


@dataclass
class ApiItem:
    """
    Base class for every declaration in the tree.

    Properties:
        name: Declared name (exported name for top-level items)
        documentation: Parsed doc comment, including the release tag
    """

    name: str
    documentation: Documentation = field(default_factory=Documentation)

    @property
    def kind(self) -> ItemKind:
        raise NotImplementedError


@dataclass
class Parameter(ApiItem):
    """
    A parameter of a function, method or constructor.

    Properties:
        type: Resolved type text (e.g. "number")
        is_optional: Declared with "?" or a default value
        is_spread: Rest parameter ("...args")
    """

    type: str = ""
    is_optional: bool = False
    is_spread: bool = False

    @property
    def kind(self) -> ItemKind:
        return ItemKind.PARAMETER


@dataclass
class Property(ApiItem):
    """
    A property of a class or interface.

    A getter/setter pair reaches the model as two Property items sharing a
    name, one per accessor declaration.
    """

    type: str = ""
    is_optional: bool = False
    is_read_only: bool = False
    is_static: bool = False
    declaration_kind: DeclarationKind = DeclarationKind.PROPERTY

    @property
    def kind(self) -> ItemKind:
        return ItemKind.PROPERTY


@dataclass
class Method(ApiItem):
    """
    A method of a class or interface.

    A constructor is a Method named CONSTRUCTOR_NAME. It has no access
    modifier, no return type and no stability of its own.

    Properties:
        signature: One-line rendered declaration
        parameters: Parameters in declaration order
        return_type: Resolved return type text
        access_modifier: Declared visibility, None when omitted
    """

    signature: str = ""
    parameters: List[Parameter] = field(default_factory=list)
    return_type: str = ""
    access_modifier: Optional[AccessModifier] = None
    is_optional: bool = False
    is_static: bool = False

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME

    @property
    def kind(self) -> ItemKind:
        return ItemKind.CONSTRUCTOR if self.is_constructor else ItemKind.METHOD


@dataclass
class Member(ApiItem):
    """
    A class member whose declaration form has no dedicated model class
    (index signatures, call signatures, ...).

    Properties:
        declaration_kind: Raw syntax kind tag reported by the front-end
    """

    declaration_kind: str = ""

    @property
    def kind(self) -> ItemKind:
        return ItemKind.MEMBER


ClassMember = Union[Method, Property, Member]


@dataclass
class StructuredType(ApiItem):
    """
    A class or an interface.

    Properties:
        is_interface: True for interfaces, False for classes
        extends: Base type text, empty when none
        implements: Implemented interfaces text, empty when none
        type_parameters: Generic parameter names
        members: Methods, properties and other members
    """

    is_interface: bool = False
    extends: str = ""
    implements: str = ""
    type_parameters: List[str] = field(default_factory=list)
    members: List[ClassMember] = field(default_factory=list)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.INTERFACE if self.is_interface else ItemKind.CLASS

    def get_sorted_members(self) -> List[ClassMember]:
        return _sorted_by_name(self.members)

    def get_member(self, name: str) -> Optional[ClassMember]:
        for member in self.members:
            if member.name == name:
                return member
        return None


@dataclass
class EnumValue(ApiItem):
    """
    A member of an enum.

    Properties:
        initializer: Literal text of an explicit initializer ("5" for A = 5),
                     None for implicit values
    """

    initializer: Optional[str] = None

    @property
    def kind(self) -> ItemKind:
        return ItemKind.ENUM_VALUE


@dataclass
class EnumType(ApiItem):
    """An enum declaration and its values."""

    values: List[EnumValue] = field(default_factory=list)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.ENUM

    def get_sorted_members(self) -> List[EnumValue]:
        return _sorted_by_name(self.values)


@dataclass
class Function(ApiItem):
    """A free function exported from a package or namespace."""

    parameters: List[Parameter] = field(default_factory=list)
    return_type: str = ""

    @property
    def kind(self) -> ItemKind:
        return ItemKind.FUNCTION


@dataclass
class ModuleVariable(ApiItem):
    """
    A variable exported directly from a namespace.

    Properties:
        type: Resolved type text
        value: Initializer text, empty when none
    """

    type: str = ""
    value: str = ""

    @property
    def kind(self) -> ItemKind:
        return ItemKind.MODULE_VARIABLE


@dataclass
class Namespace(ApiItem):
    """A namespace and the items it exports."""

    members: List["ExportedItem"] = field(default_factory=list)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.NAMESPACE

    def get_sorted_members(self) -> List["ExportedItem"]:
        return _sorted_by_name(self.members)


ExportedItem = Union[Namespace, StructuredType, EnumType, Function, ModuleVariable]


@dataclass
class Package(ApiItem):
    """
    Root of the declaration tree.

    This is THE input artifact. A report generator derives its whole
    document from this object alone.

    Properties:
        name: Package name (e.g. "widgets")
        members: Items exported from the package entry point
    """

    members: List[ExportedItem] = field(default_factory=list)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.PACKAGE

    def get_sorted_members(self) -> List[ExportedItem]:
        return _sorted_by_name(self.members)

    def get_export(self, name: str) -> Optional[ExportedItem]:
        """
        Retrieve an exported item by name.

        Args:
            name: Exported name

        Returns:
            The item or None if not found
        """
        for item in self.members:
            if item.name == name:
                return item
        return None


def _sorted_by_name(items):
    # sorted() is stable, so same-named items (overloads, accessor pairs)
    # keep their declaration order
    return sorted(items, key=lambda item: item.name)
