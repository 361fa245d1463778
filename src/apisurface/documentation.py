"""
Documentation Blocks for the Declaration Model

Every declaration carries a Documentation record produced by the upstream
front-end. The engine never interprets the text inside it:

    - Doc blocks (summary, remarks, deprecation notice, ...) are opaque
      lists of doc elements, passed through unchanged
    - The release tag is the only field that drives behavior

ARCHITECTURAL RULE:
    No rendering of documentation text happens here.
    A doc element is a mapping with at least a "kind" key, nothing more.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


# A single opaque documentation element, e.g. {"kind": "textDocElement", "value": "..."}
DocElement = Dict[str, Any]


class ReleaseTag(Enum):
    """
    Stability tag declared on an API item.

    Only NONE, BETA and PUBLIC items belong to the committed public contract.
    """

    NONE = "none"
    BETA = "beta"
    PUBLIC = "public"
    ALPHA = "alpha"
    INTERNAL = "internal"


@dataclass
class ParamDoc:
    """
    Documentation for one parameter of a function or method.

    Properties:
        name: Parameter name as written in the @param tag
        description: Opaque doc block describing the parameter
    """

    name: str
    description: List[DocElement] = field(default_factory=list)


@dataclass
class Documentation:
    """
    Documentation attached to a declaration.

    Properties:
        summary:
            Opaque doc block, first paragraph of the comment
        remarks:
            Opaque doc block, extended discussion
        deprecated_message:
            Opaque doc block, empty when the item is not deprecated
        parameters:
            Parameter docs keyed by parameter name
        returns_message:
            Opaque doc block describing the return value
        release_tag:
            Declared stability of the item
    """

    summary: List[DocElement] = field(default_factory=list)
    remarks: List[DocElement] = field(default_factory=list)
    deprecated_message: List[DocElement] = field(default_factory=list)
    parameters: Dict[str, ParamDoc] = field(default_factory=dict)
    returns_message: List[DocElement] = field(default_factory=list)
    release_tag: ReleaseTag = ReleaseTag.NONE

    @property
    def is_beta(self) -> bool:
        return self.release_tag == ReleaseTag.BETA


def text_block(text: str) -> List[DocElement]:
    """Build a one-element doc block holding plain text."""
    if not text:
        return []
    return [{"kind": "textDocElement", "value": text}]
