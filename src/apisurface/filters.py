"""
Admission filters applied before any item is projected.

Both filters are silent: a rejected item produces no output and, for
container kinds, its children are never visited.
"""

from typing import Callable

from apisurface.documentation import ReleaseTag
from apisurface.model import ApiItem, ModuleVariable, Package

NamePredicate = Callable[[str], bool]

ADMITTED_RELEASE_TAGS = frozenset({ReleaseTag.NONE, ReleaseTag.BETA, ReleaseTag.PUBLIC})


def is_release_tag_admitted(item: ApiItem) -> bool:
    """True unless the item is tagged @alpha or @internal."""
    return item.documentation.release_tag in ADMITTED_RELEASE_TAGS


def is_name_admitted(item: ApiItem, predicate: NamePredicate) -> bool:
    """
    True when the item's name may appear in the report.

    The root package and module variables have no notion of an unsupported
    name and are always admitted.
    """
    if isinstance(item, (Package, ModuleVariable)):
        return True
    return predicate(item.name)
