"""Tool catalog: the declared list of tools and their input shapes."""

from devhelper.catalog.capabilities import (
    CATALOG,
    Capability,
    get_capability,
    list_capabilities,
)
from devhelper.catalog.shapes import FieldSpec, Shape

__all__ = [
    "CATALOG",
    "Capability",
    "FieldSpec",
    "Shape",
    "get_capability",
    "list_capabilities",
]
