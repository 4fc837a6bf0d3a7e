"""
On-demand opcode resolution for regions.

A region's effective value for an opcode is the nearest assignment on its
ancestor chain (Region, then Group, Master and Global), else the catalog
default, else ``None``.  Nothing is cached and the document is never
modified, so repeated calls return equal values.
"""
from __future__ import annotations

from itertools import chain
from typing import Dict, Optional

from ..catalog.opcode_catalog import OpcodeCatalog, default_catalog
from ..models import Document, ScopeNode, TypedValue
from ..parser.value_parser import ValueParser


def resolve(
    document: Document,
    region: ScopeNode,
    opcode_name: str,
    catalog: Optional[OpcodeCatalog] = None,
) -> Optional[TypedValue]:
    """
    Effective value of *opcode_name* for *region*.

    Parameters
    ----------
    document:
        The document *region* belongs to.
    region:
        Usually a ``REGION`` node; any scope node works and resolves against
        its own ancestors.
    opcode_name:
        Concrete opcode name, any case (``hicc64``, ``Volume``).
    catalog:
        Source of defaults.  Defaults to the catalog the document was built
        with, else the standard catalog.

    Returns
    -------
    Optional[TypedValue]
        ``None`` when the opcode is set nowhere on the chain and has no
        catalog default.
    """
    name = opcode_name.lower()
    for scope in chain((region,), region.ancestors()):
        value = scope.opcodes.get(name)
        if value is not None:
            return value

    if catalog is None:
        catalog = document.catalog if document.catalog is not None else default_catalog()
    descriptor = catalog.lookup(name)
    if descriptor is None:
        return None
    return ValueParser().default_value(descriptor)


def effective_opcodes(region: ScopeNode) -> Dict[str, TypedValue]:
    """All opcodes visible from *region*, nearer scopes overriding farther ones."""
    merged: Dict[str, TypedValue] = {}
    for scope in reversed([region, *region.ancestors()]):
        merged.update(scope.opcodes)
    return merged
