"""
Formguard Field Contract
========================

The narrow view of a field tree that rules depend on. Any object with
``value``, ``touched``, ``errors``, ``parent`` and ``get(name)`` works;
rules never import a concrete tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldNode(Protocol):
    """
    Capability set of a node in a field tree.

    Attributes:
        value: Current value (string, number, date, file, or nested record)
        touched: Whether the owner recorded user interaction
        errors: Mapping of failure code to payload, or None
        parent: Enclosing node, or None at the root
    """

    value: Any
    touched: bool
    errors: Optional[Dict[str, Any]]
    parent: Optional["FieldNode"]

    def get(self, name: str) -> Optional["FieldNode"]:
        """Look up a child by name."""
        ...


@dataclass
class DetachedField:
    """Stand-in node for a bare value checked outside any tree."""

    value: Any = None
    touched: bool = False
    errors: Optional[Dict[str, Any]] = None
    parent: Optional[FieldNode] = None

    def get(self, name: str) -> Optional[FieldNode]:
        return None


def as_field(target: Any) -> FieldNode:
    """Return ``target`` if it is a field node, else wrap it as a value."""
    if isinstance(target, FieldNode):
        return target
    return DetachedField(value=target)


def parent_of(node: FieldNode) -> Optional[FieldNode]:
    """Get the enclosing node, if any."""
    return getattr(node, "parent", None)


def root_of(node: FieldNode) -> FieldNode:
    """Walk parent links up to the top-most ancestor."""
    current = node
    seen = {id(current)}
    parent = parent_of(current)

    while parent is not None:
        if id(parent) in seen:
            raise ValueError("Field tree contains a parent cycle")
        seen.add(id(parent))
        current = parent
        parent = parent_of(current)

    return current


def sibling(node: FieldNode, name: str) -> Optional[FieldNode]:
    """Resolve a named field from the root of ``node``'s tree."""
    return root_of(node).get(name)


def value_of(node: FieldNode, name: str) -> Any:
    """Value of the named field in ``node``'s tree, or None if absent."""
    found = sibling(node, name)
    return found.value if found is not None else None
