"""Ordered child mutations for instances and containers.

All three operations work on anything with an ordered ``children`` list, so
nested and top-level mutation share one algorithm. Membership is decided by
identity. ``append_child`` and ``insert_before`` always remove the child
first, which turns "insert" into "move" when the engine relocates an
existing node.
"""

from typing import Any, List, Optional

from headless_renderer.shared.exceptions import InvariantViolation


def _index_of(children: List[Any], child: Any) -> Optional[int]:
    """Find ``child`` in ``children`` by identity."""
    for index, candidate in enumerate(children):
        if candidate is child:
            return index
    return None


def append_child(parent: Any, child: Any) -> None:
    """Make ``child`` the last child of ``parent``, exactly once.

    Args:
        parent: Element instance or container info
        child: Instance to append or move to the end
    """
    children = parent.children
    index = _index_of(children, child)
    if index is not None:
        del children[index]
    children.append(child)


def insert_before(parent: Any, child: Any, before_child: Any) -> None:
    """Place ``child`` immediately before ``before_child`` in ``parent``.

    Args:
        parent: Element instance or container info
        child: Instance to insert or move
        before_child: Instance already in ``parent`` that ``child`` must precede

    Raises:
        InvariantViolation: If ``before_child`` is not a child of ``parent``;
            the child sequence is left unchanged
    """
    children = parent.children
    index = _index_of(children, child)
    if index is not None:
        del children[index]

    before_index = _index_of(children, before_child)
    if before_index is None:
        if index is not None:
            children.insert(index, child)
        raise InvariantViolation(
            "This child does not exist: reference child is not in the parent",
            operation="insert_before",
        )
    children.insert(before_index, child)


def remove_child(parent: Any, child: Any) -> None:
    """Remove ``child`` from ``parent``.

    Raises:
        InvariantViolation: If ``child`` is not a child of ``parent``
    """
    children = parent.children
    index = _index_of(children, child)
    if index is None:
        raise InvariantViolation(
            "This child does not exist: cannot remove it from the parent",
            operation="remove_child",
        )
    del children[index]
