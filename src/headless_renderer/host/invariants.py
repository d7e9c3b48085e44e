"""Structural invariant check for a rendered instance tree."""

from typing import Any, List, Set

from headless_renderer.host.instances import ElementInstance, TextInstance
from headless_renderer.elements.element import CHILDREN_PROP
from headless_renderer.shared.exceptions import InvariantViolation


def verify_tree(container_info: Any) -> int:
    """Check the structural invariants of a rendered instance tree.

    Verifies that no child appears twice in one child sequence, that every
    instance is reachable from exactly one parent, that element instance props
    hold no children entry, and that text instance content is a string.

    Args:
        container_info: Root record whose ``children`` are the top-level instances

    Returns:
        Number of instances checked

    Raises:
        InvariantViolation: On the first broken invariant found
    """
    seen: Set[int] = set()
    stack: List[Any] = [container_info]
    checked = 0

    while stack:
        parent = stack.pop()
        siblings: Set[int] = set()
        for child in parent.children:
            if id(child) in siblings:
                raise InvariantViolation(
                    f"Instance {child!r} appears twice in the same parent",
                    operation="verify_tree",
                )
            siblings.add(id(child))
            if id(child) in seen:
                raise InvariantViolation(
                    f"Instance {child!r} is reachable from more than one parent",
                    operation="verify_tree",
                )
            seen.add(id(child))
            checked += 1

            if isinstance(child, ElementInstance):
                if CHILDREN_PROP in child.props:
                    raise InvariantViolation(
                        f"Instance {child!r} stores a children property",
                        operation="verify_tree",
                    )
                stack.append(child)
            elif not isinstance(child, TextInstance) or not isinstance(child.text, str):
                raise InvariantViolation(
                    f"Unexpected node {child!r} in the instance tree",
                    operation="verify_tree",
                )

    return checked
