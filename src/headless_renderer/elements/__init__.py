"""Declarative elements and the shape checks applied to them.

Key Components:
    Element / create_element: Immutable description of the desired tree
    normalize_children: Flattening of nested children into renderable nodes
    is_element / is_element_or_elements / is_container: Shape predicates
    validate: Fail-fast argument validation
"""

from .element import (
    Element,
    ElementType,
    create_element,
    iter_flat,
    normalize_children,
)
from .validation import (
    is_callable,
    is_container,
    is_element,
    is_element_or_elements,
    validate,
)

__all__ = [
    "Element",
    "ElementType",
    "create_element",
    "iter_flat",
    "normalize_children",
    "is_callable",
    "is_container",
    "is_element",
    "is_element_or_elements",
    "validate",
]
