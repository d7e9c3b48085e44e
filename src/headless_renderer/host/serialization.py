"""Round-trip conversion from the live instance tree back to elements.

This is the only way to observe rendered output from outside the renderer:
element instances become elements, text instances become their string, and
anything else becomes ``None``.
"""

from functools import singledispatch
from typing import Any, List, Union

from headless_renderer.elements.element import Element, create_element
from headless_renderer.host.instances import ElementInstance, TextInstance

ElementValue = Union[Element, str, None]


def to_list(value: Any) -> List[Any]:
    """Normalize ``value`` into a list.

    ``None`` becomes an empty list, a list is returned unchanged, other
    non-string sequences are copied into a list, and any single value is
    wrapped.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (tuple, range)):
        return list(value)
    return [value]


@singledispatch
def instance_to_element(node: Any) -> ElementValue:
    """Convert an instance into the element it represents."""
    return None


@instance_to_element.register
def _(node: ElementInstance) -> ElementValue:
    children = [instance_to_element(child) for child in to_list(node.children)]
    return create_element(node.type, dict(node.props), *children)


@instance_to_element.register
def _(node: TextInstance) -> ElementValue:
    return node.text


def container_to_elements(container: Any) -> List[ElementValue]:
    """Convert the top-level instances of a container into elements, in order."""
    return [
        instance_to_element(child)
        for child in to_list(container.container_info.children)
    ]
