"""Instance model for the headless renderer.

Instances are the mutable, renderer-owned nodes produced from elements. There
are exactly two variants, :class:`ElementInstance` and :class:`TextInstance`.
Both compare by identity: a node moved to a new position must stay the same
node, never "an equal node".
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from headless_renderer.elements.element import CHILDREN_PROP

CONTAINER_TAG = "RootContainerInfoInstance"


@dataclass(eq=False)
class ElementInstance:
    """Composite instance created from a host element.

    ``props`` holds every element property except ``children``; structural
    children live only in ``children``, in display order.
    """

    type: str
    props: Dict[str, Any] = field(default_factory=dict)
    children: List["Instance"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate instance values."""
        if not self.type:
            raise ValueError("Instance type cannot be empty")
        if CHILDREN_PROP in self.props:
            raise ValueError("Instance props cannot contain 'children'")


@dataclass(eq=False)
class TextInstance:
    """Leaf instance holding a mutable text value."""

    text: str

    def __post_init__(self) -> None:
        """Validate text content."""
        if not isinstance(self.text, str):
            raise TypeError("Text instance content must be a string")


Instance = Union[ElementInstance, TextInstance]


@dataclass(eq=False)
class ContainerInfo:
    """Root record owning the top-level instance sequence of one container."""

    children: List[Instance] = field(default_factory=list, repr=False)
    tag: str = CONTAINER_TAG

    @property
    def is_empty(self) -> bool:
        """Check if nothing is rendered into the container."""
        return not self.children


def props_without_children(props: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy ``props`` dropping the ``children`` entry."""
    if not props:
        return {}
    return {key: value for key, value in props.items() if key != CHILDREN_PROP}


def create_instance(type_: str, props: Optional[Mapping[str, Any]], *_: Any) -> ElementInstance:
    """Create an element instance with no children.

    Args:
        type_: Host type name
        props: Element props; a ``children`` entry is dropped
        *_: Root container, host context and engine handle, unused here

    Returns:
        New ElementInstance
    """
    return ElementInstance(type=type_, props=props_without_children(props))


def create_text_instance(text: str, *_: Any) -> TextInstance:
    """Create a text instance holding ``text``."""
    return TextInstance(text=text)


def get_public_instance(instance: Instance) -> Instance:
    """Expose an instance to callers as-is."""
    return instance
