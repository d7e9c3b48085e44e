"""Declarative element values for the headless renderer.

Elements are the caller-owned input of a render: an immutable description of
the desired tree. The renderer never mutates them; the reconciler reads them
and the serializer builds fresh ones from the live instance tree.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

# Function components receive the element's full props and return elements
ComponentType = Callable[[Dict[str, Any]], Any]
ElementType = Union[str, ComponentType]

CHILDREN_PROP = "children"
KEY_PROP = "key"
REF_PROP = "ref"

_RESERVED_PROPS = (CHILDREN_PROP, KEY_PROP, REF_PROP)


@dataclass(frozen=True)
class Element:
    """Immutable declarative description of one node of the desired tree.

    ``props`` never contains ``children``, ``key`` or ``ref``; those live in
    their own fields. Elements compare structurally on type, props and
    children, which is what makes the render -> read-back round trip
    checkable with ``==``.
    """

    type: ElementType
    props: Dict[str, Any] = field(default_factory=dict)
    children: Tuple[Any, ...] = ()
    key: Optional[Any] = field(default=None, compare=False)
    ref: Optional[Callable[[Any], None]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate element values."""
        if isinstance(self.type, str):
            if not self.type:
                raise ValueError("Element type cannot be empty")
        elif not callable(self.type):
            raise TypeError("Element type must be a string or a callable component")

        for name in _RESERVED_PROPS:
            if name in self.props:
                raise ValueError(f"Element props cannot contain '{name}'")

        if self.ref is not None and not callable(self.ref):
            raise TypeError("Element ref must be callable")

    @property
    def is_host(self) -> bool:
        """Check if this element renders directly to a host instance."""
        return isinstance(self.type, str)

    @property
    def full_props(self) -> Dict[str, Any]:
        """Props as handed to host operations and components, children included."""
        props = dict(self.props)
        props[CHILDREN_PROP] = self.children
        return props


def create_element(
    type_: ElementType,
    props: Optional[Dict[str, Any]] = None,
    *children: Any
) -> Element:
    """Create a declarative element.

    Args:
        type_: Host type name or function component
        props: Property mapping; ``key`` and ``ref`` entries are lifted into
            the element, and a ``children`` entry is used when no positional
            children are given
        *children: Child elements, strings, numbers, ``None`` or nested lists

    Returns:
        New Element

    Examples:
        >>> create_element("box", {"id": 1}, "hello")
        Element(type='box', props={'id': 1}, children=('hello',), key=None, ref=None)
    """
    own_props = dict(props or {})
    key = own_props.pop(KEY_PROP, None)
    ref = own_props.pop(REF_PROP, None)
    props_children = own_props.pop(CHILDREN_PROP, None)

    if not children and props_children is not None:
        if isinstance(props_children, (list, tuple)):
            children = tuple(props_children)
        else:
            children = (props_children,)

    return Element(
        type=type_,
        props=own_props,
        children=tuple(children),
        key=key,
        ref=ref,
    )


def iter_flat(children: Any) -> Iterator[Any]:
    """Yield the leaves of arbitrarily nested lists/tuples in order."""
    if isinstance(children, (list, tuple)):
        for child in children:
            yield from iter_flat(child)
    else:
        yield children


def normalize_children(children: Any) -> List[Union[Element, str]]:
    """Flatten children into the renderable nodes they stand for.

    Nested sequences are flattened into direct positions, ``None`` and
    booleans render nothing, numbers render as their text.

    Args:
        children: A single child or an arbitrarily nested sequence of them

    Returns:
        Ordered list of Elements and strings
    """
    nodes: List[Union[Element, str]] = []
    for child in iter_flat(children):
        if child is None or isinstance(child, bool):
            continue
        if isinstance(child, (int, float)):
            nodes.append(str(child))
        elif isinstance(child, (str, Element)):
            nodes.append(child)
        else:
            raise TypeError(
                f"Objects of type {type(child).__name__} are not valid children"
            )
    return nodes
