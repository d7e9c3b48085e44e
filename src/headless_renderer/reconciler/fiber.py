"""Engine-side bookkeeping records for rendered nodes.

A :class:`Fiber` remembers which element produced which host instance so the
next render can reuse instances instead of recreating them. Fibers are private
to the engine; host operations never see them.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterator, List, Optional

from headless_renderer.elements.element import Element


class FiberKind(Enum):
    """Kinds of rendered node the engine tracks."""

    HOST = auto()       # Element with a string type, owns an element instance
    TEXT = auto()       # String leaf, owns a text instance
    COMPONENT = auto()  # Function component, owns no instance


@dataclass(eq=False)
class Fiber:
    """Record of one rendered node and the instance it owns."""

    kind: FiberKind
    type: Any = None
    key: Optional[Any] = None
    element: Optional[Element] = None
    props: Dict[str, Any] = field(default_factory=dict)
    text: str = ""
    instance: Any = None
    children: List["Fiber"] = field(default_factory=list)
    ref: Optional[Callable[[Any], None]] = None
    text_content: bool = False

    # Host children of ``instance`` as last committed by the engine. Shared
    # between successive records of the same host node.
    committed_children: List[Any] = field(default_factory=list)

    def same_type_as(self, node: Any) -> bool:
        """Check if ``node`` can be rendered by reusing this record."""
        if isinstance(node, str):
            return self.kind is FiberKind.TEXT
        return self.kind is not FiberKind.TEXT and self.type == node.type

    def iter_refs(self) -> Iterator[Callable[[Any], None]]:
        """Yield every host ref in this subtree."""
        if self.ref is not None:
            yield self.ref
        for child in self.children:
            yield from child.iter_refs()


def host_nodes(fibers: List[Fiber]) -> List[Any]:
    """Collect the top-most host instances under ``fibers`` in display order.

    Components own no instance, so their host children stand in their place.
    """
    nodes: List[Any] = []
    for fiber in fibers:
        if fiber.kind is FiberKind.COMPONENT:
            nodes.extend(host_nodes(fiber.children))
        else:
            nodes.append(fiber.instance)
    return nodes


@dataclass(eq=False)
class PendingUpdate:
    """Update queued on a container until the engine processes it."""

    children: Any
    callback: Optional[Callable[[], None]] = None


@dataclass(eq=False)
class Container:
    """Engine handle for one independent render root.

    ``container_info`` is the host's root record; everything else is engine
    bookkeeping.
    """

    container_info: Any
    deferred: bool = False
    children: List[Fiber] = field(default_factory=list, repr=False)
    committed_children: List[Any] = field(default_factory=list, repr=False)
    pending: List[PendingUpdate] = field(default_factory=list, repr=False)
    scheduled: bool = False
    commit_count: int = 0
    error: Optional[Exception] = field(default=None, repr=False)
