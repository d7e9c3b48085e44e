"""Two-phase property updates and inert host hooks.

``prepare_update`` computes the next props without touching the instance;
``commit_update`` applies them. The engine may drop a prepared payload
without committing it.
"""

from typing import Any, Dict, Mapping, Optional

from headless_renderer.host.instances import (
    ElementInstance,
    TextInstance,
    props_without_children,
)


def prepare_update(
    instance: ElementInstance,
    type_: str,
    old_props: Optional[Mapping[str, Any]],
    new_props: Optional[Mapping[str, Any]],
    *_: Any
) -> Dict[str, Any]:
    """Compute the props an instance will hold after the update."""
    return props_without_children(new_props)


def commit_update(instance: ElementInstance, payload: Dict[str, Any], *_: Any) -> None:
    """Replace the instance's props with a prepared payload."""
    instance.props = payload


def commit_text_update(text_instance: TextInstance, old_text: str, new_text: str) -> None:
    """Replace the text held by a text instance."""
    text_instance.text = new_text


def noop(*_: Any) -> None:
    """Host hook with no behaviour in an in-memory tree."""
    return None


def always_false(*_: Any) -> bool:
    """Host predicate that never opts in."""
    return False
