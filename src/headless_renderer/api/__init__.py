"""Public container lifecycle API for the headless renderer."""

from .renderer import (
    HeadlessRenderer,
    container_to_elements,
    create_container,
    get_default_renderer,
    render_to_container,
    unmount_at_container,
)

__all__ = [
    "HeadlessRenderer",
    "container_to_elements",
    "create_container",
    "get_default_renderer",
    "render_to_container",
    "unmount_at_container",
]
