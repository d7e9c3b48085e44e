"""Headless Renderer.

Renders declarative element trees into an in-memory, non-visual instance
tree and reads the result back as elements, for inspecting and testing
rendered output without a display surface.

Progressive API Disclosure:
- Level 1: Simple functions - create_container(), render_to_container(),
  unmount_at_container(), container_to_elements()
- Level 2: Configured renderer - HeadlessRenderer class
- Level 3: Host operations and engine - headless_renderer.host,
  headless_renderer.reconciler
"""

__version__ = "0.1.0"
__author__ = "Headless Renderer Team"

# Level 1: Simple functions
# Level 2: Configured renderer
from .api import (
    HeadlessRenderer,
    container_to_elements,
    create_container,
    render_to_container,
    unmount_at_container,
)

# Declarative input
from .elements import Element, create_element

# Configuration and errors for advanced usage
from .shared import (
    InvariantViolation,
    RendererConfig,
    RendererError,
    ValidationError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple container lifecycle functions
    "create_container",
    "render_to_container",
    "unmount_at_container",
    "container_to_elements",

    # Level 2: Configured renderer
    "HeadlessRenderer",

    # Declarative input
    "Element",
    "create_element",

    # Configuration and errors
    "RendererConfig",
    "RendererError",
    "ValidationError",
    "InvariantViolation",
]
