"""Container lifecycle API with progressive disclosure.

Level 1 is a set of module-level functions backed by a shared default
renderer. Level 2 is :class:`HeadlessRenderer`, which carries its own
configuration, engine and statistics.

Every entry point validates its arguments before anything is mutated and
raises ``ValidationError`` naming the offending argument.
"""

from typing import Any, Callable, Dict, List, Optional

from headless_renderer.elements.validation import (
    is_callable,
    is_container,
    is_element_or_elements,
    validate,
)
from headless_renderer.host.host_config import HostConfig
from headless_renderer.host.serialization import ElementValue, container_to_elements as _read_back
from headless_renderer.reconciler import Container, Reconciler
from headless_renderer.shared import (
    RendererConfig,
    ValidationError,
    get_logger,
)


class HeadlessRenderer:
    """Renderer that draws element trees into in-memory instance trees.

    Attributes:
        config: Renderer configuration
        reconciler: Engine driving the host operations
        correlation_id: Correlation ID attached to every log record

    Examples:
        Rendering and reading back:
        >>> from headless_renderer import create_element
        >>> renderer = HeadlessRenderer()
        >>> container = renderer.create_container()
        >>> renderer.render_to_container(container, create_element("box", {"id": 1}, "hello"))
        >>> renderer.container_to_elements(container)
        [Element(type='box', props={'id': 1}, children=('hello',), key=None, ref=None)]

        Development checks after every commit:
        >>> renderer = HeadlessRenderer(RendererConfig.development())
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        host: Optional[HostConfig] = None
    ) -> None:
        """Initialize renderer.

        Args:
            config: Renderer configuration (defaults to ``RendererConfig()``)
            host: Host operation set (defaults to the in-memory ``HostConfig``)
        """
        self.config = config or RendererConfig()
        self.correlation_id = (
            self.config.correlation_id
            if self.config.global_.enable_correlation_tracking else None
        )
        self.logger = get_logger(
            __name__, self.correlation_id, "headless_renderer",
            self.config.global_.logging_level,
        )

        self.host = host or HostConfig()
        self.reconciler = Reconciler(self.host, self.config)

        self._containers_created = 0
        self._render_count = 0
        self._unmount_count = 0

        self.logger.info(
            "HeadlessRenderer initialized",
            extra={
                "preset": self.config.name,
                "deferred_updates": self.config.engine.deferred_updates,
            }
        )

    def create_container(self) -> Container:
        """Create an empty render root.

        Returns:
            Container whose ``container_info`` holds no children
        """
        container = self.reconciler.create_container(self.host.create_container_info())
        self._containers_created += 1
        self.logger.debug(
            "Container created",
            extra={"containers_created": self._containers_created}
        )
        return container

    def render_to_container(
        self,
        container: Container,
        children: Any,
        callback: Optional[Callable[[], None]] = None
    ) -> None:
        """Render ``children`` into ``container``.

        Args:
            container: Container from :meth:`create_container`
            children: Element, string, ``None`` or nested list of them
            callback: Called with no arguments after the update is committed

        Raises:
            ValidationError: If any argument has the wrong shape; the
                container is left untouched
        """
        self._validate(is_container, container, "container")
        self._validate(is_element_or_elements, children, "children")
        if callback is not None:
            self._validate(is_callable, callback, "callback")

        self._render_count += 1
        self.logger.info(
            "Rendering into container",
            extra={
                "children_type": type(children).__name__,
                "has_callback": callback is not None,
                "render_count": self._render_count,
            }
        )
        self.reconciler.update_container(children, container, None, callback)

    def unmount_at_container(self, container: Container) -> None:
        """Remove everything rendered into ``container``.

        Raises:
            ValidationError: If ``container`` is not a container
        """
        self._validate(is_container, container, "container")

        self._unmount_count += 1
        self.logger.info(
            "Unmounting container",
            extra={"unmount_count": self._unmount_count}
        )
        self.reconciler.update_container(None, container, None)

    def container_to_elements(self, container: Container) -> List[ElementValue]:
        """Read the rendered tree of ``container`` back as elements.

        Raises:
            ValidationError: If ``container`` is not a container
        """
        self._validate(is_container, container, "container")
        return _read_back(container)

    def flush(self, container: Container) -> None:
        """Commit pending deferred updates on ``container`` right away."""
        self._validate(is_container, container, "container")
        self.reconciler.flush(container)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get renderer usage statistics."""
        return {
            "containers_created": self._containers_created,
            "renders": self._render_count,
            "unmounts": self._unmount_count,
            "correlation_id": self.correlation_id,
            **self.reconciler.statistics,
        }

    def _validate(self, predicate: Callable[[Any], bool], value: Any, argument: str) -> None:
        try:
            validate(predicate, value, argument)
        except ValidationError as e:
            self.logger.error(
                "Rejected invalid argument",
                extra={"argument": e.argument, "value_type": type(value).__name__},
                exc_info=False,
            )
            raise


_default_renderer: Optional[HeadlessRenderer] = None


def get_default_renderer() -> HeadlessRenderer:
    """Get the shared renderer behind the module-level functions."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = HeadlessRenderer()
    return _default_renderer


def create_container() -> Container:
    """Create an empty render root with the default renderer.

    Examples:
        >>> container = create_container()
        >>> container_to_elements(container)
        []
    """
    return get_default_renderer().create_container()


def render_to_container(
    container: Container,
    children: Any,
    callback: Optional[Callable[[], None]] = None
) -> None:
    """Render ``children`` into ``container`` with the default renderer.

    Args:
        container: Container from :func:`create_container`
        children: Element, string, ``None`` or nested list of them
        callback: Called with no arguments after the update is committed

    Raises:
        ValidationError: If any argument has the wrong shape

    Examples:
        >>> container = create_container()
        >>> render_to_container(container, ["a", create_element("b")])
        >>> container_to_elements(container)
        ['a', Element(type='b', props={}, children=(), key=None, ref=None)]
    """
    get_default_renderer().render_to_container(container, children, callback)


def unmount_at_container(container: Container) -> None:
    """Remove everything rendered into ``container``."""
    get_default_renderer().unmount_at_container(container)


def container_to_elements(container: Container) -> List[ElementValue]:
    """Read the rendered tree of ``container`` back as elements."""
    return get_default_renderer().container_to_elements(container)
