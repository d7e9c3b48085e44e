"""Reconciliation engine driving the host operations.

The engine diffs each new element tree against the records of the previous
render and brings the host tree up to date using only the host hooks. It owns
every decision about what changed and when work happens; the host side only
applies the mutations it is told to apply.

Rendering happens in two phases:

1. Render: walk the new elements, reuse records matched by key (or position)
   and type, call function components, and create instances for new host
   nodes. Nothing attached to the container is touched.
2. Commit: apply text and property updates, bring each affected parent's
   child order in line with the new tree, then run refs, mount hooks and
   callbacks.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from headless_renderer.elements.element import Element, normalize_children
from headless_renderer.host.host_config import HostConfig
from headless_renderer.host.invariants import verify_tree
from headless_renderer.host.scheduling import Deadline
from headless_renderer.reconciler.fiber import (
    Container,
    Fiber,
    FiberKind,
    PendingUpdate,
    host_nodes,
)
from headless_renderer.shared import (
    CommitMetrics,
    RendererConfig,
    RendererError,
    get_logger,
)

MS_PER_SECOND = 1000


@dataclass
class _Work:
    """Effects collected during the render phase, applied at commit."""

    root_container: Any
    metrics: CommitMetrics = field(default_factory=CommitMetrics)
    text_updates: List[Tuple[Any, str, str]] = field(default_factory=list)
    prop_updates: List[Tuple[Any, Any, Any, Dict[str, Any], Dict[str, Any]]] = field(
        default_factory=list
    )
    reset_text: List[Any] = field(default_factory=list)
    parents: List[Fiber] = field(default_factory=list)
    deletions: List[Fiber] = field(default_factory=list)
    detached_refs: List[Callable[[Any], None]] = field(default_factory=list)
    attached_refs: List[Fiber] = field(default_factory=list)
    mounts: List[Fiber] = field(default_factory=list)


def _slot(key: Any, index: int) -> Tuple[str, Any]:
    """Matching slot of a child: its explicit key, or its position."""
    if key is not None:
        return ("key", key)
    return ("index", index)


class Reconciler:
    """Engine that keeps a host instance tree in sync with element trees.

    Examples:
        >>> from headless_renderer.elements import create_element
        >>> reconciler = Reconciler(HostConfig())
        >>> container = reconciler.create_container(HostConfig.create_container_info())
        >>> reconciler.update_container(create_element("box"), container)
        >>> len(container.container_info.children)
        1
    """

    def __init__(
        self,
        host: Optional[HostConfig] = None,
        config: Optional[RendererConfig] = None
    ) -> None:
        """Initialize the engine.

        Args:
            host: Host operation set the engine drives
            config: Renderer configuration (defaults to ``RendererConfig()``)
        """
        self.host = host or HostConfig()
        self.config = config or RendererConfig()
        correlation_id = (
            self.config.correlation_id
            if self.config.global_.enable_correlation_tracking else None
        )
        self.logger = get_logger(
            __name__, correlation_id, "reconciler", self.config.global_.logging_level
        )

        self.last_commit: Optional[CommitMetrics] = None
        self._commit_count = 0
        self._total_processing_time = 0.0

    def create_container(self, container_info: Any) -> Container:
        """Register a new render root around the host's ``container_info``."""
        container = Container(
            container_info=container_info,
            deferred=self.config.engine.deferred_updates,
        )
        self.logger.debug(
            "Container created",
            extra={"deferred": container.deferred}
        )
        return container

    def update_container(
        self,
        children: Any,
        container: Container,
        parent_component: Any = None,
        callback: Optional[Callable[[], None]] = None
    ) -> None:
        """Queue ``children`` as the new content of ``container``.

        Synchronous containers commit before this returns; deferred containers
        commit on the next turn of the event loop, where every queued update
        collapses to the most recent children.

        Args:
            children: Element, string, ``None`` or nested list of them
            container: Container to update
            parent_component: Owning component context; roots have none
            callback: Called with no arguments once the update is committed
        """
        container.pending.append(PendingUpdate(children=children, callback=callback))

        if not container.deferred:
            self._flush(container)
            return

        if not container.scheduled:
            container.scheduled = True
            try:
                self.host.schedule_deferred_callback(
                    lambda deadline: self._perform_deferred_work(container, deadline)
                )
            except RendererError:
                container.scheduled = False
                container.pending.pop()
                raise

    def flush(self, container: Container) -> None:
        """Commit any pending updates on ``container`` immediately."""
        self._flush(container)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get engine usage statistics."""
        return {
            "total_commits": self._commit_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._commit_count
                if self._commit_count > 0 else 0.0
            ),
            "last_commit": self.last_commit.to_dict() if self.last_commit else None,
        }

    def _perform_deferred_work(self, container: Container, deadline: Deadline) -> None:
        """Commit a deferred container from its event loop callback.

        Nobody awaits this callback, so a failed render is logged and kept on
        ``container.error`` instead of propagating into the event loop. The
        callbacks of the failed updates are dropped, as their updates were
        never committed, and the previously committed tree stays in place.
        """
        container.scheduled = False
        dropped = [update for update in container.pending if update.callback is not None]
        try:
            self._flush(container)
        except Exception as e:
            container.error = e
            self.logger.error(
                "Deferred update failed",
                extra={
                    "commit": container.commit_count,
                    "error_type": type(e).__name__,
                },
            )
            if dropped:
                self.logger.warning(
                    "Dropped callbacks of uncommitted updates",
                    extra={"dropped_callbacks": len(dropped)},
                )

    def _flush(self, container: Container) -> None:
        updates, container.pending = container.pending, []
        if not updates:
            return

        self._render_root(container, updates[-1].children)

        for update in updates:
            if update.callback is not None:
                update.callback()

    # Render phase

    def _render_root(self, container: Container, children: Any) -> None:
        start_time = time.time()
        info = container.container_info
        work = _Work(root_container=info)

        root_context = self.host.get_root_host_context(info)
        new_children = self._reconcile_children(
            container.children, children, root_context, work, depth=0
        )

        self._commit(container, new_children, work)

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        work.metrics.processing_time_ms = processing_time
        container.commit_count += 1
        container.error = None
        self._commit_count += 1
        self._total_processing_time += processing_time
        if self.config.global_.collect_metrics:
            self.last_commit = work.metrics

        self.logger.debug(
            "Commit completed",
            extra={"commit": container.commit_count, **work.metrics.to_dict()}
        )

    def _reconcile_children(
        self,
        old_fibers: List[Fiber],
        children: Any,
        host_context: Any,
        work: _Work,
        depth: int
    ) -> List[Fiber]:
        if depth > self.config.engine.max_tree_depth:
            raise RendererError(
                f"Render tree exceeds max_tree_depth ({self.config.engine.max_tree_depth})"
            )

        old_by_slot: Dict[Tuple[str, Any], Fiber] = {}
        for index, fiber in enumerate(old_fibers):
            old_by_slot.setdefault(_slot(fiber.key, index), fiber)

        reused: Set[int] = set()
        new_fibers: List[Fiber] = []
        for index, node in enumerate(normalize_children(children)):
            key = node.key if isinstance(node, Element) else None
            old = old_by_slot.pop(_slot(key, index), None)
            if old is not None and old.same_type_as(node):
                reused.add(id(old))
                new_fibers.append(self._update_fiber(old, node, host_context, work, depth))
            else:
                new_fibers.append(self._create_fiber(node, host_context, work, depth))

        for fiber in old_fibers:
            if id(fiber) not in reused:
                work.deletions.append(fiber)

        return new_fibers

    def _create_fiber(self, node: Any, host_context: Any, work: _Work, depth: int) -> Fiber:
        if isinstance(node, str):
            instance = self.host.create_text_instance(node, work.root_container, host_context)
            work.metrics.text_instances_created += 1
            return Fiber(kind=FiberKind.TEXT, text=node, instance=instance)

        if not node.is_host:
            return Fiber(
                kind=FiberKind.COMPONENT,
                type=node.type,
                key=node.key,
                element=node,
                props=node.full_props,
                children=self._render_component(node, [], host_context, work, depth),
            )

        props = node.full_props
        instance = self.host.create_instance(
            node.type, props, work.root_container, host_context
        )
        work.metrics.instances_created += 1

        text_content = bool(self.host.should_set_text_content(node.type, props))
        children: List[Fiber] = []
        if not text_content:
            child_context = self.host.get_child_host_context(
                host_context, node.type, work.root_container
            )
            children = self._reconcile_children([], node.children, child_context, work, depth + 1)

        committed = host_nodes(children)
        for child in committed:
            self.host.append_initial_child(instance, child)

        fiber = Fiber(
            kind=FiberKind.HOST,
            type=node.type,
            key=node.key,
            element=node,
            props=props,
            instance=instance,
            children=children,
            ref=node.ref,
            text_content=text_content,
            committed_children=committed,
        )

        if self.host.finalize_initial_children(
            instance, node.type, props, work.root_container, host_context
        ):
            work.mounts.append(fiber)
        if node.ref is not None:
            work.attached_refs.append(fiber)
        return fiber

    def _update_fiber(
        self, old: Fiber, node: Any, host_context: Any, work: _Work, depth: int
    ) -> Fiber:
        if isinstance(node, str):
            if old.text != node:
                work.text_updates.append((old.instance, old.text, node))
            return Fiber(kind=FiberKind.TEXT, text=node, instance=old.instance)

        if not node.is_host:
            return Fiber(
                kind=FiberKind.COMPONENT,
                type=node.type,
                key=node.key,
                element=node,
                props=node.full_props,
                children=self._render_component(node, old.children, host_context, work, depth),
            )

        props = node.full_props
        if old.element is not node:
            payload = self.host.prepare_update(
                old.instance, node.type, old.props, props, work.root_container, host_context
            )
            if payload is not None:
                work.prop_updates.append((old.instance, payload, node.type, old.props, props))

        text_content = bool(self.host.should_set_text_content(node.type, props))
        if old.text_content and not text_content:
            work.reset_text.append(old.instance)

        children: List[Fiber] = []
        if not text_content:
            child_context = self.host.get_child_host_context(
                host_context, node.type, work.root_container
            )
            previous = [] if old.text_content else old.children
            children = self._reconcile_children(
                previous, node.children, child_context, work, depth + 1
            )

        fiber = Fiber(
            kind=FiberKind.HOST,
            type=node.type,
            key=node.key,
            element=node,
            props=props,
            instance=old.instance,
            children=children,
            ref=node.ref,
            text_content=text_content,
            committed_children=old.committed_children,
        )
        work.parents.append(fiber)

        if old.ref is not node.ref:
            if old.ref is not None:
                work.detached_refs.append(old.ref)
            if node.ref is not None:
                work.attached_refs.append(fiber)
        return fiber

    def _render_component(
        self, node: Element, old_children: List[Fiber], host_context: Any,
        work: _Work, depth: int
    ) -> List[Fiber]:
        rendered = node.type(node.full_props)
        return self._reconcile_children(old_children, rendered, host_context, work, depth + 1)

    # Commit phase

    def _commit(self, container: Container, new_children: List[Fiber], work: _Work) -> None:
        host = self.host
        info = container.container_info
        metrics = work.metrics

        host.prepare_for_commit(info)

        for fiber in work.deletions:
            for ref in fiber.iter_refs():
                ref(None)
                metrics.refs_detached += 1
        for ref in work.detached_refs:
            ref(None)
            metrics.refs_detached += 1

        for text_instance, old_text, new_text in work.text_updates:
            host.commit_text_update(text_instance, old_text, new_text)
            metrics.text_updates_committed += 1
        for instance in work.reset_text:
            host.reset_text_content(instance)
        for instance, payload, type_, old_props, new_props in work.prop_updates:
            host.commit_update(instance, payload, type_, old_props, new_props)
            metrics.updates_committed += 1

        for fiber in work.parents:
            self._sync_children(
                fiber.instance, fiber.committed_children, host_nodes(fiber.children),
                metrics, to_container=False,
            )
        self._sync_children(
            info, container.committed_children, host_nodes(new_children),
            metrics, to_container=True,
        )
        container.children = new_children

        host.reset_after_commit(info)

        for fiber in work.mounts:
            host.commit_mount(fiber.instance, fiber.type, fiber.props)
        for fiber in work.attached_refs:
            fiber.ref(host.get_public_instance(fiber.instance))
            metrics.refs_attached += 1

        if self.config.engine.verify_after_commit:
            verify_tree(info)

    def _sync_children(
        self,
        parent: Any,
        committed: List[Any],
        desired: List[Any],
        metrics: CommitMetrics,
        to_container: bool
    ) -> None:
        """Bring ``parent``'s children from ``committed`` order to ``desired`` order.

        Children whose relative order survives stay put; every other child is
        placed before the next child that stays put, or appended.
        """
        host = self.host
        if to_container:
            remove = host.remove_child_from_container
            append = host.append_child_to_container
            insert = host.insert_in_container_before
        else:
            remove = host.remove_child
            append = host.append_child
            insert = host.insert_before

        desired_ids = {id(node) for node in desired}
        kept: List[Any] = []
        for node in committed:
            if id(node) in desired_ids:
                kept.append(node)
            else:
                remove(parent, node)
                metrics.removals += 1

        old_index = {id(node): index for index, node in enumerate(kept)}
        stable: Set[int] = set()
        last_placed = -1
        for node in desired:
            index = old_index.get(id(node))
            if index is not None and index > last_placed:
                stable.add(id(node))
                last_placed = index

        placements: List[Tuple[Any, Any]] = []
        anchor = None
        for node in reversed(desired):
            if id(node) in stable:
                anchor = node
            else:
                placements.append((node, anchor))

        for node, before in reversed(placements):
            if before is None:
                append(parent, node)
            else:
                insert(parent, node, before)
            metrics.placements += 1

        committed[:] = desired
