"""Host operation set handed to the reconciliation engine.

:class:`HostOperations` is the contract the engine drives; :class:`HostConfig`
implements it for the in-memory instance tree. Hooks that carry no behaviour
for a non-visual tree share one ``noop`` or one ``always_false``.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from headless_renderer.host import instances, mutation, scheduling, updates


@runtime_checkable
class HostOperations(Protocol):
    """Callbacks a reconciliation engine uses to build and update a host tree."""

    def create_instance(self, type_: str, props: Mapping[str, Any], *args: Any) -> Any:
        ...

    def create_text_instance(self, text: str, *args: Any) -> Any:
        ...

    def prepare_update(
        self, instance: Any, type_: str,
        old_props: Mapping[str, Any], new_props: Mapping[str, Any], *args: Any
    ) -> Optional[Dict[str, Any]]:
        ...

    def commit_update(self, instance: Any, payload: Dict[str, Any], *args: Any) -> None:
        ...

    def commit_text_update(self, text_instance: Any, old_text: str, new_text: str) -> None:
        ...

    def append_child(self, parent: Any, child: Any) -> None:
        ...

    def insert_before(self, parent: Any, child: Any, before_child: Any) -> None:
        ...

    def remove_child(self, parent: Any, child: Any) -> None:
        ...

    def schedule_deferred_callback(self, callback: scheduling.DeferredWork) -> Any:
        ...

    def get_public_instance(self, instance: Any) -> Any:
        ...


class HostConfig:
    """In-memory implementation of every host hook the engine may call."""

    # Instance model
    create_instance = staticmethod(instances.create_instance)
    create_text_instance = staticmethod(instances.create_text_instance)
    get_public_instance = staticmethod(instances.get_public_instance)

    # Property update pipeline
    prepare_update = staticmethod(updates.prepare_update)
    commit_update = staticmethod(updates.commit_update)
    commit_text_update = staticmethod(updates.commit_text_update)

    # Tree mutations, one algorithm for instance and container parents
    append_child = staticmethod(mutation.append_child)
    append_initial_child = staticmethod(mutation.append_child)
    append_child_to_container = staticmethod(mutation.append_child)
    insert_before = staticmethod(mutation.insert_before)
    insert_in_container_before = staticmethod(mutation.insert_before)
    remove_child = staticmethod(mutation.remove_child)
    remove_child_from_container = staticmethod(mutation.remove_child)

    # Scheduling
    schedule_deferred_callback = staticmethod(scheduling.schedule_deferred_callback)

    # Inert hooks
    get_root_host_context = staticmethod(updates.noop)
    get_child_host_context = staticmethod(updates.noop)
    finalize_initial_children = staticmethod(updates.always_false)
    commit_mount = staticmethod(updates.noop)
    prepare_for_commit = staticmethod(updates.noop)
    reset_after_commit = staticmethod(updates.noop)
    reset_text_content = staticmethod(updates.noop)
    should_set_text_content = staticmethod(updates.always_false)
    should_deprioritize_subtree = staticmethod(updates.always_false)

    @staticmethod
    def create_container_info() -> instances.ContainerInfo:
        """Create the empty root record a new container renders into."""
        return instances.ContainerInfo()
