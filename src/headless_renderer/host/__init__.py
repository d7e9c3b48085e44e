"""Host operations for rendering into an in-memory instance tree.

Key Components:
    ElementInstance / TextInstance: The two instance variants
    ContainerInfo: Root record holding the top-level instances
    append_child / insert_before / remove_child: Ordered child mutations
    prepare_update / commit_update / commit_text_update: Property updates
    schedule_deferred_callback: Deferred work hook
    instance_to_element / container_to_elements: Round-trip serialization
    HostConfig: The complete hook set handed to the engine
    verify_tree: Structural invariant check of a rendered instance tree
"""

from .host_config import HostConfig, HostOperations
from .invariants import verify_tree
from .instances import (
    CONTAINER_TAG,
    ContainerInfo,
    ElementInstance,
    Instance,
    TextInstance,
    create_instance,
    create_text_instance,
    get_public_instance,
    props_without_children,
)
from .mutation import append_child, insert_before, remove_child
from .scheduling import DEADLINE, Deadline, schedule_deferred_callback
from .serialization import container_to_elements, instance_to_element, to_list
from .updates import (
    always_false,
    commit_text_update,
    commit_update,
    noop,
    prepare_update,
)

__all__ = [
    "HostConfig",
    "HostOperations",
    "CONTAINER_TAG",
    "ContainerInfo",
    "ElementInstance",
    "Instance",
    "TextInstance",
    "create_instance",
    "create_text_instance",
    "get_public_instance",
    "props_without_children",
    "append_child",
    "insert_before",
    "remove_child",
    "DEADLINE",
    "Deadline",
    "schedule_deferred_callback",
    "container_to_elements",
    "instance_to_element",
    "to_list",
    "verify_tree",
    "always_false",
    "commit_text_update",
    "commit_update",
    "noop",
    "prepare_update",
]
