"""Commit metrics for the headless renderer.

This module defines the result object the reconciler fills in for every
commit, so callers and tests can see how much work a render actually did.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CommitMetrics:
    """Counters for a single commit of the instance tree."""

    instances_created: int = 0
    text_instances_created: int = 0
    updates_committed: int = 0
    text_updates_committed: int = 0
    placements: int = 0
    removals: int = 0
    refs_attached: int = 0
    refs_detached: int = 0
    processing_time_ms: float = 0.0
    timestamp: float = field(default_factory=time.time)

    @property
    def total_mutations(self) -> int:
        """Number of host operations that changed the instance tree."""
        return (
            self.updates_committed
            + self.text_updates_committed
            + self.placements
            + self.removals
        )

    @property
    def nodes_created(self) -> int:
        """Number of element and text instances created."""
        return self.instances_created + self.text_instances_created

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a plain dictionary suitable for log ``extra``."""
        return {
            "instances_created": self.instances_created,
            "text_instances_created": self.text_instances_created,
            "updates_committed": self.updates_committed,
            "text_updates_committed": self.text_updates_committed,
            "placements": self.placements,
            "removals": self.removals,
            "refs_attached": self.refs_attached,
            "refs_detached": self.refs_detached,
            "total_mutations": self.total_mutations,
            "processing_time_ms": self.processing_time_ms,
        }
