"""Reconciliation engine for the headless renderer.

Key Components:
    Reconciler: Diffs element trees and drives the host operations
    Container: Engine handle for one render root
    Fiber: Private record linking a rendered element to its host instance
"""

from .fiber import Container, Fiber, FiberKind, PendingUpdate, host_nodes
from .reconciler import Reconciler

__all__ = [
    "Container",
    "Fiber",
    "FiberKind",
    "PendingUpdate",
    "host_nodes",
    "Reconciler",
]
