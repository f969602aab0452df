"""Solvent exception hierarchy.

All public exceptions inherit from SolventError, giving callers a single
base class to catch when they want to handle any Solvent-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from typing import Any


class SolventError(Exception):
    """Base exception for all Solvent errors."""


class NoSuchNodeError(SolventError):
    """Raised when an operation references a node that was never registered.

    Covers marking unknown nodes satisfied, requesting the dependencies of
    an unknown target, and introspecting an unknown node.

    Attributes:
        node: The value that was looked up.
    """

    def __init__(self, node: Any) -> None:
        super().__init__(f"No such node: {node!r}")
        self.node = node


class ResolutionError(SolventError):
    """Raised when dependency resolution fails."""


class CycleDetectedError(ResolutionError):
    """Raised when a node is reached twice on one resolution path.

    Attributes:
        node: The node at which the cycle closed.
        path: Nodes from the traversal target down to, and including, the
            repeated node.
    """

    def __init__(self, node: Any, path: list[Any]) -> None:
        chain = " -> ".join(repr(n) for n in path)
        super().__init__(f"Cycle detected at {node!r}: {chain}")
        self.node = node
        self.path = path
