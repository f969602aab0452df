"""Dependency graph store: nodes, dependency edges, and the satisfied set.

Implements the store half of the engine. The graph owns:

- the node registry (caller values <-> stable integer positions),
- the dependency relation, node -> insertion-ordered set of nodes it
  depends on,
- the durable satisfied set, changed only by ``mark_satisfied`` or by a
  committing cursor.

Traversal logic lives in :mod:`solvent.core.dependency.cursor`; the graph
only hands out cursors bound to a target.

Thread safety: This class is NOT thread-safe. Writers and cursor creation
must be serialized externally for concurrent access.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from solvent.core.dependency.cursor import DependencyCursor
from solvent.core.dependency.registry import NodeRegistry
from solvent.exceptions import CycleDetectedError, NoSuchNodeError

logger = logging.getLogger(__name__)


def _reject_bare_string(values: Iterable[Any], name: str) -> None:
    if isinstance(values, (str, bytes)):
        raise TypeError(
            f"{name} must be an iterable of nodes, not {type(values).__name__}; "
            f"wrap a single node in a list"
        )


# ---------------------------------------------------------------------------
# Resolution: The output of eager resolution
# ---------------------------------------------------------------------------


@dataclass
class Resolution:
    """Result of draining a cursor for one target.

    Attributes:
        success: True if the traversal finished without a cycle.
        order: Nodes in the order they were yielded. On failure, the nodes
            yielded before the cycle was found.
        cycle: The path that closed a cycle, target first and ending with
            the repeated node. Empty if resolution succeeded.
    """

    success: bool
    order: list[Any] = field(default_factory=list)
    cycle: list[Any] = field(default_factory=list)


# ---------------------------------------------------------------------------
# DependencyGraph: The store
# ---------------------------------------------------------------------------


class DependencyGraph:
    """A monotonically growing dependency graph with a satisfied set.

    Nodes are arbitrary caller values compared by equality. They are
    registered explicitly with ``register_node`` or implicitly when first
    mentioned by an edge. A registered node without dependencies is a leaf.

    Dependencies of a node form a set (duplicate edges collapse) that is
    iterated in registration order, so identical registration sequences
    always produce identical traversals.

    Example::

        graph = DependencyGraph()
        graph.register_dependencies("a", ["b", "c", "d"])
        graph.register_dependency("b", "d")
        graph.register_dependencies("c", ["e"])
        list(graph.dependencies_of("a"))  # ['d', 'b', 'e', 'c', 'a']
    """

    def __init__(self) -> None:
        self._registry = NodeRegistry()
        self._dependencies: dict[int, dict[int, None]] = {}
        self._satisfied: set[int] = set()

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, node: object) -> bool:
        return node in self._registry

    # -- Registration -------------------------------------------------------

    def register_node(self, node: Any) -> None:
        """Register *node* if no equal node is registered yet."""
        self._registry.register(node)

    def register_dependency(self, node: Any, depends_on: Any) -> None:
        """Record that *node* depends on *depends_on*.

        Neither node needs to exist beforehand. Registering an edge that
        already exists is a no-op. Cycles are accepted here and only reported
        when a traversal runs into them.

        Args:
            node: The dependent node.
            depends_on: The node that must be resolved first.
        """
        self.register_dependencies(node, [depends_on])

    def register_dependencies(self, node: Any, depends_on: Iterable[Any]) -> None:
        """Record that *node* depends on every element of *depends_on*.

        Equivalent to calling ``register_dependency`` once per element. An
        empty *depends_on* still registers *node*.

        Args:
            node: The dependent node.
            depends_on: Nodes that must be resolved first.

        Raises:
            TypeError: If *depends_on* is a ``str`` or ``bytes``.
        """
        _reject_bare_string(depends_on, "depends_on")
        index = self._registry.register(node)
        for dep in depends_on:
            dep_index = self._registry.register(dep)
            deps = self._dependencies.setdefault(index, {})
            if dep_index not in deps:
                deps[dep_index] = None
                logger.debug("Registered dependency %r -> %r", node, dep)

    # -- Satisfied set ------------------------------------------------------

    def mark_satisfied(self, nodes: Iterable[Any]) -> None:
        """Add *nodes* to the durable satisfied set.

        Cursors created afterwards prune their walks at these nodes and never
        yield them. Cursors already in progress are unaffected.

        All nodes are checked before any is marked, so a failed call leaves
        the satisfied set unchanged.

        Args:
            nodes: Registered nodes to mark. A bare ``str`` or ``bytes`` is
                rejected rather than marked character by character.

        Raises:
            NoSuchNodeError: If any node was never registered.
            TypeError: If *nodes* is a ``str`` or ``bytes``.
        """
        _reject_bare_string(nodes, "nodes")
        indices = [self._index_of(node) for node in nodes]
        added = [
            index for index in dict.fromkeys(indices) if index not in self._satisfied
        ]
        self._satisfied.update(added)
        if added:
            logger.info(
                "Marked %d node(s) satisfied: %r",
                len(added),
                [self._value(index) for index in added],
            )

    def is_satisfied(self, node: Any) -> bool:
        """Return whether *node* is in the durable satisfied set.

        Raises:
            NoSuchNodeError: If *node* was never registered.
        """
        return self._index_of(node) in self._satisfied

    @property
    def satisfied(self) -> tuple[Any, ...]:
        """Durably satisfied nodes, in registration order."""
        return tuple(self._value(index) for index in sorted(self._satisfied))

    # -- Traversal ----------------------------------------------------------

    def dependencies_of(self, target: Any) -> DependencyCursor:
        """Return a cursor over the resolution order of *target*.

        The cursor takes a snapshot of the satisfied set now; later calls to
        ``mark_satisfied`` do not affect it.

        Raises:
            NoSuchNodeError: If *target* was never registered.
        """
        cursor = DependencyCursor(self, self._index_of(target))
        logger.debug("Created cursor for %r", target)
        return cursor

    def satisfying_dependencies_of(self, target: Any) -> DependencyCursor:
        """Like ``dependencies_of``, but commit each yielded node.

        Every node the cursor yields is added to this graph's durable
        satisfied set at the moment it is yielded.

        Raises:
            NoSuchNodeError: If *target* was never registered.
        """
        cursor = DependencyCursor(self, self._index_of(target), commit=True)
        logger.debug("Created committing cursor for %r", target)
        return cursor

    def resolve(self, target: Any, commit: bool = False) -> Resolution:
        """Drain a cursor for *target* and report the outcome.

        A cycle is reported through the returned ``Resolution`` rather than
        raised.

        Args:
            target: The node to resolve.
            commit: Whether to mark each yielded node durably satisfied.

        Returns:
            A ``Resolution``. If ``success`` is True, ``order`` holds the full
            resolution order. If False, ``cycle`` holds the offending path.

        Raises:
            NoSuchNodeError: If *target* was never registered.
        """
        cursor = DependencyCursor(self, self._index_of(target), commit=commit)
        order: list[Any] = []
        try:
            for node in cursor:
                order.append(node)
        except CycleDetectedError as exc:
            return Resolution(success=False, order=order, cycle=exc.path)
        return Resolution(success=True, order=order)

    # -- Introspection ------------------------------------------------------

    @property
    def nodes(self) -> tuple[Any, ...]:
        """All registered nodes, in registration order."""
        return tuple(self._registry)

    @property
    def edge_count(self) -> int:
        """Total number of distinct dependency edges."""
        return sum(len(deps) for deps in self._dependencies.values())

    def direct_dependencies(self, node: Any) -> tuple[Any, ...]:
        """Return the nodes *node* directly depends on, in registration order.

        Raises:
            NoSuchNodeError: If *node* was never registered.
        """
        index = self._index_of(node)
        return tuple(self._value(dep) for dep in self._dependency_indices(index))

    def dependency_relation(self) -> list[tuple[Any, tuple[Any, ...]]]:
        """Return every node that has dependencies, paired with them.

        Entries follow the registration order of the dependent node; leaves
        are omitted.
        """
        return [
            (self._value(index), tuple(self._value(dep) for dep in deps))
            for index, deps in sorted(self._dependencies.items())
        ]

    # -- Index helpers (shared with DependencyCursor and solvent.output) ----

    def _index_of(self, node: Any) -> int:
        index = self._registry.index_of(node)
        if index is None:
            raise NoSuchNodeError(node)
        return index

    def _value(self, index: int) -> Any:
        return self._registry.value_of(index)

    def _dependency_indices(self, index: int) -> tuple[int, ...]:
        return tuple(self._dependencies.get(index, ()))

    def _is_index_satisfied(self, index: int) -> bool:
        return index in self._satisfied

    def _snapshot_satisfied(self) -> set[int]:
        return set(self._satisfied)

    def _satisfy(self, index: int) -> None:
        self._satisfied.add(index)
