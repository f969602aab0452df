"""Lazy, resumable traversal of the dependencies of one target node.

A ``DependencyCursor`` yields the unsatisfied transitive dependencies of its
target one at a time, each after everything it depends on, finishing with
the target itself. Resolution is depth-first: each ``next()`` call follows
the first unsatisfied dependency (in registration order) of the node on top
of an explicit stack until it reaches a node whose dependencies are all
satisfied, and yields that node.

Cycle detection is structural. A dependency that is already on the stack
closes a cycle; the cursor raises ``CycleDetectedError`` once and is
exhausted from then on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from solvent.exceptions import CycleDetectedError

if TYPE_CHECKING:
    from solvent.core.dependency.graph import DependencyGraph

logger = logging.getLogger(__name__)


class DependencyCursor:
    """Iterator over the resolution order of one target node.

    The cursor snapshots the graph's satisfied set when it is created and
    extends only its private copy as it yields, so it never observes other
    cursors' progress. With ``commit=True`` every yielded node is also added
    to the graph's durable satisfied set.

    The dependency relation itself is read live from the graph; registering
    new edges while a cursor is in use is undefined behaviour.

    Args:
        graph: The graph to traverse.
        target: Registry position of the target node.
        commit: Whether to mark yielded nodes satisfied on *graph*.
    """

    def __init__(
        self, graph: DependencyGraph, target: int, commit: bool = False
    ) -> None:
        self._graph = graph
        self._target = target
        self._commit = commit
        self._satisfied: set[int] = graph._snapshot_satisfied()
        self._stack: list[tuple[int, Iterator[int]]] = []
        self._on_stack: set[int] = set()
        self._halted = False

    def __iter__(self) -> DependencyCursor:
        return self

    def __next__(self) -> Any:
        if self.exhausted:
            raise StopIteration

        if not self._stack:
            self._push(self._target)

        while True:
            index, pending = self._stack[-1]
            for dep in pending:
                if dep not in self._satisfied:
                    break
            else:
                return self._resolve_top()

            if dep in self._on_stack:
                raise self._halt(dep)
            logger.debug("Descending into %r", self._graph._value(dep))
            self._push(dep)

    @property
    def target(self) -> Any:
        """The node whose dependencies this cursor resolves."""
        return self._graph._value(self._target)

    @property
    def exhausted(self) -> bool:
        """True once the cursor has nothing more to yield."""
        return self._halted or self._target in self._satisfied

    @property
    def path(self) -> list[Any]:
        """Nodes on the current resolution path, target first."""
        return [self._graph._value(index) for index, _ in self._stack]

    def _push(self, index: int) -> None:
        # Parents resume their iterator on the next call: every dependency
        # already passed over is satisfied, and the satisfied set only grows.
        self._stack.append((index, iter(self._graph._dependency_indices(index))))
        self._on_stack.add(index)

    def _resolve_top(self) -> Any:
        index, _ = self._stack.pop()
        self._on_stack.discard(index)
        self._satisfied.add(index)
        node = self._graph._value(index)
        if self._commit:
            self._graph._satisfy(index)
        logger.debug("Resolved %r", node)
        return node

    def _halt(self, closing: int) -> CycleDetectedError:
        path = self.path + [self._graph._value(closing)]
        self._halted = True
        self._stack.clear()
        self._on_stack.clear()
        node = self._graph._value(closing)
        logger.warning("Dependency cycle detected at %r: %r", node, path)
        return CycleDetectedError(node, path)
