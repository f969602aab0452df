"""Shared fixtures for solvent tests."""

import pytest

from solvent.core.dependency import DependencyGraph


@pytest.fixture
def branching_graph() -> DependencyGraph:
    """Build the a..n branching graph used across traversal tests.

    a -> b, c, d      e -> f      i -> j, k
    b -> d            g -> h      k -> l, m
    c -> e, m, g      h -> i      m -> n
    """
    graph = DependencyGraph()
    graph.register_dependencies("a", ["b", "c", "d"])
    graph.register_dependency("b", "d")
    graph.register_dependencies("c", ["e", "m", "g"])
    graph.register_dependency("e", "f")
    graph.register_dependency("g", "h")
    graph.register_dependency("h", "i")
    graph.register_dependencies("i", ["j", "k"])
    graph.register_dependencies("k", ["l", "m"])
    graph.register_dependency("m", "n")
    return graph


@pytest.fixture
def provisioning_graph() -> DependencyGraph:
    """Build a database provisioning graph rooted at ``appconn``.

    ``superconn`` is only reachable through ``owneruser`` and ``appuser``.
    """
    graph = DependencyGraph()
    graph.register_dependencies("superconn", [])
    graph.register_dependencies("owneruser", ["superconn"])
    graph.register_dependencies("appuser", ["superconn"])
    graph.register_dependencies("database", ["owneruser"])
    graph.register_dependencies("ownerconn", ["database", "owneruser"])
    graph.register_dependencies("adminconn", ["database"])
    graph.register_dependencies("extensions", ["database", "adminconn"])
    graph.register_dependencies("schema_table", ["database", "ownerconn"])
    graph.register_dependencies(
        "schemas", ["ownerconn", "extensions", "schema_table", "appuser"]
    )
    graph.register_dependencies("appconn", ["database", "appuser", "schemas"])
    return graph
