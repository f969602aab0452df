"""Tests for the Rich dependency tree and resolution summary helpers."""

from __future__ import annotations

import pytest
from rich.console import Console

from solvent.core.dependency import DependencyGraph, Resolution
from solvent.exceptions import NoSuchNodeError
from solvent.output import (
    dependency_tree,
    print_dependency_tree,
    print_resolution,
)


@pytest.fixture
def console() -> Console:
    """A recording console wide enough to avoid wrapping."""
    return Console(record=True, width=120, color_system=None)


class TestDependencyTree:
    """Tests for ``dependency_tree`` and ``print_dependency_tree``."""

    def test_tree_lists_dependencies(
        self, branching_graph: DependencyGraph, console: Console
    ) -> None:
        """Every node of the closure appears in the rendered tree."""
        print_dependency_tree(branching_graph, "i", console=console)
        text = console.export_text()
        for node in "ijklmn":
            assert node in text

    def test_repeated_node_not_expanded(
        self, branching_graph: DependencyGraph, console: Console
    ) -> None:
        """A node reached twice is shown once in full, then marked repeated."""
        print_dependency_tree(branching_graph, "a", console=console)
        text = console.export_text()
        assert "d (repeated)" in text
        assert "m (repeated)" in text
        assert text.count("n") == 1

    def test_satisfied_nodes_marked(
        self, branching_graph: DependencyGraph, console: Console
    ) -> None:
        """Satisfied nodes are labelled and their dependencies hidden."""
        branching_graph.mark_satisfied(["k"])
        print_dependency_tree(branching_graph, "i", console=console)
        text = console.export_text()
        assert "k (satisfied)" in text
        assert "l" not in text

    def test_cycle_marked(self, console: Console) -> None:
        """An edge back onto the current branch is labelled as a cycle."""
        g = DependencyGraph()
        g.register_dependency("a", "b")
        g.register_dependency("b", "a")
        print_dependency_tree(g, "a", console=console)
        assert "a (cycle)" in console.export_text()

    def test_tree_label_is_target(self, branching_graph: DependencyGraph) -> None:
        """The tree root is labelled with the target."""
        tree = dependency_tree(branching_graph, "m")
        assert str(tree.label) == "m"
        assert len(tree.children) == 1

    def test_satisfied_root_is_leaf(self, branching_graph: DependencyGraph) -> None:
        """A satisfied target renders as a single labelled leaf."""
        branching_graph.mark_satisfied(["i"])
        tree = dependency_tree(branching_graph, "i")
        assert str(tree.label) == "i (satisfied)"
        assert tree.children == []

    def test_wide_graph_shows_each_node_once(self) -> None:
        """A fan-in graph expands every shared node only once."""
        g = DependencyGraph()
        width = 2000
        for i in range(width):
            g.register_dependencies("root", [f"mid{i}"])
            g.register_dependency(f"mid{i}", "shared")
        tree = dependency_tree(g, "root")
        assert len(tree.children) == width
        assert str(tree.children[0].children[0].label) == "shared"
        assert str(tree.children[1].children[0].label) == "shared (repeated)"

    def test_unknown_target(self) -> None:
        """Rendering an unknown target raises NoSuchNodeError."""
        with pytest.raises(NoSuchNodeError):
            dependency_tree(DependencyGraph(), "ghost")


class TestPrintResolution:
    """Tests for ``print_resolution``."""

    def test_success(self, branching_graph: DependencyGraph, console: Console) -> None:
        """A successful resolution shows the order."""
        print_resolution(branching_graph.resolve("k"), console=console)
        text = console.export_text()
        assert "Resolution successful" in text
        assert "n" in text and "k" in text

    def test_failure_shows_cycle(self, console: Console) -> None:
        """A failed resolution shows the cycle path."""
        print_resolution(
            Resolution(success=False, cycle=["a", "b", "a"]), console=console
        )
        text = console.export_text()
        assert "cycle detected" in text
        assert "a -> b -> a" in text
        assert "Nothing to resolve" in text
