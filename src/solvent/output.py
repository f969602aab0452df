"""Rich output helpers for inspecting dependency graphs and resolutions.

Provides a tree view of the dependency relation below a target and a
summary of a ``Resolution``. Node styles:
    pending = bold, satisfied = dim, repeated = dim italic, cycle = bold red
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from solvent.core.dependency import DependencyGraph, Resolution

_STATUS_STYLES: dict[str, str] = {
    "pending": "bold",
    "satisfied": "dim",
    "repeated": "dim italic",
    "cycle": "bold red",
}

console = Console()


def _resolve_console(override: Console | None) -> Console:
    """Return *override*, or the module console when it is None."""
    return override if override is not None else console


def _label(node: Any, status: str) -> Text:
    """Return the tree label for *node* with its status suffix."""
    label = Text(str(node), style=_STATUS_STYLES[status])
    if status != "pending":
        label.append(f" ({status})", style=_STATUS_STYLES[status])
    return label


def dependency_tree(graph: DependencyGraph, target: Any) -> Tree:
    """Build a Rich tree of the dependencies below *target*.

    Satisfied nodes are shown but not expanded, matching how traversals
    prune at them. A node already shown elsewhere in the tree is marked as
    repeated instead of being expanded again, and an edge leading back onto
    the current branch is marked as a cycle.

    Args:
        graph: The graph to render.
        target: Root node of the tree.

    Returns:
        A ``rich.tree.Tree`` ready to print.

    Raises:
        NoSuchNodeError: If *target* was never registered.
    """
    root_index = graph._index_of(target)
    if graph._is_index_satisfied(root_index):
        return Tree(_label(target, "satisfied"))

    root = Tree(_label(target, "pending"))
    shown: set[int] = {root_index}
    on_branch: set[int] = {root_index}
    stack = [(root, root_index, iter(graph._dependency_indices(root_index)))]
    while stack:
        tree, index, pending = stack[-1]
        dep = next(pending, None)
        if dep is None:
            stack.pop()
            on_branch.discard(index)
            continue

        node = graph._value(dep)
        if dep in on_branch:
            tree.add(_label(node, "cycle"))
        elif dep in shown:
            tree.add(_label(node, "repeated"))
        elif graph._is_index_satisfied(dep):
            shown.add(dep)
            tree.add(_label(node, "satisfied"))
        else:
            shown.add(dep)
            on_branch.add(dep)
            child = tree.add(_label(node, "pending"))
            stack.append((child, dep, iter(graph._dependency_indices(dep))))
    return root


def print_dependency_tree(
    graph: DependencyGraph, target: Any, console: Console | None = None
) -> None:
    """Print the dependency tree of *target*.

    Args:
        graph: The graph to render.
        target: Root node of the tree.
        console: Console to print to (default: module console).
    """
    out = _resolve_console(console)
    out.print(dependency_tree(graph, target))


def print_resolution(resolution: Resolution, console: Console | None = None) -> None:
    """Print the outcome of ``DependencyGraph.resolve``.

    Args:
        resolution: The resolution to summarize.
        console: Console to print to (default: module console).
    """
    out = _resolve_console(console)
    if resolution.success:
        out.print(
            Panel("[bold green]Resolution successful[/bold green]",
                  title="Dependency Resolution")
        )
    else:
        out.print(
            Panel("[bold red]Resolution failed: cycle detected[/bold red]",
                  title="Dependency Resolution")
        )
        chain = " -> ".join(str(node) for node in resolution.cycle)
        out.print(Text(f"  Cycle: {chain}", style="red"))

    if not resolution.order:
        out.print("[dim]Nothing to resolve.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")
    for position, node in enumerate(resolution.order, start=1):
        table.add_row(str(position), str(node))
    out.print(table)
