"""Dependency graph store and lazy resolution cursor.

All public names are re-exported here so callers can write
``from solvent.core.dependency import DependencyGraph``.

Submodules:
    registry -- NodeRegistry (node values <-> stable integer positions)
    graph    -- DependencyGraph (nodes, edges, satisfied set) and Resolution
    cursor   -- DependencyCursor (depth-first resolution with cycle detection)
"""

from solvent.core.dependency.cursor import DependencyCursor
from solvent.core.dependency.graph import DependencyGraph, Resolution
from solvent.core.dependency.registry import NodeRegistry

__all__ = [
    "DependencyCursor",
    "DependencyGraph",
    "NodeRegistry",
    "Resolution",
]
