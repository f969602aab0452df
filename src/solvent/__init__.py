"""Solvent: incremental dependency-graph resolution with cycle detection."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
