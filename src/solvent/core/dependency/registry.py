"""Node registry: stable integer positions for caller-supplied node values.

The dependency relation and satisfied sets are stored as sets of integer
positions rather than of node values, so node values only need to support
equality. Hashable values are located through a dict; values that cannot be
hashed fall back to a linear equality scan.

Hashable values are assumed to honour the Python hash contract: values
that compare equal must hash equal. While every registered value is
hashable, a dict miss is final, so a type whose ``__hash__`` disagrees with
its ``__eq__`` (for example ``__hash__ = id`` with a value-based ``__eq__``)
registers equal values as separate nodes. Such types should set
``__hash__ = None`` so they take the equality-scan path.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator
from typing import Any

logger = logging.getLogger(__name__)


class NodeRegistry:
    """An insertion-ordered collection of distinct node values.

    Each value is assigned the next free position when first registered.
    Positions are never reused or reassigned for the lifetime of the
    registry.
    """

    def __init__(self) -> None:
        self._values: list[Any] = []
        self._index: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __contains__(self, value: object) -> bool:
        return self.index_of(value) is not None

    def register(self, value: Any) -> int:
        """Return the position of *value*, registering it if it is new.

        Args:
            value: The node value to register.

        Returns:
            The stable integer position assigned to *value*.
        """
        index = self.index_of(value)
        if index is not None:
            return index

        index = len(self._values)
        self._values.append(value)
        try:
            self._index[value] = index
        except TypeError:
            pass  # unhashable, found by index_of() through a scan
        logger.debug("Registered node %r at position %d", value, index)
        return index

    def index_of(self, value: object) -> int | None:
        """Return the position of *value*, or None if it was never registered."""
        try:
            index = self._index.get(value)  # type: ignore[call-overload]
        except TypeError:
            index = None
        else:
            if index is not None or len(self._index) == len(self._values):
                return index

        # Either value is unhashable or some registered values are.
        for position, candidate in enumerate(self._values):
            if candidate == value:
                return position
        return None

    def value_of(self, index: int) -> Any:
        """Return the node value registered at *index*."""
        return self._values[index]
