"""Index-keyed annotation tables.

Turns, checkpoint times and street names are all sequences of rows keyed
by a path vertex index. :class:`IndexedTable` holds such rows sorted by
index and answers the lookups the route needs with binary search:

* :meth:`IndexedTable.upper_bound` - first row strictly after a vertex;
* :meth:`IndexedTable.lower_bound` - first row at or after a vertex;
* :meth:`IndexedTable.interval_containing` - the row whose half-open
  interval ``[row.index, next_row.index)`` holds a vertex.

Altitudes (one per vertex) and traffic (one per edge) are plain lists;
:func:`check_per_vertex` and :func:`check_per_edge` validate their size.
"""

from __future__ import annotations

import bisect
import itertools
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

from pynavroute.exceptions import RouteInvariantError
from pynavroute.models._base import IndexedItem

ItemT = TypeVar("ItemT", bound=IndexedItem)


class IndexedTable(Generic[ItemT]):
    """Rows sorted by vertex index."""

    def __init__(self, items: Iterable[ItemT] = (), *, name: str = "table") -> None:
        self._name = name
        self._items: list[ItemT] = list(items)
        self._indices: list[int] = [item.index for item in self._items]

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[ItemT]:
        return iter(self._items)

    def __getitem__(self, pos: int) -> ItemT:
        return self._items[pos]

    def __repr__(self) -> str:
        return f"IndexedTable(name={self._name!r}, rows={len(self._items)})"

    @property
    def items(self) -> Sequence[ItemT]:
        return tuple(self._items)

    @property
    def indices(self) -> Sequence[int]:
        return tuple(self._indices)

    def first(self) -> ItemT | None:
        return self._items[0] if self._items else None

    def last(self) -> ItemT | None:
        return self._items[-1] if self._items else None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def upper_bound(self, index: int) -> int:
        """Position of the first row with ``row.index > index``."""
        return bisect.bisect_right(self._indices, index)

    def lower_bound(self, index: int) -> int:
        """Position of the first row with ``row.index >= index``."""
        return bisect.bisect_left(self._indices, index)

    def find(self, index: int) -> ItemT | None:
        """Row located exactly at vertex *index*."""
        pos = self.lower_bound(index)
        if pos < len(self._items) and self._indices[pos] == index:
            return self._items[pos]
        return None

    def interval_containing(self, index: int) -> int | None:
        """Position of the row covering vertex *index*.

        The last row covers everything after it. ``None`` when *index*
        lies before the first row.
        """
        pos = self.upper_bound(index) - 1
        return pos if pos >= 0 else None

    def last_at_or_before(self, index: int) -> ItemT | None:
        pos = self.interval_containing(index)
        return self._items[pos] if pos is not None else None

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def is_sorted(self, *, strict: bool = True) -> bool:
        if strict:
            return all(a < b for a, b in itertools.pairwise(self._indices))
        return all(a <= b for a, b in itertools.pairwise(self._indices))

    def check(self, vertex_count: int, *, required: bool = False, strict: bool = True) -> None:
        """Validate order and range against a path with *vertex_count* vertices.

        Raises
        ------
        RouteInvariantError
            If the table is empty while *required*, unsorted, or holds an
            index outside ``[0, vertex_count)``.
        """
        if not self._items:
            if required and vertex_count > 0:
                raise RouteInvariantError(f"{self._name} table is empty on a non-empty path", table=self._name)
            return
        if not self.is_sorted(strict=strict):
            raise RouteInvariantError(f"{self._name} table is not sorted by index", table=self._name)
        if self._indices[-1] >= vertex_count:
            raise RouteInvariantError(
                f"{self._name} index {self._indices[-1]} out of range for {vertex_count} vertices",
                table=self._name,
            )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, item: ItemT) -> None:
        self._items.append(item)
        self._indices.append(item.index)

    def pop(self) -> ItemT:
        self._indices.pop()
        return self._items.pop()

    def extend_shifted(
        self,
        other: Iterable[ItemT],
        offset: int,
        *,
        updates: Callable[[ItemT], dict[str, Any]] | None = None,
    ) -> int:
        """Append rows of *other* moved *offset* vertices forward.

        Rows at vertex 0 of *other* are skipped: that vertex is the junction
        with this table's path.
        *updates* may return extra field values for each appended row.

        Returns the number of rows appended.
        """
        added = 0
        for item in other:
            if item.index == 0:
                continue
            extra = updates(item) if updates is not None else {}
            self.append(item.shifted(offset, **extra))
            added += 1
        return added


def check_per_vertex(values: Sequence[Any], vertex_count: int, *, name: str = "altitude") -> None:
    """Optional per-vertex array: empty or exactly one value per vertex."""
    if values and len(values) != vertex_count:
        raise RouteInvariantError(
            f"{name} array has {len(values)} values for {vertex_count} vertices",
            table=name,
        )


def check_per_edge(values: Sequence[Any], vertex_count: int, *, name: str = "traffic") -> None:
    """Optional per-edge array: empty or exactly one value per edge."""
    if values and len(values) + 1 != vertex_count:
        raise RouteInvariantError(
            f"{name} array has {len(values)} values for {max(vertex_count - 1, 0)} edges",
            table=name,
        )
