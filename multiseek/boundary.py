from __future__ import annotations

import bisect
import typing as T

from .types import Boundary


class BoundaryTable:
    """
    Maps each source to the range of logical offsets it occupies.

    Ranges are contiguous and inclusive: the first source starts at 0 and
    every other source starts right after the previous one ends. A source of
    size 0 ends one byte before it starts, so it never contains a position.

    >>> table = BoundaryTable([5, 3, 4])
    >>> table.total_size
    12
    >>> table.resolve(5)
    1
    >>> table.resolve(12) is None
    True
    """

    __slots__ = ("_starts", "_ends")

    _starts: T.List[int]
    _ends: T.List[int]

    def __init__(self, sizes: T.Iterable[int]) -> None:
        self._starts = []
        self._ends = []
        start = 0
        for size in sizes:
            if size < 0:
                raise ValueError(f"negative source size {size}")
            self._starts.append(start)
            self._ends.append(start + size - 1)
            start = start + size

    def __len__(self) -> int:
        return len(self._starts)

    def __repr__(self) -> str:
        return f"BoundaryTable({list(self)})"

    def __iter__(self) -> T.Iterator[Boundary]:
        return iter(zip(self._starts, self._ends))

    @property
    def total_size(self) -> int:
        if not self._ends:
            return 0
        return self._ends[-1] + 1

    def start(self, index: int) -> int:
        return self._starts[index]

    def end(self, index: int) -> int:
        return self._ends[index]

    def size(self, index: int) -> int:
        return self._ends[index] - self._starts[index] + 1

    def resolve(self, position: int) -> int | None:
        """
        Return the index of the source holding the logical position,
        or None if no source holds it
        """
        if position < 0 or self.total_size <= position:
            return None

        # zero-sized sources share their start with the next source,
        # bisect_right skips over them to the last source starting at or before position
        index = bisect.bisect_right(self._starts, position) - 1
        assert self._starts[index] <= position <= self._ends[index], (
            f"position {position} not in source #{index} {self._starts[index]}-{self._ends[index]}"
        )
        return index

    def locate(self, position: int) -> T.Tuple[int, int]:
        """
        Return (source index, local offset) of the logical position
        """
        index = self.resolve(position)
        if index is None:
            raise ValueError(
                f"position {position} out of range [0, {self.total_size})"
            )
        return index, position - self._starts[index]
