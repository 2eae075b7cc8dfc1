from __future__ import annotations

import io
import typing as T


class ReadSeekCloser(T.Protocol):
    """
    What a source must provide to take part in a concatenated stream
    """

    def read(self, n: int = -1) -> bytes: ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int: ...

    def close(self) -> None: ...


# (start, end) of a source in the logical address space, end inclusive
Boundary = T.Tuple[int, int]
