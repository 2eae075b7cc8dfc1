from __future__ import annotations

import io
import logging
import typing as T

from . import exceptions
from .boundary import BoundaryTable
from .types import Boundary, ReadSeekCloser

LOG = logging.getLogger(__name__)


class MultiSeekIO(io.RawIOBase):
    """
    Read-only seekable view over an ordered sequence of sources,
    as if they were concatenated into one stream.

    The stream owns the sources: they are closed by close() and only by close().
    Not safe for concurrent use without external locking.

    >>> s = MultiSeekIO([io.BytesIO(b"ABCDE"), io.BytesIO(b"FGH")])
    >>> s.seek(4)
    4
    >>> s.read(3)
    b'EFG'
    """

    # the sources in logical order
    _sources: T.List[ReadSeekCloser]
    # logical range of each source
    _table: BoundaryTable
    # index of the source the cursor addresses
    _idx: int
    # logical position of the cursor
    _position: int
    # set when a source failed to reposition, the cursor can not be trusted any more
    _failed: bool

    def __init__(self, sources: T.Sequence[ReadSeekCloser]) -> None:
        super().__init__()
        # the sources are not owned until the survey succeeds
        self._sources = []
        self._idx = 0
        self._position = 0
        self._failed = False

        if not sources:
            raise exceptions.MultiSeekConfigurationError(
                "At least one source is required"
            )

        sizes = []
        for idx, source in enumerate(sources):
            try:
                size = source.seek(0, io.SEEK_END)
            except Exception as ex:
                raise exceptions.MultiSeekSourceError(
                    idx, "seek to the end of", ex
                ) from ex
            try:
                source.seek(0, io.SEEK_SET)
            except Exception as ex:
                raise exceptions.MultiSeekSourceError(idx, "rewind", ex) from ex
            LOG.debug("Source #%d: %d bytes", idx, size)
            sizes.append(size)

        self._sources = list(sources)
        self._table = BoundaryTable(sizes)
        LOG.debug(
            "Concatenated %d sources into %d bytes",
            len(self._sources),
            self._table.total_size,
        )

    @property
    def size(self) -> int:
        return self._table.total_size

    @property
    def boundaries(self) -> T.Tuple[Boundary, ...]:
        return tuple(self._table)

    @property
    def current_index(self) -> int:
        return self._idx

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def _check_usable(self) -> None:
        if self.closed:
            raise exceptions.MultiSeekClosedError("I/O operation on closed stream")
        if self._failed:
            raise exceptions.MultiSeekClosedError(
                "I/O operation on failed stream, it must be closed"
            )

    def _remaining_in_current(self) -> int:
        return max(0, self._table.end(self._idx) + 1 - self._position)

    def _advance(self, bytes_read: int) -> bool:
        """
        Make the next source current and rewind it.
        Return False if the current source is the last one.
        """
        if len(self._sources) - 1 <= self._idx:
            return False

        next_idx = self._idx + 1
        try:
            self._sources[next_idx].seek(0, io.SEEK_SET)
        except Exception as ex:
            raise exceptions.MultiSeekSourceError(
                next_idx, "rewind", ex, bytes_read=bytes_read
            ) from ex

        LOG.debug(
            "Crossing from source #%d to #%d at position %d",
            self._idx,
            next_idx,
            self._position,
        )
        self._idx = next_idx
        return True

    def readinto(self, b) -> int:
        self._check_usable()

        view = memoryview(b).cast("B")
        total = 0
        while total < len(view):
            want = min(len(view) - total, self._remaining_in_current())
            data = b""
            if 0 < want:
                try:
                    data = self._sources[self._idx].read(want)
                except Exception as ex:
                    raise exceptions.MultiSeekSourceError(
                        self._idx, "read", ex, bytes_read=total
                    ) from ex

            if data:
                n = len(data)
                view[total : total + n] = data
                total += n
                self._position += n
            elif not self._advance(total):
                break

        return total

    def read_at(self, offset: int, size: int) -> bytes:
        """
        Read up to size bytes at the logical offset.
        The cursor is restored afterwards.
        """
        self._check_usable()
        if offset < 0:
            raise exceptions.MultiSeekInvalidArgumentError(
                f"negative read offset {offset}"
            )

        saved = self._position
        self.seek(offset, io.SEEK_SET)
        try:
            data = self.read(size)
        finally:
            if not self._failed:
                self.seek(saved, io.SEEK_SET)
        assert data is not None
        return data

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_usable()

        if whence == io.SEEK_CUR and offset == 0:
            return self._position

        if whence == io.SEEK_SET:
            candidate = offset
        elif whence == io.SEEK_CUR:
            candidate = self._position + offset
        elif whence == io.SEEK_END:
            if 0 < offset:
                raise exceptions.MultiSeekInvalidArgumentError(
                    f"offset must be <= 0 when seeking from the end, but got {offset}"
                )
            candidate = self._table.total_size + offset
        else:
            raise exceptions.MultiSeekInvalidArgumentError(
                f"invalid whence ({whence}, should be {io.SEEK_SET}, {io.SEEK_CUR} or {io.SEEK_END})"
            )

        idx = self._table.resolve(candidate)
        if idx is None:
            if whence == io.SEEK_END and candidate < 0:
                # seeking backward from the end past the beginning
                LOG.debug("Clamping position %d to the first source", candidate)
                idx = 0
                candidate = 0
            elif candidate < 0:
                raise exceptions.MultiSeekInvalidArgumentError(
                    f"negative seek position {candidate}"
                )
            else:
                LOG.debug("Clamping position %d to the last source", candidate)
                idx = len(self._sources) - 1
                candidate = self._table.total_size

        local_offset = candidate - self._table.start(idx)
        try:
            self._sources[idx].seek(local_offset, io.SEEK_SET)
        except Exception as ex:
            self._failed = True
            raise exceptions.MultiSeekSourceError(idx, "seek", ex) from ex

        self._idx = idx
        self._position = candidate
        return self._position

    def tell(self) -> int:
        return self.seek(0, io.SEEK_CUR)

    def close(self) -> None:
        if self.closed:
            return

        errors: T.List[exceptions.MultiSeekSourceError] = []
        for idx, source in enumerate(self._sources):
            try:
                source.close()
            except Exception as ex:
                LOG.warning("Failed to close source #%d: %s", idx, ex)
                err = exceptions.MultiSeekSourceError(idx, "close", ex)
                err.__cause__ = ex
                errors.append(err)

        super().close()

        if errors:
            raise exceptions.MultiSeekCloseError(errors)
