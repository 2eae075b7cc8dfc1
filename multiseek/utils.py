from __future__ import annotations

import hashlib
import io
import logging
import os
import typing as T
from pathlib import Path

from tqdm import tqdm

from . import constants, exceptions
from .stream import MultiSeekIO

LOG = logging.getLogger(__name__)


def get_app_name() -> str:
    return __name__.split(".")[0]


def configure_logger(logger: logging.Logger, level, stream=None) -> None:
    """Configure the given logger."""
    formatter = logging.Formatter("%(asctime)s - %(levelname)-6s - %(message)s")
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def log_exception(ex: Exception) -> None:
    if LOG.isEnabledFor(logging.DEBUG):
        exc_info = ex
    else:
        exc_info = None

    exc_name = ex.__class__.__name__

    if isinstance(ex, exceptions.MultiSeekCloseError):
        for err in ex.errors:
            LOG.error(f"{exc_name}: {err}", exc_info=exc_info)
    else:
        LOG.error(f"{exc_name}: {ex}", exc_info=exc_info)


def open_sources(paths: T.Sequence[os.PathLike | str]) -> list[T.BinaryIO]:
    """
    Open the files in binary mode, in order.
    If any of them fails to open, the ones already opened are closed.
    """
    fps: list[T.BinaryIO] = []
    for idx, path in enumerate(paths):
        try:
            fps.append(open(path, "rb"))
        except OSError as ex:
            for fp in fps:
                fp.close()
            raise exceptions.MultiSeekSourceError(idx, f"open {path} as", ex) from ex
    return fps


def open_concatenated(paths: T.Sequence[os.PathLike | str]) -> MultiSeekIO:
    fps = open_sources(paths)
    try:
        return MultiSeekIO(fps)
    except exceptions.MultiSeekError:
        for fp in fps:
            fp.close()
        raise


# Use "hashlib._Hash" instead of hashlib._Hash because:
# AttributeError: module 'hashlib' has no attribute '_Hash'
def md5sum_fp(
    fp: T.IO[bytes],
    md5: "hashlib._Hash | None" = None,
    chunk_size: int = constants.CHUNK_SIZE,
) -> "hashlib._Hash":
    if md5 is None:
        md5 = hashlib.md5()
    while True:
        buf = fp.read(chunk_size)
        if not buf:
            break
        md5.update(buf)
    return md5


def remaining_size(fp: T.IO[bytes]) -> int | None:
    """
    Number of bytes from the current position to the end,
    or None if fp is not seekable. The position is left unchanged.
    """
    if not fp.seekable():
        return None
    begin = fp.tell()
    end = fp.seek(0, io.SEEK_END)
    fp.seek(begin, io.SEEK_SET)
    return max(0, end - begin)


def copy_range(
    src: T.IO[bytes],
    dst: T.IO[bytes],
    length: int | None = None,
    chunk_size: int = constants.CHUNK_SIZE,
    desc: str | None = None,
) -> int:
    """
    Copy up to length bytes (all if None) from the current position of src to dst.
    Return the number of bytes copied.
    """
    total = remaining_size(src) if length is None else length

    copied = 0
    with tqdm(
        total=total,
        desc=desc,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        disable=constants.PROGRESS_DISABLED or LOG.isEnabledFor(logging.DEBUG),
    ) as pbar:
        while length is None or copied < length:
            n = chunk_size if length is None else min(chunk_size, length - copied)
            buf = src.read(n)
            if not buf:
                break
            dst.write(buf)
            copied += len(buf)
            pbar.update(len(buf))

    return copied


def describe_sources(
    paths: T.Sequence[Path], stream: MultiSeekIO
) -> list[dict[str, T.Any]]:
    return [
        {
            "index": idx,
            "path": str(path),
            "start": start,
            "end": end,
            "size": end - start + 1,
        }
        for idx, (path, (start, end)) in enumerate(zip(paths, stream.boundaries))
    ]
