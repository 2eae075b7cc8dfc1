from __future__ import annotations

import os

_ENV_PREFIX = "MULTISEEK_"

_FILESIZE_UNITS = {"B": 1, "K": 1024, "M": 1024 * 1024, "G": 1024 * 1024 * 1024}


def _yes_or_no(val: str) -> bool:
    return val.strip().upper() in ["1", "TRUE", "YES"]


def _parse_filesize(value: str) -> int | None:
    """
    Parse a byte count with an optional B, K, M or G suffix (case-insensitive).
    INF and INFINITY mean unlimited.

    >>> _parse_filesize("4096")
    4096
    >>> _parse_filesize("512b")
    512
    >>> _parse_filesize("64K")
    65536
    >>> _parse_filesize("inf") is None
    True
    >>> _parse_filesize("1T")
    Traceback (most recent call last):
    ValueError: Expect an integer optionally suffixed with B, K, M, G, but got 1T
    """
    value = value.strip().upper()

    if value in ["INF", "INFINITY"]:
        return None

    unit = _FILESIZE_UNITS.get(value[-1:], None)
    digits = value[:-1] if unit is not None else value
    try:
        return int(digits) * (unit or 1)
    except ValueError:
        raise ValueError(
            f"Expect an integer optionally suffixed with {', '.join(_FILESIZE_UNITS)}, but got {value}"
        ) from None


def _parse_chunk_size(value: str) -> int:
    """
    >>> _parse_chunk_size("1M")
    1048576
    >>> _parse_chunk_size("0")
    Traceback (most recent call last):
    ValueError: Expect a positive chunk size, but got 0
    """
    size = _parse_filesize(value)
    if size is None or size <= 0:
        raise ValueError(f"Expect a positive chunk size, but got {value}")
    return size


# Number of bytes requested per read when copying or hashing a stream
CHUNK_SIZE: int = _parse_chunk_size(os.getenv(_ENV_PREFIX + "CHUNK_SIZE", "1M"))
PROGRESS_DISABLED: bool = _yes_or_no(
    os.getenv(_ENV_PREFIX + "PROGRESS_DISABLED", "NO")
)
