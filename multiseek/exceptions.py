from __future__ import annotations

import typing as T


class MultiSeekError(Exception):
    exit_code: int = 1


class MultiSeekConfigurationError(MultiSeekError, ValueError):
    exit_code = 2


class MultiSeekInvalidArgumentError(MultiSeekError, ValueError):
    exit_code = 2


class MultiSeekClosedError(MultiSeekError, ValueError):
    """
    Raised when the stream was closed, or failed and can no longer be used
    """

    exit_code = 6


class MultiSeekSourceError(MultiSeekError, OSError):
    exit_code = 5

    def __init__(
        self,
        index: int,
        operation: str,
        cause: BaseException,
        bytes_read: int = 0,
    ) -> None:
        super().__init__(
            f"Failed to {operation} source #{index} (0-based): {cause.__class__.__name__}: {cause}"
        )
        self.index = index
        self.operation = operation
        self.cause = cause
        # bytes copied into the caller's buffer before the failure
        self.bytes_read = bytes_read


class MultiSeekCloseError(MultiSeekError, OSError):
    exit_code = 5

    def __init__(self, errors: T.Sequence[MultiSeekSourceError]) -> None:
        super().__init__(
            f"Failed to close {len(errors)} source(s): "
            + "; ".join(str(err) for err in errors)
        )
        self.errors = list(errors)
