"""Error types and helpers shared by generated code and its callers."""

from __future__ import annotations


class NotFoundError(Exception):
    """Raised when a requested record does not exist."""

    def __init__(self, msg: str = "") -> None:
        super().__init__(msg)
        self.msg = msg


def is_not_found_error(err: BaseException | None) -> bool:
    """Return True if ``err`` or any exception in its cause chain is a NotFoundError.

    The chain is followed through ``__cause__``, as set by ``raise ... from ...``.
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, NotFoundError):
            return True
        seen.add(id(err))
        err = err.__cause__
    return False