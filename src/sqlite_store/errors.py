"""
sqlite_store.errors

Exception types raised by the store.

Responsibilities:
- Separate filesystem/handle failures from statement failures.
- Carry the underlying engine error so callers can inspect it.
"""

from __future__ import annotations


class StoreError(Exception):
    pass


class IOFailure(StoreError):
    """
    Directory provisioning or handle open/close failed.
    """


class DriverFailure(StoreError):
    """
    Statement execution failed, or the store had no open handle.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class LifecycleError(StoreError):
    # init() twice, close() before init(), or any use of a closed store's lifecycle.
    pass


# --- Module Notes -----------------------------------------------------------
# The store never logs these; visibility is up to the caller (usually the ORM layer).
