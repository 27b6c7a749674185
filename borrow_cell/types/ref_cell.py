from __future__ import annotations
from borrow_cell.borrow_exception import BorrowException
from borrow_cell.errors import (
    BorrowStatus, borrow_released, exclusive_borrow_active, nothing_to_release,
    shared_borrows_active, format_str
    )
from dataclasses import dataclass
from dataclasses_json import dataclass_json
from enum import IntEnum
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

"""
/***************************************************************************************
 *
 * Borrow tracking
 *
 *   The gate counts the borrows handed out by a checked cell. Nothing here is
 *   synchronized: a cell shared between threads must be guarded as a whole by an
 *   external lock, since the read-modify-write of the flag is not atomic.
 *
 **************************************************************************************/
"""


class BorrowFlag(IntEnum):
    UNUSED = 0
    #READ >= 1
    WRITE = -1


class CellState(IntEnum):
    FREE = 0
    SHARED = 1
    EXCLUSIVE = 2
    INVALID = 3


@dataclass_json
@dataclass(frozen=True)
class BorrowState:
    shared_count: int = 0
    exclusive_held: bool = False
    valid: bool = True

    def __str__(self):
        return format_str(
            "shared borrows: {}, exclusive borrow: {}",
            self.shared_count,
            "yes" if self.exclusive_held else "no",
        )


class BorrowGate:
    def __init__(self):
        self.flag = BorrowFlag.UNUSED

    @property
    def shared_count(self) -> int:
        if self.flag > BorrowFlag.UNUSED:
            return int(self.flag)
        return 0

    @property
    def exclusive_held(self) -> bool:
        return self.flag == BorrowFlag.WRITE

    def state(self) -> CellState:
        if self.flag == BorrowFlag.WRITE:
            return CellState.EXCLUSIVE
        elif self.flag > BorrowFlag.UNUSED:
            return CellState.SHARED
        else:
            return CellState.FREE

    # Returns the status rejecting a shared borrow, or None if one may be taken.
    def check_borrow(self, operation: str) -> Optional[BorrowStatus]:
        if self.flag == BorrowFlag.WRITE:
            return exclusive_borrow_active(operation)
        return None

    # Returns the status rejecting an exclusive borrow, or None if one may be taken.
    def check_borrow_mut(self, operation: str) -> Optional[BorrowStatus]:
        if self.flag > BorrowFlag.UNUSED:
            return shared_borrows_active(operation, self.flag)
        if self.flag == BorrowFlag.WRITE:
            return exclusive_borrow_active(operation)
        return None

    # Each transition returns the status rejecting it, or None once applied. A
    # rejected transition leaves the flag untouched.
    def borrow(self) -> Optional[BorrowStatus]:
        status = self.check_borrow("borrow")
        if status is None:
            self.flag += 1
        return status

    def unborrow(self) -> Optional[BorrowStatus]:
        if self.flag <= BorrowFlag.UNUSED:
            return nothing_to_release("shared borrow")
        self.flag -= 1
        return None

    def borrow_mut(self) -> Optional[BorrowStatus]:
        status = self.check_borrow_mut("mutably borrow")
        if status is None:
            self.flag = BorrowFlag.WRITE
        return status

    def unborrow_mut(self) -> Optional[BorrowStatus]:
        if self.flag != BorrowFlag.WRITE:
            return nothing_to_release("exclusive borrow")
        self.flag = BorrowFlag.UNUSED
        return None


class SharedView:
    """Read-only view of an owned value.

    Holds the value captured at borrow time. When `reader` is given the view
    re-reads the owner on every `get` instead. A view handed out by a checked cell
    carries a `release_callback` that gives the borrow back to the cell's gate; the
    callback runs at most once no matter how often `release` is called.
    """

    def __init__(
        self,
        obj: Any,
        release_callback: Optional[Callable[[], None]] = None,
        reader: Optional[Callable[[], Any]] = None,
        strict_release: bool = False,
    ):
        self.v0 = obj
        self._release_callback = release_callback
        self._reader = reader
        self._strict_release = strict_release
        self.released = False

    @property
    def is_released(self) -> bool:
        return self.released

    def ensure_not_released(self, operation: str):
        if self.released:
            raise BorrowException(borrow_released(operation))

    def get(self) -> Any:
        self.ensure_not_released("read through")
        if self._reader is not None:
            self.v0 = self._reader()
        return self.v0

    def release(self):
        if self.released:
            if self._strict_release:
                raise BorrowException(borrow_released("release"))
            logger.warning(format_str("ignoring second release of {}", self))
            return
        self.released = True
        if self._release_callback is not None:
            self._release_callback()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self.released:
            self.release()

    def __repr__(self):
        return format_str("{}({!r}, released={})", type(self).__name__, self.v0, self.released)


class ExclusiveView(SharedView):
    """Read-write view of an owned value; `set` writes through to the owner."""

    def __init__(
        self,
        obj: Any,
        update_callback: Callable[[Any], None],
        release_callback: Optional[Callable[[], None]] = None,
        reader: Optional[Callable[[], Any]] = None,
        strict_release: bool = False,
    ):
        super().__init__(obj, release_callback, reader, strict_release)
        self._update_callback = update_callback

    def set(self, value: Any):
        self.ensure_not_released("write through")
        self._update_callback(value)
        self.v0 = value
