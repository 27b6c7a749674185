from __future__ import annotations
from borrow_cell.borrow_exception import BorrowException
from borrow_cell.config import CellOptions
from borrow_cell.errors import BorrowStatus, use_after_move, format_str
from borrow_cell.result import BorrowResult
from borrow_cell.types.ref_cell import (
    BorrowGate, BorrowState, CellState, ExclusiveView, SharedView
    )
from canoser.base import Base
from canoser.types import type_mapping
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


# A single-owner holder of a value. Moving the value out (`move_to`,
# `into_inner`) invalidates the cell for good; every later access fails with
# USE_AFTER_MOVE.
#
# Borrows from this cell are not counted: any number of shared and exclusive
# views may coexist. Use `OwnedCellChecked` for the many-readers-xor-one-writer
# discipline.
#
# Every fallible operation has a `try_` twin returning a `BorrowResult`; the plain
# method unwraps it and raises `BorrowException` on failure.
class OwnedCell:
    def __init__(self, obj: Any, options: Optional[CellOptions] = None):
        self.v0 = obj
        self.valid = True
        if options is None:
            options = CellOptions()
        self.options = options

    @property
    def is_valid(self) -> bool:
        return self.valid

    @property
    def state(self) -> CellState:
        if not self.valid:
            return CellState.INVALID
        return CellState.FREE

    def check_valid(self, operation: str) -> Optional[BorrowStatus]:
        if not self.valid:
            return use_after_move(operation)
        return None

    def try_get(self) -> BorrowResult:
        status = self.check_valid("read")
        if status is not None:
            return BorrowResult.err(status)
        return BorrowResult.ok(self.v0)

    def get(self) -> Any:
        return self.try_get().unwrap()

    def try_move_to(self) -> BorrowResult:
        status = self.check_valid("move")
        if status is not None:
            return BorrowResult.err(status)
        self.valid = False
        logger.debug(format_str("moved {!r} out of {}", self.v0, type(self).__name__))
        return BorrowResult.ok(type(self)(self.v0, self.options))

    def move_to(self) -> OwnedCell:
        return self.try_move_to().unwrap()

    def try_into_inner(self) -> BorrowResult:
        status = self.check_valid("take")
        if status is not None:
            return BorrowResult.err(status)
        self.valid = False
        return BorrowResult.ok(self.v0)

    def into_inner(self) -> Any:
        return self.try_into_inner().unwrap()

    def try_borrow(self) -> BorrowResult:
        status = self.check_valid("borrow")
        if status is not None:
            return BorrowResult.err(status)
        return BorrowResult.ok(SharedView(
            self.v0,
            reader=self._reader(),
            strict_release=self.options.strict_release,
        ))

    def borrow(self) -> SharedView:
        return self.try_borrow().unwrap()

    def try_borrow_mut(self) -> BorrowResult:
        status = self.check_valid("mutably borrow")
        if status is not None:
            return BorrowResult.err(status)
        return BorrowResult.ok(ExclusiveView(
            self.v0,
            self.update_value,
            reader=self._reader(),
            strict_release=self.options.strict_release,
        ))

    def borrow_mut(self) -> ExclusiveView:
        return self.try_borrow_mut().unwrap()

    # Write-through target of exclusive views. A view outliving a move must not
    # reach the moved value.
    def update_value(self, value: Any):
        self.try_get().unwrap()
        self.v0 = value

    def _reader(self):
        if self.options.live_views:
            return self.get
        return None

    def __repr__(self):
        if not self.valid:
            return format_str("{}(<moved>)", type(self).__name__)
        return format_str("{}({!r})", type(self).__name__, self.v0)


# An owned cell whose borrows go through a `BorrowGate`: any number of shared views
# or exactly one exclusive view may be live at a time. Views must be released to
# give their borrow back.
#
# Moving out of the cell is only allowed while no borrow is live; the new owner
# starts with a fresh gate.
class OwnedCellChecked(OwnedCell):
    def __init__(self, obj: Any, options: Optional[CellOptions] = None):
        super().__init__(obj, options)
        self.gate = BorrowGate()

    @property
    def shared_count(self) -> int:
        return self.gate.shared_count

    @property
    def exclusive_held(self) -> bool:
        return self.gate.exclusive_held

    @property
    def state(self) -> CellState:
        if not self.valid:
            return CellState.INVALID
        return self.gate.state()

    def borrow_snapshot(self) -> BorrowState:
        return BorrowState(self.gate.shared_count, self.gate.exclusive_held, self.valid)

    def borrow_state(self) -> str:
        return str(self.borrow_snapshot())

    def try_move_to(self) -> BorrowResult:
        status = self.check_valid("move") or self.gate.check_borrow_mut("move")
        if status is not None:
            return BorrowResult.err(status)
        return super().try_move_to()

    def try_into_inner(self) -> BorrowResult:
        status = self.check_valid("take") or self.gate.check_borrow_mut("take")
        if status is not None:
            return BorrowResult.err(status)
        return super().try_into_inner()

    def try_borrow(self) -> BorrowResult:
        status = self.check_valid("borrow") or self.gate.borrow()
        if status is not None:
            return BorrowResult.err(status)
        logger.debug(format_str("shared borrow taken, {}", self.borrow_state()))
        return BorrowResult.ok(SharedView(
            self.v0,
            self._release_shared,
            reader=self._reader(),
            strict_release=self.options.strict_release,
        ))

    def try_borrow_mut(self) -> BorrowResult:
        status = self.check_valid("mutably borrow") or self.gate.borrow_mut()
        if status is not None:
            return BorrowResult.err(status)
        logger.debug(format_str("exclusive borrow taken, {}", self.borrow_state()))
        return BorrowResult.ok(ExclusiveView(
            self.v0,
            self.update_value,
            self._release_exclusive,
            reader=self._reader(),
            strict_release=self.options.strict_release,
        ))

    def _release_shared(self):
        self._raise_on_status(self.gate.unborrow())
        logger.debug(format_str("shared borrow released, {}", self.borrow_state()))

    def _release_exclusive(self):
        self._raise_on_status(self.gate.unborrow_mut())
        logger.debug(format_str("exclusive borrow released, {}", self.borrow_state()))

    def _raise_on_status(self, status: Optional[BorrowStatus]):
        if status is not None:
            raise BorrowException(status.append_message_with_separator("; ", self.borrow_state()))

    # Views of a checked cell only read the owner while their borrow is live, so
    # the live reader goes straight to the value.
    def _reader(self):
        if self.options.live_views:
            return lambda: self.v0
        return None


# An owned cell that is also a canoser type. Subclasses name the type of the owned
# value in `delegate_type`:
#
#     class StrCell(OwnedCellCanoser):
#         delegate_type = str
#
# Serializing a moved cell fails with USE_AFTER_MOVE; deserializing produces a new
# owner.
class OwnedCellCanoser(OwnedCell, Base):
    delegate_type = 'delegate'

    @classmethod
    def dtype(cls):
        return type_mapping(cls.delegate_type)

    @classmethod
    def encode(cls, value):
        return cls.dtype().encode(value.get())

    @classmethod
    def decode(cls, cursor):
        v0 = cls.dtype().decode(cursor)
        return cls(v0)

    @classmethod
    def check_value(cls, value):
        cls.dtype().check_value(value.get())

    def to_json_serializable(self):
        return self.__class__.dtype().to_json_serializable(self.get())

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return self.valid == other.valid and self.v0 == other.v0
