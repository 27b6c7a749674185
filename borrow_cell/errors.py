from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


def format_str(astr, *args):
    return astr.format(*args)


# Status codes surfaced by owned cells and their views. The numeric values are
# stable so that callers may persist or compare them.
class StatusCode(IntEnum):
    # An operation was invoked on a cell whose value has been moved out.
    USE_AFTER_MOVE = 4001
    # A borrow was requested while an exclusive borrow is live.
    EXCLUSIVE_BORROW_ACTIVE = 4002
    # An exclusive borrow (or a move) was requested while shared borrows are live.
    SHARED_BORROWS_ACTIVE = 4003
    # A view was used or released after it had already been released.
    BORROW_RELEASED = 4004


@dataclass
class BorrowStatus:
    major_status: StatusCode
    message: Optional[str] = None

    def with_message(self, message: str) -> BorrowStatus:
        self.message = message
        return self

    def append_message_with_separator(self, separator: str, message: str) -> BorrowStatus:
        if self.message:
            self.message = self.message + separator + message
        else:
            self.message = message
        return self

    def __str__(self):
        if self.message:
            return format_str("{}: {}", self.major_status.name, self.message)
        return self.major_status.name


def use_after_move(operation: str) -> BorrowStatus:
    msg = format_str("cannot {} a value that has been moved", operation)
    return BorrowStatus(StatusCode.USE_AFTER_MOVE).with_message(msg)


def exclusive_borrow_active(operation: str) -> BorrowStatus:
    msg = format_str("cannot {} while an exclusive borrow is live", operation)
    return BorrowStatus(StatusCode.EXCLUSIVE_BORROW_ACTIVE).with_message(msg)


def shared_borrows_active(operation: str, count: int) -> BorrowStatus:
    msg = format_str("cannot {} while {} shared borrow(s) are live", operation, count)
    return BorrowStatus(StatusCode.SHARED_BORROWS_ACTIVE).with_message(msg)


def borrow_released(operation: str) -> BorrowStatus:
    msg = format_str("cannot {} a view that has already been released", operation)
    return BorrowStatus(StatusCode.BORROW_RELEASED).with_message(msg)


def nothing_to_release(kind: str) -> BorrowStatus:
    msg = format_str("no live {} to release", kind)
    return BorrowStatus(StatusCode.BORROW_RELEASED).with_message(msg)
