from __future__ import annotations
from borrow_cell.borrow_exception import BorrowException
from borrow_cell.errors import BorrowStatus, StatusCode
from dataclasses import dataclass
from typing import Any, Optional


# Outcome of a fallible cell operation. Either the produced value or the status
# explaining why the request was rejected; callers branch on `is_ok()` instead of
# catching `BorrowException`.
@dataclass
class BorrowResult:
    value: Any = None
    status: Optional[BorrowStatus] = None

    @classmethod
    def ok(cls, value: Any) -> BorrowResult:
        return cls(value, None)

    @classmethod
    def err(cls, status: BorrowStatus) -> BorrowResult:
        return cls(None, status)

    def is_ok(self) -> bool:
        return self.status is None

    def is_err(self) -> bool:
        return self.status is not None

    @property
    def major_status(self) -> Optional[StatusCode]:
        if self.status is None:
            return None
        return self.status.major_status

    def unwrap(self) -> Any:
        if self.status is not None:
            raise BorrowException(self.status)
        return self.value
