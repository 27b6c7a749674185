from borrow_cell.errors import BorrowStatus, StatusCode
from typing import List, Union
from dataclasses import dataclass


class BorrowExceptionBase(Exception):
    pass


@dataclass
class BorrowException(BorrowExceptionBase):
    status: List[BorrowStatus]

    def __init__(self, status: Union[BorrowStatus, List[BorrowStatus]]):
        if isinstance(status, BorrowStatus):
            self.status = [status]
        else:
            self.status = status
        super().__init__(str(self))

    @property
    def major_status(self) -> StatusCode:
        return self.status[0].major_status

    def __str__(self):
        return "; ".join(str(x) for x in self.status)
