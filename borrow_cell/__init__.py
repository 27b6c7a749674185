from borrow_cell.errors import StatusCode, BorrowStatus, format_str
from borrow_cell.borrow_exception import BorrowException
from borrow_cell.config import CellOptions
from borrow_cell.result import BorrowResult
from borrow_cell.types import (
    BorrowFlag, BorrowGate, BorrowState, CellState, SharedView, ExclusiveView,
    OwnedCell, OwnedCellChecked, OwnedCellCanoser
    )
from borrow_cell.version import version as __version__
