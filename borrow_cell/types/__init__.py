from borrow_cell.types.ref_cell import (
    BorrowFlag, BorrowGate, BorrowState, CellState, SharedView, ExclusiveView
    )
from borrow_cell.types.owned import OwnedCell, OwnedCellChecked, OwnedCellCanoser
