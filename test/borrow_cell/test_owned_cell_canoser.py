from borrow_cell import OwnedCellCanoser, BorrowException, StatusCode
from canoser import Uint64
import pytest


class StrCell(OwnedCellCanoser):
    delegate_type = str


class U64Cell(OwnedCellCanoser):
    delegate_type = Uint64


def test_canoser():
    x = StrCell("asdf")
    ser = x.serialize()
    x2 = StrCell.deserialize(ser)
    assert x2.get() == "asdf"
    assert x2 == x
    assert x2 is not x


def test_canoser_uint():
    x = U64Cell(12345)
    x2 = U64Cell.deserialize(x.serialize())
    assert x2.get() == 12345


def test_moved_cell_cannot_serialize():
    x = StrCell("asdf")
    y = x.move_to()
    assert isinstance(y, StrCell)
    assert y.serialize() == StrCell("asdf").serialize()
    with pytest.raises(BorrowException) as excinfo:
        x.serialize()
    assert excinfo.value.major_status == StatusCode.USE_AFTER_MOVE
    assert x != y
