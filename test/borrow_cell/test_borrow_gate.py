from borrow_cell import BorrowGate, BorrowFlag, CellState, StatusCode


def test_unborrow_on_unused_gate_is_refused():
    gate = BorrowGate()
    status = gate.unborrow()
    assert status.major_status == StatusCode.BORROW_RELEASED
    assert gate.flag == BorrowFlag.UNUSED
    assert gate.shared_count == 0
    assert not gate.exclusive_held
    assert gate.state() == CellState.FREE


def test_unborrow_mut_without_exclusive_is_refused():
    gate = BorrowGate()
    assert gate.unborrow_mut().major_status == StatusCode.BORROW_RELEASED
    assert gate.flag == BorrowFlag.UNUSED
    assert gate.borrow() is None
    assert gate.unborrow_mut().major_status == StatusCode.BORROW_RELEASED
    assert gate.shared_count == 1


def test_unborrow_during_exclusive_is_refused():
    gate = BorrowGate()
    assert gate.borrow_mut() is None
    assert gate.unborrow().major_status == StatusCode.BORROW_RELEASED
    assert gate.exclusive_held
    assert gate.unborrow_mut() is None
    assert gate.unborrow_mut().major_status == StatusCode.BORROW_RELEASED
    assert gate.state() == CellState.FREE


def test_rejected_borrows_leave_flag():
    gate = BorrowGate()
    assert gate.borrow() is None
    assert gate.borrow() is None
    assert gate.borrow_mut().major_status == StatusCode.SHARED_BORROWS_ACTIVE
    assert gate.shared_count == 2
    assert gate.unborrow() is None
    assert gate.unborrow() is None
    assert gate.unborrow().major_status == StatusCode.BORROW_RELEASED
    assert gate.borrow_mut() is None
    assert gate.borrow().major_status == StatusCode.EXCLUSIVE_BORROW_ACTIVE
    assert gate.borrow_mut().major_status == StatusCode.EXCLUSIVE_BORROW_ACTIVE
    assert gate.flag == BorrowFlag.WRITE
