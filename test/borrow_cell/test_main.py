from borrow_cell.main import main, get_parser


def test_parser_defaults():
    args = get_parser().parse_args([])
    assert args.scenario == 'all'
    assert not args.strict_release
    assert not args.live_views


def test_ownership_scenario(capsys):
    assert main(['--scenario', 'ownership']) == 0
    out = capsys.readouterr().out
    assert "s1 value: hello" in out
    assert "s2 value: hello" in out
    assert "s1 value: expected error: USE_AFTER_MOVE" in out
    assert "s2 value after write: hello, world" in out


def test_checker_scenario(capsys):
    assert main(['-s', 'checker']) == 0
    out = capsys.readouterr().out
    assert "after two shared borrows: shared borrows: 2, exclusive borrow: no" in out
    assert "exclusive borrow: expected error: SHARED_BORROWS_ACTIVE" in out
    assert "shared borrow: expected error: EXCLUSIVE_BORROW_ACTIVE" in out
    assert "value after write: hello, world" in out
    assert "after exclusive release: shared borrows: 0, exclusive borrow: no" in out
    assert "unexpectedly succeeded" not in out
    assert "===== ownership" not in out


def test_all_scenarios_with_options(capsys):
    assert main(['--strict-release', '--live-views']) == 0
    out = capsys.readouterr().out
    assert "===== ownership and move =====" in out
    assert "===== borrow checker =====" in out
