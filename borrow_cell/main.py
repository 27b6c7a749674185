import argparse, sys, logging

from borrow_cell.borrow_exception import BorrowException
from borrow_cell.config import CellOptions
from borrow_cell.types.owned import OwnedCell, OwnedCellChecked

logger = logging.getLogger(__name__)


def get_parser():
    parser = argparse.ArgumentParser(prog='borrow-cell', add_help=True, description='Replay the ownership and borrow checking walkthroughs step by step')
    parser.add_argument('-s', '--scenario', choices=['ownership', 'checker', 'all'], default='all', help='Which walkthrough to run (default: all)')
    parser.add_argument('--strict-release', action='store_true', default=False, help='Fail on a second release of the same view instead of ignoring it')
    parser.add_argument('--live-views', action='store_true', default=False, help='Views re-read the owning cell instead of keeping their borrow-time value')
    parser.add_argument('-v', '--verbose', action='store_true', default=False, help='Log every borrow state transition')
    return parser


def expect_failure(label, fn):
    try:
        fn()
    except BorrowException as err:
        print(f"{label}: expected error: {err}")
    else:
        print(f"{label}: unexpectedly succeeded")


def run_ownership(options: CellOptions):
    print("===== ownership and move =====")
    s1 = OwnedCell("hello", options)
    print(f"s1 value: {s1.get()}")

    s2 = s1.move_to()
    print(f"s2 value: {s2.get()}")
    expect_failure("s1 value", s1.get)

    print("\n===== borrowing =====")
    r1 = s2.borrow()
    r2 = s2.borrow()
    print(f"r1 value: {r1.get()}")
    print(f"r2 value: {r2.get()}")

    r3 = s2.borrow_mut()
    r3.set(r3.get() + ", world")
    print(f"s2 value after write: {s2.get()}")


def run_checker(options: CellOptions):
    print("\n===== borrow checker =====")
    s = OwnedCellChecked("hello", options)
    print(f"initial state: {s.borrow_state()}")

    r1 = s.borrow()
    r2 = s.borrow()
    print(f"after two shared borrows: {s.borrow_state()}")
    expect_failure("exclusive borrow", s.borrow_mut)

    r1.release()
    print(f"after one release: {s.borrow_state()}")
    r2.release()
    print(f"after all releases: {s.borrow_state()}")

    r3 = s.borrow_mut()
    print(f"after exclusive borrow: {s.borrow_state()}")
    expect_failure("shared borrow", s.borrow)

    r3.set("hello, world")
    print(f"value after write: {s.get()}")

    r3.release()
    print(f"after exclusive release: {s.borrow_state()}")


def main(argv=None):
    parser = get_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    options = CellOptions(strict_release=args.strict_release, live_views=args.live_views)
    logger.debug(f"running scenario {args.scenario} with {options}")

    if args.scenario in ('ownership', 'all'):
        run_ownership(options)
    if args.scenario in ('checker', 'all'):
        run_checker(options)
    return 0


if __name__ == '__main__':
    sys.exit(main())
