from dataclasses import dataclass


# Options shared by a cell and every view it hands out. A moved cell passes
# its options on to the new owner.
@dataclass
class CellOptions:
    # Raise BORROW_RELEASED on a second release instead of ignoring it.
    strict_release: bool = False

    # Views re-read the owning cell on every get instead of returning the
    # value captured at borrow time.
    live_views: bool = False
