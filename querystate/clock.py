"""Clock used for the default execution end time."""
from __future__ import annotations

import time
from collections.abc import Callable

#: A zero-argument callable returning seconds since the epoch as a float.
Clock = Callable[[], float]


def system_clock() -> float:
    """Return the current wall-clock time in seconds with sub-second precision."""
    return time.time()
