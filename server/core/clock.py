# server/core/clock.py

import time


def now_ms() -> int:
    """
    Server clock in milliseconds since epoch.
    """
    return int(time.time() * 1000)
