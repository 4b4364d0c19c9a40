"""Wall-clock source for creation timestamps.

Every ``VersionVector`` and ``Counter`` records the wall-clock millisecond at
which it was built. These stamps are debugging metadata only: they never take
part in equality, ordering, or causal comparison.
"""

from __future__ import annotations

import time


def now_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000
