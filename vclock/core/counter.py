"""Per-replica event counter.

A ``Counter`` is one component of a version vector: the number of events a
single replica has recorded. Counters are immutable; ``increment`` and
``merge`` return new instances.

Each instance also carries ``created_at``, the wall-clock millisecond at
which that particular object was built. It is reset on every derive, so it
says nothing about when the underlying event happened and is excluded from
equality, hashing, and ordering.

Example::

    c = Counter.init()        # 0
    c = c.increment()         # 1
    c.merge(Counter(4))       # Counter(value=4)
    c.compare(Counter(4))     # -1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

from vclock.core.clock import now_millis


@dataclass(frozen=True, slots=True, order=True)
class Counter:
    """Immutable event count for one replica.

    Attributes:
        value: Number of events recorded (non-negative).
        created_at: Construction time in ms since epoch. Not causal.

    Raises:
        ValueError: If ``value`` is not a non-negative int, or ``created_at``
            is not an int.
    """

    value: int
    created_at: int = field(default_factory=now_millis, compare=False)

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise ValueError(f"Counter value must be an int, got {self.value!r}")
        if not _is_int(self.created_at):
            raise ValueError(f"Counter created_at must be an int, got {self.created_at!r}")
        if self.value < 0:
            raise ValueError(f"Counter value must be non-negative, got {self.value}")

    @classmethod
    def init(cls) -> Self:
        """A counter for a replica that has not recorded any events yet."""
        return cls(0)

    def increment(self) -> Counter:
        """Return the next counter in this replica's sequence."""
        return Counter(self.value + 1)

    def merge(self, other: Counter) -> Counter:
        """Return the larger of the two counts as a fresh counter."""
        return Counter(max(self.value, other.value))

    def compare(self, other: Counter) -> int:
        """Sign of ``self.value - other.value``: -1, 0, or 1."""
        return (self.value > other.value) - (self.value < other.value)

    def to_dict(self) -> dict:
        return {"value": self.value, "created_at": self.created_at}

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Rebuild a counter from ``to_dict()`` output.

        ``created_at`` is optional and defaults to now.

        Raises:
            ValueError: If ``value`` is missing or either field is malformed.
        """
        try:
            value = data["value"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Counter data has no 'value': {data!r}") from exc
        if "created_at" in data:
            return cls(value, data["created_at"])
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
