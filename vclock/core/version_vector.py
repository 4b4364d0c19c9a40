"""Immutable version vector (vector clock) for replicated data.

A ``VersionVector`` maps replica identifiers to ``Counter`` values. Each
replica that writes a record appends its own identifier, and comparing the
vectors attached to two copies of the record tells a storage layer whether
an incoming write supersedes the stored one, is superseded by it, or
conflicts with it.

Vectors are values. ``append`` and ``merge`` copy the mapping and return a
new instance; no operation ever mutates ``self`` or its argument, so
instances can be shared freely between threads.

Example::

    a = VersionVector.create("n1")      # {n1: 1}
    b = a.append("n1")                  # {n1: 2}
    b.compare(a)                        # Occurred.AFTER

    c = VersionVector.create("n2")      # {n2: 1}
    b.compare(c)                        # Occurred.CONCURRENT

    d = b.merge(c)                      # {n1: 2, n2: 1}
    d.compare(b), d.compare(c)          # AFTER, AFTER

Comparison follows a short-circuit policy: if the vectors differ in size,
the larger one is taken to be later without looking at individual keys.
For vectors of equal size, the first key (in insertion order) whose counters
differ decides the outcome. Descriptors only ever grow, which is what makes
the size shortcut meaningful, but it is not an exhaustive dominance check.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, ItemsView, Iterator, KeysView, Mapping, ValuesView
from types import MappingProxyType
from typing import Generic, Self, TypeVar

from vclock.core.clock import now_millis
from vclock.core.counter import Counter
from vclock.core.version import Occurred

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class VersionVector(Generic[K]):
    """Immutable mapping from replica identifier to ``Counter``.

    Prefer ``VersionVector.create()`` over the constructor; the constructor
    exists for deserialization and for tests that need a fixed
    ``creation_time``.

    Args:
        creation_time: Milliseconds since epoch at which the causal chain
            started. Defaults to now.
        entries: Initial replica counters. The mapping is copied.

    Raises:
        ValueError: If a key is None.
        TypeError: If a value is not a Counter.
    """

    __slots__ = ("_creation_time", "_entries")

    def __init__(
        self,
        creation_time: int | None = None,
        entries: Mapping[K, Counter] | None = None,
    ):
        copied = dict(entries or {})
        for key, counter in copied.items():
            if key is None:
                raise ValueError("entries must not contain a None key")
            if not isinstance(counter, Counter):
                raise TypeError(
                    f"Entry for {key!r} must be a Counter, got {type(counter).__name__}"
                )
        self._creation_time = now_millis() if creation_time is None else creation_time
        self._entries: Mapping[K, Counter] = MappingProxyType(copied)

    @classmethod
    def create(cls, key: K | None = None) -> Self:
        """Start a new causal chain, optionally recording a first event.

        Args:
            key: If given, the returned vector already holds ``{key: 1}``.
        """
        vector = cls()
        if key is None:
            return vector
        return vector.append(key)

    @property
    def creation_time(self) -> int:
        """Milliseconds since epoch at which this causal chain started."""
        return self._creation_time

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def append(self, key: K) -> Self:
        """Record one more event for ``key``.

        Args:
            key: Replica identifier. Absent keys start from ``Counter.init()``.

        Returns:
            A new vector with ``key``'s counter incremented and the same
            ``creation_time``.

        Raises:
            ValueError: If ``key`` is None. ``self`` is left untouched.
        """
        if key is None:
            logger.debug("Rejected append of None key to %s", self)
            raise ValueError("key must not be None")

        entries = dict(self._entries)
        entries[key] = entries.get(key, Counter.init()).increment()
        return type(self)(self._creation_time, entries)

    def merge(self, other: VersionVector[K]) -> Self:
        """Join two vectors: the per-key maximum over the union of keys.

        Keys present on only one side are carried over unchanged. The result's
        ``creation_time`` is the earlier of the two.

        Raises:
            TypeError: If ``other`` is not a VersionVector.
        """
        self._check_peer(other)
        entries = dict(self._entries)
        for key, theirs in other._entries.items():
            mine = entries.get(key)
            entries[key] = theirs if mine is None else mine.merge(theirs)
        creation_time = min(self._creation_time, other._creation_time)
        return type(self)(creation_time, entries)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare(self, other: VersionVector[K]) -> Occurred:
        """Classify how this vector relates causally to ``other``.

        Returns:
            ``AFTER`` if this vector supersedes ``other``, ``BEFORE`` if it is
            superseded, ``IDENTICAL`` if neither moved, ``CONCURRENT`` if the
            histories diverged.

        Raises:
            TypeError: If ``other`` is not a VersionVector.
        """
        self._check_peer(other)
        bigger_self = False
        bigger_other = False

        size_self = len(self._entries)
        size_other = len(other._entries)

        if size_self < size_other:
            bigger_other = True
        elif size_other < size_self:
            bigger_self = True
        else:
            for key, mine in self._entries.items():
                theirs = other._entries.get(key)
                if theirs is None:
                    bigger_self = True
                    bigger_other = any(k not in self._entries for k in other._entries)
                    break

                diff = mine.compare(theirs)
                if diff < 0:
                    bigger_other = True
                    break
                if diff > 0:
                    bigger_self = True
                    break

        if not bigger_self and not bigger_other:
            return Occurred.IDENTICAL
        if bigger_self and not bigger_other:
            return Occurred.AFTER
        if bigger_other and not bigger_self:
            return Occurred.BEFORE

        logger.debug("Concurrent versions: %s vs %s", self, other)
        return Occurred.CONCURRENT

    def happened_before(self, other: VersionVector[K]) -> bool:
        """True if ``other`` supersedes this vector."""
        return self.compare(other) is Occurred.BEFORE

    def happened_after(self, other: VersionVector[K]) -> bool:
        """True if this vector supersedes ``other``."""
        return self.compare(other) is Occurred.AFTER

    def is_concurrent(self, other: VersionVector[K]) -> bool:
        """True if neither vector supersedes the other."""
        return self.compare(other) is Occurred.CONCURRENT

    def _check_peer(self, other: object) -> None:
        if not isinstance(other, VersionVector):
            raise TypeError(
                f"Expected a VersionVector, got {type(other).__name__}"
            )

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    def contains(self, key: K) -> bool:
        return key in self._entries

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def get(self, key: K) -> Counter | None:
        """Counter for ``key``, or None if the replica never wrote."""
        return self._entries.get(key)

    def entries(self) -> Mapping[K, Counter]:
        """Read-only view of the replica counters."""
        return self._entries

    def keys(self) -> KeysView[K]:
        return self._entries.keys()

    def values(self) -> ValuesView[Counter]:
        return self._entries.values()

    def items(self) -> ItemsView[K, Counter]:
        return self._entries.items()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize to a plain dict of replica counts.

        Counter ``created_at`` stamps are not carried; only the counts matter
        for comparison.
        """
        return {
            "creation_time": self._creation_time,
            "entries": {key: counter.value for key, counter in self._entries.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> Self:
        """Rebuild a vector from ``to_dict()`` output.

        Args:
            data: Mapping with ``creation_time`` (int) and ``entries``
                (mapping of replica id to non-negative int).

        Raises:
            ValueError: If a field is missing or malformed.
        """
        try:
            creation_time = data["creation_time"]
            raw_entries = data["entries"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed version vector data: {data!r}") from exc

        if isinstance(creation_time, bool) or not isinstance(creation_time, int):
            raise ValueError(f"creation_time must be an int, got {creation_time!r}")
        if not isinstance(raw_entries, Mapping):
            raise ValueError(f"entries must be a mapping, got {type(raw_entries).__name__}")

        entries: dict[K, Counter] = {}
        for key, value in raw_entries.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Counter for {key!r} must be an int, got {value!r}")
            entries[key] = Counter(value)
        return cls(creation_time, entries)

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionVector):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(frozenset((key, c.value) for key, c in self._entries.items()))

    def __str__(self) -> str:
        body = ", ".join(f"{key}: {counter}" for key, counter in self._entries.items())
        return f"{self._creation_time}, {{{body}}}"

    def __repr__(self) -> str:
        counts = {key: counter.value for key, counter in self._entries.items()}
        return f"VersionVector(creation_time={self._creation_time}, entries={counts!r})"
