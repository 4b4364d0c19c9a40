"""Causal relationship between two versions.

``Occurred`` is the answer to "how does this version relate to that one?"
and ``Version`` is the structural protocol for anything that can answer it.
A version vector is the only implementation shipped here, but replication
code should depend on the protocol rather than the concrete class.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Self, runtime_checkable


class Occurred(Enum):
    """Outcome of comparing version ``a`` against version ``b``.

    Read as "``a`` occurred ... ``b``":

    - ``IDENTICAL``: same causal history.
    - ``AFTER``: ``a`` supersedes ``b``.
    - ``BEFORE``: ``a`` is superseded by ``b``.
    - ``CONCURRENT``: neither dominates; the writes conflict.
    """

    IDENTICAL = "identical"
    AFTER = "after"
    BEFORE = "before"
    CONCURRENT = "concurrent"


@runtime_checkable
class Version(Protocol):
    """Anything that can classify its causal relationship to a peer."""

    def compare(self, other: Self) -> Occurred:
        """Classify how ``self`` relates to ``other``.

        Args:
            other: Another version of the same type.
        """
        ...
