"""Core causality types: counters, version vectors, and comparison outcomes."""

from vclock.core.clock import now_millis
from vclock.core.counter import Counter
from vclock.core.version import Occurred, Version
from vclock.core.version_vector import VersionVector

__all__ = [
    "Counter",
    "Occurred",
    "Version",
    "VersionVector",
    "now_millis",
]
