"""vclock: immutable version vectors for detecting causality between writes.

A version vector records, per replica, how many updates that replica has
made to a piece of replicated data. Comparing two vectors tells whether one
write happened before, after, identically to, or concurrently with another;
merging two vectors yields their least upper bound.

Usage::

    from vclock import Occurred, VersionVector

    stored = VersionVector.create("n1")
    incoming = stored.append("n2")
    assert incoming.compare(stored) is Occurred.AFTER

The library logs through the ``vclock`` logger and is silent unless one of
the ``enable_*_logging`` helpers (or ``configure_from_env``) is called.
"""

import logging

from vclock.core import Counter, Occurred, Version, VersionVector
from vclock.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    "Counter",
    "Occurred",
    "Version",
    "VersionVector",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]
