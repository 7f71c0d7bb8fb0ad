"""
This module implements the mapping of notes to GitHub files and the
synchronization of note content to those files.
"""

from pyrollup import rollup

from . import (
    client,
    engine,
    exceptions,
    notify,
    registry,
    schedule,
    settings,
    target,
    vault,
)
from .client import *  # noqa
from .engine import *  # noqa
from .exceptions import *  # noqa
from .notify import *  # noqa
from .registry import *  # noqa
from .schedule import *  # noqa
from .settings import *  # noqa
from .target import *  # noqa
from .vault import *  # noqa

__all__ = rollup(
    target,
    settings,
    registry,
    vault,
    client,
    engine,
    notify,
    schedule,
    exceptions,
)

__canonical_children__ = [
    "target",
    "settings",
    "registry",
    "vault",
    "client",
    "engine",
    "notify",
    "schedule",
    "exceptions",
]
