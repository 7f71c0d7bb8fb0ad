"""
ghsync: push notes from a local vault to files in GitHub repositories.
"""

from pyrollup import rollup

from . import core
from .core import *  # noqa

__all__ = rollup(core)

__canonical_children__ = [
    "core",
]
