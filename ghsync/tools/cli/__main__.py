"""
Entry point of `ghsync` CLI when run as `python -m ghsync.tools.cli`.
"""

from .main import app

app()
