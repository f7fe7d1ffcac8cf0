"""CLI command implementations for shipwright.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .build import build
from .clean_tag import clean_tag
from .init import init
from .release import release
from .status import status

__all__ = [
    "build",
    "clean_tag",
    "init",
    "release",
    "status",
]
