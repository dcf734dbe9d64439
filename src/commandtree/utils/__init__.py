"""Utilities package."""

from commandtree.utils.config import Config
from commandtree.utils.logging import setup_logging

__all__ = ["Config", "setup_logging"]
