"""
Command-line interface for item-indexer.

Provides commands for building single items, building batches of items
and checking configuration files.
"""

from .main import app, main

__all__ = ["main", "app"]
