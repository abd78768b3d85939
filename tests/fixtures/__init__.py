"""
Test fixtures for deterministic testing.

This module provides builders for snapshots and tracked items with pinned
timestamps.
"""

from .factories import make_item, snap, snaps

__all__ = ["make_item", "snap", "snaps"]
