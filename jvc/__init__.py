"""Snapshot-based version control: save, status, history and revert."""

__version__ = "0.1.0"