"""Roster I/O helpers."""

from .loaders import load_roster, read_csv, roster_warnings

__all__ = ["load_roster", "read_csv", "roster_warnings"]
