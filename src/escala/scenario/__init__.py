"""Roster contract and loaders."""
