"""Structured JSONL records for compliance alerts."""

from .jsonl import append_jsonl, iso_now, read_jsonl

__all__ = ["append_jsonl", "iso_now", "read_jsonl"]
