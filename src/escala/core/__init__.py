"""Core utilities shared across escala modules."""

from .errors import EscalaValueError

__all__ = ["EscalaValueError"]
