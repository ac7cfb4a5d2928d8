"""Common escala-specific exceptions."""


class EscalaValueError(ValueError):
    """Raised when escala detects invalid user-provided roster data."""


__all__ = ["EscalaValueError"]
