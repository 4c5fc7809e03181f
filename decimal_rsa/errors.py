"""Exceptions raised by the decimal RSA core."""


class GenerationExhaustedError(RuntimeError):
    """Raised when a bounded prime or exponent search runs out of attempts."""


class MalformedInputError(ValueError):
    """Raised when a digit string cannot be split into the expected blocks."""


__all__ = ["GenerationExhaustedError", "MalformedInputError"]
