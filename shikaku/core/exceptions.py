"""Custom exception hierarchy for puzzle generation and validation."""


class ShikakuError(Exception):
    """Base exception for engine failures."""


class SeedError(ShikakuError):
    """Raised when a PRNG is seeded with an empty string."""


class ConfigError(ShikakuError):
    """Raised when a generator configuration is malformed."""


class PuzzleFormatError(ShikakuError):
    """Raised when a serialized puzzle payload cannot be parsed."""


class ValidationError(ShikakuError):
    """Raised when a submitted dissection violates a puzzle rule."""
