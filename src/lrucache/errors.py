from __future__ import annotations


class CacheError(Exception):
    """Base error for the cache package."""


class ValidationError(CacheError):
    """Raised when a constructor argument or option is invalid."""


class InvalidCapacityError(ValidationError):
    """Raised when the cache is built with a non-positive capacity."""


class InvalidTTLError(ValidationError):
    """Raised when a negative TTL is supplied."""


class InvalidIntervalError(ValidationError):
    """Raised when a negative cleanup interval is supplied."""
