from __future__ import annotations


class DomainError(Exception):
    """Base domain error shown to user as friendly message."""


class ValidationError(DomainError):
    pass


class ConfigurationError(DomainError):
    """Provider is missing required configuration. Raised before any attempt."""
