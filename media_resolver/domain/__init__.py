from __future__ import annotations

from .models import (
    ALL_QUALITIES,
    DEFAULT_QUALITY,
    CandidateItem,
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
    Platform,
    ProviderAttempt,
    Quality,
    ResolutionOutcome,
    ResolutionRequest,
    ResolutionResult,
)
from .errors import ConfigurationError, DomainError, ValidationError

__all__ = [
    "ALL_QUALITIES",
    "DEFAULT_QUALITY",
    "CandidateItem",
    "Candidates",
    "DeferredProcessing",
    "Direct",
    "ErrorKind",
    "Failure",
    "Platform",
    "ProviderAttempt",
    "Quality",
    "ResolutionOutcome",
    "ResolutionRequest",
    "ResolutionResult",
    "ConfigurationError",
    "DomainError",
    "ValidationError",
]
