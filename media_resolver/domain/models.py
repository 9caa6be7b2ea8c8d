from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Platform(str, Enum):
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"
    TWITTER_X = "twitter"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Platform.YOUTUBE: "YouTube",
    Platform.INSTAGRAM: "Instagram",
    Platform.FACEBOOK: "Facebook",
    Platform.TIKTOK: "TikTok",
    Platform.TWITTER_X: "Twitter/X",
    Platform.UNKNOWN: "Unknown",
}


class Quality(str, Enum):
    """
    Canonical quality tokens, declared in descending resolution order.
    """
    MAX = "max"
    P4320 = "4320"
    P2160 = "2160"
    P1440 = "1440"
    P1080 = "1080"
    P720 = "720"
    P480 = "480"
    P360 = "360"
    P240 = "240"
    P144 = "144"

    @property
    def height(self) -> int | None:
        """Resolution number; None for MAX."""
        if self is Quality.MAX:
            return None
        return int(self.value)


ALL_QUALITIES: tuple[Quality, ...] = tuple(Quality)
NUMERIC_QUALITIES: tuple[Quality, ...] = tuple(q for q in Quality if q is not Quality.MAX)
DEFAULT_QUALITY: Quality = Quality.P1080


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    UNSUPPORTED = "Unsupported"
    UPSTREAM_REJECTED = "UpstreamRejected"
    TIMEOUT = "Timeout"
    TRANSPORT_FAILURE = "TransportFailure"
    UNEXPECTED_RESPONSE_SHAPE = "UnexpectedResponseShape"
    ALL_PROVIDERS_EXHAUSTED = "AllProvidersExhausted"


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    source_url: str
    platform: Platform
    # Raw caller value; each provider normalizes it against its own allowed set.
    requested_quality: str | None = None


# ---- Outcomes ----

@dataclass(frozen=True, slots=True)
class Direct:
    url: str


@dataclass(frozen=True, slots=True)
class CandidateItem:
    url: str
    label: str


@dataclass(frozen=True, slots=True)
class Candidates:
    items: tuple[CandidateItem, ...]

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Candidates requires at least one item")

    @property
    def default(self) -> CandidateItem:
        return self.items[0]


@dataclass(frozen=True, slots=True)
class DeferredProcessing:
    reason: str


@dataclass(frozen=True, slots=True)
class Failure:
    kind: ErrorKind
    detail: Any = None


ResolutionOutcome = Union[Direct, Candidates, DeferredProcessing, Failure]


def is_success(outcome: ResolutionOutcome) -> bool:
    return isinstance(outcome, (Direct, Candidates))


def outcome_kind(outcome: ResolutionOutcome) -> str:
    """Short tag used in logs and diagnostics."""
    if isinstance(outcome, Failure):
        return outcome.kind.value
    return type(outcome).__name__


@dataclass(frozen=True, slots=True)
class ProviderAttempt:
    provider_id: str
    outcome: ResolutionOutcome
    elapsed_ms: float

    def as_debug(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "provider": self.provider_id,
            "outcome": outcome_kind(self.outcome),
            "elapsedMs": round(self.elapsed_ms, 1),
        }
        if isinstance(self.outcome, Failure):
            data["detail"] = self.outcome.detail
        elif isinstance(self.outcome, DeferredProcessing):
            data["detail"] = self.outcome.reason
        return data


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    outcome: ResolutionOutcome
    attempts: tuple[ProviderAttempt, ...] = field(default_factory=tuple)
