from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from media_resolver.domain.models import ErrorKind, Platform


@dataclass(frozen=True, slots=True)
class ParsedLinkDTO:
    url: str
    platform: Platform


# ---- ExternalResult ----

@dataclass(frozen=True, slots=True)
class Redirect:
    url: str


@dataclass(frozen=True, slots=True)
class Payload:
    body: dict[str, Any]


@dataclass(frozen=True, slots=True)
class ErrorResult:
    status: int
    message: str
    kind: ErrorKind | None = None
    detail: Any = None


ExternalResult = Union[Redirect, Payload, ErrorResult]


@dataclass(frozen=True, slots=True)
class QualityLinkDTO:
    quality: str
    format: str
    url: str
    direct_download: bool = True


@dataclass(frozen=True, slots=True)
class VideoInfoDTO:
    platform: Platform
    title: str
    author: str
    thumbnail: str
    qualities: list[QualityLinkDTO] = field(default_factory=list)
    note: str = ""
