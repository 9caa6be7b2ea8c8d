from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, Sequence

import aiohttp

from media_resolver.domain.models import (
    ALL_QUALITIES,
    ErrorKind,
    Failure,
    Quality,
    ResolutionOutcome,
    ResolutionRequest,
)
from media_resolver.domain.policies import normalize_quality


class AbstractProviderAdapter(ABC):
    """
    Adapter contract for one upstream resolver.

    ``resolve`` must turn every ordinary upstream failure (transport error,
    timeout, error payload, unparseable body) into a ``Failure`` outcome.
    Only missing configuration may raise, and only from ``__init__``.
    """

    provider_id: str = "abstract"
    allowed_qualities: Sequence[Quality] = ALL_QUALITIES

    def quality_for(self, request: ResolutionRequest) -> Quality:
        return normalize_quality(request.requested_quality, self.allowed_qualities)

    @abstractmethod
    async def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.provider_id}>"


def failure_from_exception(exc: BaseException, **context: Any) -> Failure:
    """
    Map a client-side exception into a Failure. CancelledError is never passed here.
    """
    if isinstance(exc, asyncio.TimeoutError):
        kind = ErrorKind.TIMEOUT
    elif isinstance(exc, (aiohttp.ClientError, OSError)):
        kind = ErrorKind.TRANSPORT_FAILURE
    elif isinstance(exc, ValueError):
        kind = ErrorKind.UNEXPECTED_RESPONSE_SHAPE
    else:
        kind = ErrorKind.TRANSPORT_FAILURE

    detail = dict(context)
    detail["error"] = type(exc).__name__
    detail["message"] = str(exc) or type(exc).__name__
    return Failure(kind=kind, detail=detail)


async def read_body(resp: aiohttp.ClientResponse) -> Any:
    """
    JSON body if the upstream sent one, raw text otherwise. Undecodable
    bytes are replaced so the body always reaches the failure detail.
    """
    raw = await resp.read()
    try:
        text = raw.decode(resp.charset or "utf-8", errors="replace")
    except LookupError:
        text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text) if text else None
    except ValueError:
        return text
