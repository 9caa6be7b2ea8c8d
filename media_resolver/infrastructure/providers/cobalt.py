from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from media_resolver.domain.errors import ConfigurationError
from media_resolver.domain.models import (
    ALL_QUALITIES,
    CandidateItem,
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
    ResolutionOutcome,
    ResolutionRequest,
)
from .base import AbstractProviderAdapter, failure_from_exception, read_body

logger = logging.getLogger(__name__)


class CobaltAdapter(AbstractProviderAdapter):
    """
    Cobalt instance (v10+ API): POST / with a JSON body.

    Response ``status`` vocabulary:
      redirect / tunnel -> one ready URL
      picker            -> several items
      local-processing  -> client must merge streams itself
      error             -> explicit rejection
    """

    provider_id = "cobalt"
    allowed_qualities = ALL_QUALITIES

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession,
        base_url: str | None,
        api_key: str | None = None,
        timeout_sec: float = 60.0,
    ) -> None:
        if not base_url:
            raise ConfigurationError("CobaltAdapter requires COBALT_BASE_URL")
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout_sec)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/"

    def build_body(self, request: ResolutionRequest) -> dict[str, Any]:
        return {
            "url": request.source_url,
            "videoQuality": self.quality_for(request).value,
            "downloadMode": "auto",
            "youtubeVideoCodec": "h264",
            "youtubeVideoContainer": "auto",
        }

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._api_key:
            headers["Authorization"] = f"Api-Key {self._api_key}"
        return headers

    async def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        body = self.build_body(request)
        debug: dict[str, Any] = {"cobalt": self._base_url, "sentBody": body}

        try:
            async with self._session.post(
                self.endpoint,
                json=body,
                headers=self._headers(),
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                data = await read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            logger.warning("[COBALT] request failed: %r", exc)
            return failure_from_exception(exc, **debug)

        debug["status"] = status
        debug["body"] = data

        if status != 200:
            logger.warning("[COBALT] non-200 status=%s", status)
            return Failure(kind=ErrorKind.UPSTREAM_REJECTED, detail=debug)

        return self.translate(data, debug)

    def translate(self, data: Any, debug: dict[str, Any]) -> ResolutionOutcome:
        if not isinstance(data, dict):
            return Failure(kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE, detail=debug)

        status = data.get("status")

        if status == "error":
            error = data.get("error")
            code = error.get("code") if isinstance(error, dict) else error
            logger.warning("[COBALT] upstream error code=%s", code)
            return Failure(kind=ErrorKind.UPSTREAM_REJECTED, detail=debug)

        if status in ("redirect", "tunnel") and data.get("url"):
            return Direct(url=str(data["url"]))

        if status == "picker":
            picker = data.get("picker")
            items = []
            if isinstance(picker, list):
                for idx, entry in enumerate(picker):
                    if not isinstance(entry, dict) or not entry.get("url"):
                        continue
                    label = str(entry.get("type") or f"item {idx + 1}")
                    items.append(CandidateItem(url=str(entry["url"]), label=label))
            if items:
                return Candidates(items=tuple(items))
            return Failure(kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE, detail=debug)

        if status == "local-processing":
            kind = data.get("type") or "merge"
            return DeferredProcessing(
                reason=f"cobalt requires local processing ({kind}) which this service does not perform",
            )

        return Failure(kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE, detail=debug)
