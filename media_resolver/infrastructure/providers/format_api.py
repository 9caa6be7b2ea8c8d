from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from media_resolver.domain.errors import ConfigurationError
from media_resolver.domain.models import (
    NUMERIC_QUALITIES,
    Candidates,
    ErrorKind,
    Failure,
    ResolutionOutcome,
    ResolutionRequest,
)
from media_resolver.domain.policies import (
    FormatEntry,
    entries_to_candidates,
    height_label,
    parse_resolution,
    rank_entries,
)
from .base import AbstractProviderAdapter, failure_from_exception, read_body

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_format_list(data: Any) -> list[FormatEntry] | None:
    """
    Descriptor list -> FormatEntry list. None when the shape is not a format list.

    Accepts ``{"formats": [...]}`` or a bare list. Each descriptor needs a
    ``url`` and a resolution in ``quality``/``label``/``height``.
    """
    if isinstance(data, dict):
        raw = data.get("formats")
    else:
        raw = data
    if not isinstance(raw, list):
        return None

    entries: list[FormatEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        url = item.get("url")
        if not url:
            continue
        height = None
        for key in ("quality", "label", "height"):
            value = item.get(key)
            if value is None:
                continue
            height = parse_resolution(str(value))
            if height:
                break
        if not height:
            continue
        entries.append(
            FormatEntry(
                height=height,
                url=str(url),
                label=height_label(height),
                bitrate_kbps=_to_float(item.get("bitrate") or item.get("tbr")),
            )
        )
    return entries


class FormatApiAdapter(AbstractProviderAdapter):
    """
    Metadata extraction service: GET <base><path>?url=... returning format descriptors.
    """

    provider_id = "format_api"
    allowed_qualities = NUMERIC_QUALITIES

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession,
        base_url: str | None,
        path: str = "/formats",
        api_key: str | None = None,
        timeout_sec: float = 30.0,
    ) -> None:
        if not base_url:
            raise ConfigurationError("FormatApiAdapter requires FORMAT_API_BASE_URL")
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._path = path if path.startswith("/") else "/" + path
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout_sec)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{self._path}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["X-API-Key"] = self._api_key
        return headers

    async def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        quality = self.quality_for(request)
        params = {"url": request.source_url}
        debug: dict[str, Any] = {"endpoint": self.endpoint, "params": params}

        try:
            async with self._session.get(
                self.endpoint,
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                data = await read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            logger.warning("[FORMAT_API] request failed: %r", exc)
            return failure_from_exception(exc, **debug)

        debug["status"] = status
        debug["body"] = data

        if status != 200:
            logger.warning("[FORMAT_API] non-200 status=%s", status)
            return Failure(kind=ErrorKind.UPSTREAM_REJECTED, detail=debug)

        if isinstance(data, dict) and data.get("error"):
            return Failure(kind=ErrorKind.UPSTREAM_REJECTED, detail=debug)

        entries = parse_format_list(data)
        if not entries:
            return Failure(kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE, detail=debug)

        ranked = rank_entries(entries, quality)
        logger.debug(
            "[FORMAT_API] %d formats, picked %s for requested %s",
            len(ranked),
            ranked[0].label,
            quality.value,
        )
        return Candidates(items=entries_to_candidates(ranked))
