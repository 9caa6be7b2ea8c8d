from __future__ import annotations

import asyncio
import logging

from media_resolver.domain.models import (
    NUMERIC_QUALITIES,
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
    ResolutionOutcome,
    ResolutionRequest,
)
from media_resolver.domain.policies import entries_to_candidates, rank_entries
from media_resolver.infrastructure.yt import YdlClient, YdlError
from .base import AbstractProviderAdapter

logger = logging.getLogger(__name__)


class YtDlpAdapter(AbstractProviderAdapter):
    """
    Local yt-dlp metadata extraction. Only single-file (progressive) formats
    count as downloadable; split audio/video streams need merging.
    """

    provider_id = "ytdlp"
    allowed_qualities = NUMERIC_QUALITIES

    def __init__(self, *, ydl: YdlClient, timeout_sec: float = 45.0) -> None:
        self._ydl = ydl
        self._timeout_sec = timeout_sec

    async def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        quality = self.quality_for(request)
        logger.info("[YTDLP] extract url=%s quality=%s", request.source_url, quality.value)

        try:
            info = await asyncio.wait_for(
                self._ydl.extract_info(request.source_url),
                timeout=self._timeout_sec,
            )
        except asyncio.TimeoutError:
            logger.warning("[YTDLP] extract timed out after %.0fs", self._timeout_sec)
            return Failure(
                kind=ErrorKind.TIMEOUT,
                detail={"provider": self.provider_id, "timeoutSec": self._timeout_sec},
            )
        except YdlError as exc:
            return Failure(
                kind=ErrorKind.UPSTREAM_REJECTED,
                detail={"provider": self.provider_id, "message": str(exc)},
            )

        extracted = self._ydl.build_formats(info)

        ranked = rank_entries(extracted.progressive, quality)
        if ranked:
            return Candidates(items=entries_to_candidates(ranked))

        if extracted.direct_url:
            return Direct(url=extracted.direct_url)

        if extracted.split_streams:
            return DeferredProcessing(
                reason="only separate audio and video streams are available; merging is not supported",
            )

        return Failure(
            kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE,
            detail={
                "provider": self.provider_id,
                "extractor": info.get("extractor_key") or info.get("extractor"),
                "formats": len(info.get("formats") or []),
            },
        )
