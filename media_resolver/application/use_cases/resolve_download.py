from __future__ import annotations

import logging

from media_resolver.application.dto import ExternalResult
from media_resolver.application.projector import OutcomeProjector
from media_resolver.application.services import FallbackOrchestrator
from media_resolver.application.use_cases.parse_link import ParseLinkUseCase
from media_resolver.domain.errors import ValidationError
from media_resolver.domain.models import (
    ErrorKind,
    Failure,
    ResolutionRequest,
    ResolutionResult,
)

logger = logging.getLogger(__name__)


class ResolveDownloadUseCase:
    def __init__(
        self,
        *,
        parse_link: ParseLinkUseCase,
        orchestrator: FallbackOrchestrator,
        projector: OutcomeProjector,
    ) -> None:
        self._parse_link = parse_link
        self._orchestrator = orchestrator
        self._projector = projector

    async def resolve(self, *, url: str | None, quality: str | None) -> ResolutionResult:
        try:
            parsed = self._parse_link.execute(url)
        except ValidationError as exc:
            return ResolutionResult(outcome=Failure(kind=ErrorKind.INVALID_INPUT, detail=str(exc)))

        request = ResolutionRequest(
            source_url=parsed.url,
            platform=parsed.platform,
            requested_quality=quality,
        )
        logger.info(
            "resolve url=%s platform=%s quality=%r",
            request.source_url,
            request.platform.value,
            quality,
        )
        return await self._orchestrator.resolve(request)

    async def execute(
        self,
        *,
        url: str | None,
        quality: str | None,
        want_choice: bool = False,
    ) -> ExternalResult:
        result = await self.resolve(url=url, quality=quality)
        return self._projector.project(result.outcome, want_choice=want_choice)
