from __future__ import annotations

from media_resolver.application.dto import ParsedLinkDTO
from media_resolver.domain.validators import validate_url
from media_resolver.infrastructure.platform_detector import PlatformDetector


class ParseLinkUseCase:
    def __init__(self, *, detector: PlatformDetector) -> None:
        self._detector = detector

    def execute(self, raw_text: str | None) -> ParsedLinkDTO:
        url = validate_url(raw_text)
        platform = self._detector.detect(url)
        return ParsedLinkDTO(url=url, platform=platform)
