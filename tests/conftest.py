from __future__ import annotations

import asyncio
from typing import Sequence

import pytest

from media_resolver.config.settings import AppSettings
from media_resolver.domain.models import (
    ALL_QUALITIES,
    Platform,
    Quality,
    ResolutionOutcome,
    ResolutionRequest,
)
from media_resolver.infrastructure.providers.base import AbstractProviderAdapter


class StubAdapter(AbstractProviderAdapter):
    """Returns a canned outcome and records every call."""

    def __init__(
        self,
        provider_id: str,
        outcome: ResolutionOutcome | None = None,
        *,
        delay_sec: float = 0.0,
        raises: Exception | None = None,
        allowed: Sequence[Quality] = ALL_QUALITIES,
    ) -> None:
        self.provider_id = provider_id
        self.allowed_qualities = allowed
        self._outcome = outcome
        self._delay_sec = delay_sec
        self._raises = raises
        self.requests: list[ResolutionRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        self.requests.append(request)
        if self._delay_sec:
            await asyncio.sleep(self._delay_sec)
        if self._raises is not None:
            raise self._raises
        assert self._outcome is not None
        return self._outcome


@pytest.fixture
def make_settings():
    def _make(**overrides) -> AppSettings:
        values = {
            "COBALT_BASE_URL": None,
            "FORMAT_API_BASE_URL": None,
            "YTDLP_ENABLED": False,
            "PROVIDER_CHAIN": None,
            "PLATFORM_PROVIDERS": {},
            "LOG_LEVEL": "INFO",
        }
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return _make


@pytest.fixture
def youtube_request() -> ResolutionRequest:
    return ResolutionRequest(
        source_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        platform=Platform.YOUTUBE,
        requested_quality="1080p",
    )
