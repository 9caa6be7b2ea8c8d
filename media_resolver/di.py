from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import aiohttp

from .config.settings import AppSettings, get_settings
from .constants import APP_NAME
from .domain.models import Platform
from .infrastructure.platform_detector import PlatformDetector
from .infrastructure.providers import (
    AbstractProviderAdapter,
    CobaltAdapter,
    FormatApiAdapter,
    ProviderRegistry,
    YtDlpAdapter,
)
from .infrastructure.yt import YdlClient, YdlConfig
from .application.projector import OutcomeProjector
from .application.services import FallbackOrchestrator
from .application.use_cases.parse_link import ParseLinkUseCase
from .application.use_cases.resolve_download import ResolveDownloadUseCase
from .application.use_cases.video_info import VideoInfoUseCase


class DIError(RuntimeError):
    pass


@dataclass(slots=True)
class Container:
    settings: AppSettings
    logger: logging.Logger
    _components: dict[str, Any]

    @classmethod
    def build(cls, settings: AppSettings | None = None) -> "Container":
        settings = settings or get_settings()
        logger = logging.getLogger(APP_NAME)
        return cls(settings=settings, logger=logger, _components={})

    def register(self, name: str, component: Any) -> None:
        if not name or not name.strip():
            raise DIError("Component name must be non-empty")
        if name in self._components:
            raise DIError(f"Component already registered: {name}")
        self._components[name] = component

    def get(self, name: str) -> Any:
        try:
            return self._components[name]
        except KeyError as exc:
            raise DIError(f"Unknown component: {name}") from exc


def build_adapters(s: AppSettings, session: aiohttp.ClientSession) -> list[AbstractProviderAdapter]:
    """
    Configured adapters in built-in order: cobalt, format_api, ytdlp.
    Unconfigured providers are left out.
    """
    adapters: list[AbstractProviderAdapter] = []
    if s.cobalt_base_url:
        adapters.append(
            CobaltAdapter(
                session=session,
                base_url=s.cobalt_base_url,
                api_key=s.cobalt_api_key,
                timeout_sec=s.cobalt_timeout_sec,
            )
        )
    if s.format_api_base_url:
        adapters.append(
            FormatApiAdapter(
                session=session,
                base_url=s.format_api_base_url,
                path=s.format_api_path,
                api_key=s.format_api_key,
                timeout_sec=s.format_api_timeout_sec,
            )
        )
    if s.ytdlp_enabled:
        adapters.append(YtDlpAdapter(ydl=YdlClient(cfg=YdlConfig()), timeout_sec=s.ytdlp_timeout_sec))
    return adapters


def _platform_chains(s: AppSettings) -> dict[Platform, list[str]]:
    chains: dict[Platform, list[str]] = {}
    for key, ids in s.platform_providers.items():
        try:
            platform = Platform(key.strip().lower())
        except ValueError as exc:
            raise DIError(f"PLATFORM_PROVIDERS: unknown platform {key!r}") from exc
        chains[platform] = list(ids)
    return chains


def build_graph(
    container: Container,
    *,
    session: aiohttp.ClientSession,
    adapters: list[AbstractProviderAdapter] | None = None,
) -> None:
    """
    Build the whole dependency graph.
    Any init error must crash at startup.
    """

    s = container.settings

    if adapters is None:
        adapters = build_adapters(s, session)
    if not adapters:
        container.logger.warning("no providers configured; every download will be unsupported")

    detector = PlatformDetector()
    registry = ProviderRegistry(
        adapters=adapters,
        default_chain=s.provider_chain,
        platform_chains=_platform_chains(s),
    )
    orchestrator = FallbackOrchestrator(registry=registry)
    projector = OutcomeProjector()

    parse_link = ParseLinkUseCase(detector=detector)
    resolve_download = ResolveDownloadUseCase(
        parse_link=parse_link,
        orchestrator=orchestrator,
        projector=projector,
    )
    video_info = VideoInfoUseCase(parse_link=parse_link, session=session)

    container.register("http_session", session)
    container.register("provider_registry", registry)
    container.register("orchestrator", orchestrator)
    container.register("projector", projector)

    container.register("parse_link_uc", parse_link)
    container.register("resolve_download_uc", resolve_download)
    container.register("video_info_uc", video_info)

    container.logger.info("providers: %s", registry.provider_ids)
