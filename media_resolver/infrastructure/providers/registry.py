from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from media_resolver.domain.errors import ConfigurationError
from media_resolver.domain.models import Platform
from .base import AbstractProviderAdapter


class ProviderRegistry:
    """
    Maps Platform -> ordered adapter chain.

    Platforms without an explicit chain use the default chain, except
    UNKNOWN which stays empty unless configured.
    """

    def __init__(
        self,
        *,
        adapters: Iterable[AbstractProviderAdapter],
        default_chain: Sequence[str] | None = None,
        platform_chains: Mapping[Platform, Sequence[str]] | None = None,
    ) -> None:
        self._adapters: dict[str, AbstractProviderAdapter] = {}
        for adapter in adapters:
            if adapter.provider_id in self._adapters:
                raise ConfigurationError(f"Duplicate provider id: {adapter.provider_id}")
            self._adapters[adapter.provider_id] = adapter

        default_ids = list(default_chain) if default_chain is not None else list(self._adapters)
        self._default = self._lookup(default_ids)

        self._chains: dict[Platform, tuple[AbstractProviderAdapter, ...]] = {}
        for platform, ids in (platform_chains or {}).items():
            self._chains[platform] = self._lookup(ids)

    def _lookup(self, ids: Sequence[str]) -> tuple[AbstractProviderAdapter, ...]:
        chain = []
        for provider_id in ids:
            try:
                chain.append(self._adapters[provider_id])
            except KeyError as exc:
                raise ConfigurationError(
                    f"Provider {provider_id!r} is unknown or not configured. "
                    f"Available: {sorted(self._adapters)}"
                ) from exc
        return tuple(chain)

    @property
    def provider_ids(self) -> list[str]:
        return list(self._adapters)

    def chain_for(self, platform: Platform) -> tuple[AbstractProviderAdapter, ...]:
        if platform in self._chains:
            return self._chains[platform]
        if platform is Platform.UNKNOWN:
            return ()
        return self._default
