from __future__ import annotations

import logging
import time

from media_resolver.domain.models import (
    DeferredProcessing,
    ErrorKind,
    Failure,
    ProviderAttempt,
    ResolutionOutcome,
    ResolutionRequest,
    ResolutionResult,
    is_success,
    outcome_kind,
)
from media_resolver.infrastructure.providers.base import AbstractProviderAdapter
from media_resolver.infrastructure.providers.registry import ProviderRegistry


class FallbackOrchestrator:
    """
    Drives the provider chain for one request:
      adapter 1 -> adapter 2 -> ... until Direct / Candidates / DeferredProcessing.

    IMPORTANT:
      - Strictly sequential; never fires adapters in parallel.
      - First success wins; later adapters are not called.
      - DeferredProcessing is a capability gap and ends the chain.
      - Holds no per-request state. Attempts live in the returned result.
    """

    def __init__(self, *, registry: ProviderRegistry) -> None:
        self._registry = registry
        self._logger = logging.getLogger("orchestrator")

    async def resolve(self, request: ResolutionRequest) -> ResolutionResult:
        chain = self._registry.chain_for(request.platform)
        if not chain:
            self._logger.info("no providers for platform=%s", request.platform.value)
            return ResolutionResult(
                outcome=Failure(
                    kind=ErrorKind.UNSUPPORTED,
                    detail={"platform": request.platform.value, "providers": []},
                ),
            )

        attempts: list[ProviderAttempt] = []
        for adapter in chain:
            outcome, elapsed_ms = await self._call(adapter, request)
            attempts.append(
                ProviderAttempt(provider_id=adapter.provider_id, outcome=outcome, elapsed_ms=elapsed_ms)
            )
            self._logger.info(
                "attempt provider=%s outcome=%s elapsed=%.0fms",
                adapter.provider_id,
                outcome_kind(outcome),
                elapsed_ms,
            )

            if is_success(outcome) or isinstance(outcome, DeferredProcessing):
                return ResolutionResult(outcome=outcome, attempts=tuple(attempts))

        self._logger.warning(
            "all providers failed url=%s tried=%s",
            request.source_url,
            [a.provider_id for a in attempts],
        )
        return ResolutionResult(
            outcome=Failure(
                kind=ErrorKind.ALL_PROVIDERS_EXHAUSTED,
                detail={"attempts": [a.as_debug() for a in attempts]},
            ),
            attempts=tuple(attempts),
        )

    async def _call(
        self, adapter: AbstractProviderAdapter, request: ResolutionRequest
    ) -> tuple[ResolutionOutcome, float]:
        started = time.monotonic()
        try:
            outcome = await adapter.resolve(request)
        except Exception as exc:
            # Adapter broke its contract; keep the chain going.
            self._logger.exception("provider %s raised", adapter.provider_id)
            outcome = Failure(
                kind=ErrorKind.UNEXPECTED_RESPONSE_SHAPE,
                detail={"provider": adapter.provider_id, "error": type(exc).__name__, "message": str(exc)},
            )
        return outcome, (time.monotonic() - started) * 1000.0
