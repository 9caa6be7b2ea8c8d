import asyncio

import pytest

from media_resolver.application.services import FallbackOrchestrator
from media_resolver.domain.models import (
    CandidateItem,
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
    Platform,
    ResolutionRequest,
)
from media_resolver.infrastructure.providers.registry import ProviderRegistry

from .conftest import StubAdapter


def _orchestrator(*adapters, **registry_kwargs):
    return FallbackOrchestrator(registry=ProviderRegistry(adapters=adapters, **registry_kwargs))


async def test_short_circuits_on_first_success(youtube_request):
    a = StubAdapter("a", Failure(ErrorKind.UPSTREAM_REJECTED, detail="x"))
    b = StubAdapter("b", Direct("https://cdn.example/video.mp4"))
    c = StubAdapter("c", Direct("https://never.example/"))

    result = await _orchestrator(a, b, c).resolve(youtube_request)

    assert result.outcome == Direct("https://cdn.example/video.mp4")
    assert [at.provider_id for at in result.attempts] == ["a", "b"]
    assert c.calls == 0
    assert a.requests == [youtube_request]
    assert b.requests == [youtube_request]


async def test_candidates_count_as_success(youtube_request):
    picks = Candidates(items=(CandidateItem("https://cdn/1", "video"), CandidateItem("https://cdn/2", "photo")))
    a = StubAdapter("a", picks)
    b = StubAdapter("b", Direct("https://never/"))

    result = await _orchestrator(a, b).resolve(youtube_request)

    assert result.outcome is picks
    assert b.calls == 0


async def test_aggregates_all_failures(youtube_request):
    a = StubAdapter("a", Failure(ErrorKind.UPSTREAM_REJECTED, detail="x"))
    b = StubAdapter("b", Failure(ErrorKind.TIMEOUT, detail="y"))

    result = await _orchestrator(a, b).resolve(youtube_request)

    assert isinstance(result.outcome, Failure)
    assert result.outcome.kind is ErrorKind.ALL_PROVIDERS_EXHAUSTED
    attempts = result.outcome.detail["attempts"]
    assert [at["provider"] for at in attempts] == ["a", "b"]
    assert [at["detail"] for at in attempts] == ["x", "y"]
    assert [at["outcome"] for at in attempts] == ["UpstreamRejected", "Timeout"]
    assert len(result.attempts) == 2
    assert all(at.elapsed_ms >= 0 for at in result.attempts)


async def test_deferred_processing_is_terminal(youtube_request):
    a = StubAdapter("a", Failure(ErrorKind.TRANSPORT_FAILURE))
    b = StubAdapter("b", DeferredProcessing("needs merge"))
    c = StubAdapter("c", Direct("https://never/"))

    result = await _orchestrator(a, b, c).resolve(youtube_request)

    assert result.outcome == DeferredProcessing("needs merge")
    assert c.calls == 0
    assert len(result.attempts) == 2


async def test_empty_chain_is_unsupported():
    a = StubAdapter("a", Direct("https://never/"))
    request = ResolutionRequest(source_url="https://vimeo.com/1", platform=Platform.UNKNOWN)

    result = await _orchestrator(a).resolve(request)

    assert isinstance(result.outcome, Failure)
    assert result.outcome.kind is ErrorKind.UNSUPPORTED
    assert result.attempts == ()
    assert a.calls == 0


async def test_platform_specific_chain_order(youtube_request):
    a = StubAdapter("a", Failure(ErrorKind.TIMEOUT))
    b = StubAdapter("b", Direct("https://b/"))

    orchestrator = _orchestrator(a, b, platform_chains={Platform.YOUTUBE: ["b", "a"]})
    result = await orchestrator.resolve(youtube_request)

    assert result.outcome == Direct("https://b/")
    assert a.calls == 0


async def test_adapter_that_raises_does_not_break_the_chain(youtube_request):
    a = StubAdapter("a", raises=RuntimeError("boom"))
    b = StubAdapter("b", Direct("https://b/"))

    result = await _orchestrator(a, b).resolve(youtube_request)

    assert result.outcome == Direct("https://b/")
    first = result.attempts[0].outcome
    assert isinstance(first, Failure)
    assert first.kind is ErrorKind.UNEXPECTED_RESPONSE_SHAPE
    assert first.detail["message"] == "boom"


async def test_cancellation_stops_the_chain(youtube_request):
    a = StubAdapter("a", Failure(ErrorKind.TIMEOUT), delay_sec=10)
    b = StubAdapter("b", Direct("https://b/"))

    task = asyncio.create_task(_orchestrator(a, b).resolve(youtube_request))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert a.calls == 1
    assert b.calls == 0
