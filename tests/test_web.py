from urllib.parse import quote

import pytest

from media_resolver.domain.models import (
    CandidateItem,
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
)
from media_resolver.loader.web import create_web_app

from .conftest import StubAdapter


YT_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def make_client(aiohttp_client, make_settings):
    async def _make(*adapters, **settings_overrides):
        app = create_web_app(
            make_settings(**settings_overrides),
            adapter_factory=lambda session: list(adapters),
        )
        return await aiohttp_client(app)

    return _make


def _download_path(url=YT_URL, quality="1080p", **extra):
    path = f"/api/download?url={quote(url, safe='')}&quality={quality}"
    for k, v in extra.items():
        path += f"&{k}={v}"
    return path


async def test_timeout_then_direct_redirects(make_client):
    first = StubAdapter("slow", Failure(ErrorKind.TIMEOUT, detail={"timeoutSec": 60}))
    second = StubAdapter("fast", Direct("https://cdn.example/video.mp4"))
    client = await make_client(first, second)

    resp = await client.get(_download_path(), allow_redirects=False)

    assert resp.status == 302
    assert resp.headers["Location"] == "https://cdn.example/video.mp4"
    assert second.requests[0].requested_quality == "1080p"
    assert second.requests[0].source_url == YT_URL


async def test_all_failures_return_error_with_every_attempt(make_client):
    a = StubAdapter("a", Failure(ErrorKind.TIMEOUT, detail="x"))
    b = StubAdapter("b", Failure(ErrorKind.UPSTREAM_REJECTED, detail={"body": "y"}))
    client = await make_client(a, b)

    resp = await client.get(_download_path(), allow_redirects=False)
    body = await resp.json()

    assert resp.status >= 500
    assert body["success"] is False
    assert body["kind"] == "AllProvidersExhausted"
    assert body["error"] == "Failed to generate download link. Please try again."
    attempts = body["debug"]["attempts"]
    assert [a["provider"] for a in attempts] == ["a", "b"]
    assert attempts[0]["detail"] == "x"
    assert attempts[1]["detail"] == {"body": "y"}


async def test_candidates_as_json_choice(make_client):
    picks = Candidates(items=(CandidateItem("https://cdn/1", "video"), CandidateItem("https://cdn/2", "photo")))
    client = await make_client(StubAdapter("a", picks))

    resp = await client.get(_download_path(respond="json"))
    body = await resp.json()

    assert resp.status == 200
    assert [i["url"] for i in body["items"]] == ["https://cdn/1", "https://cdn/2"]


async def test_candidates_redirect_to_first(make_client):
    picks = Candidates(items=(CandidateItem("https://cdn/1", "video"), CandidateItem("https://cdn/2", "photo")))
    client = await make_client(StubAdapter("a", picks))

    resp = await client.get(_download_path(), allow_redirects=False)

    assert resp.status == 302
    assert resp.headers["Location"] == "https://cdn/1"


async def test_deferred_processing_is_409(make_client):
    client = await make_client(StubAdapter("a", DeferredProcessing("needs merge")))

    resp = await client.get(_download_path())
    body = await resp.json()

    assert resp.status == 409
    assert body["debug"] == "needs merge"


async def test_missing_url_is_400_without_attempts(make_client):
    adapter = StubAdapter("a", Direct("https://never/"))
    client = await make_client(adapter)

    resp = await client.get("/api/download?quality=720")
    body = await resp.json()

    assert resp.status == 400
    assert body["kind"] == "InvalidInput"
    assert adapter.calls == 0


async def test_unknown_platform_is_unsupported(make_client):
    adapter = StubAdapter("a", Direct("https://never/"))
    client = await make_client(adapter)

    resp = await client.get(_download_path(url="https://vimeo.com/123"))
    body = await resp.json()

    assert resp.status == 422
    assert body["kind"] == "Unsupported"
    assert adapter.calls == 0


async def test_health(make_client):
    client = await make_client(StubAdapter("a", Direct("u")), COBALT_BASE_URL="https://cobalt.example/")

    resp = await client.get("/api/health")
    body = await resp.json()

    assert resp.status == 200
    assert body["ok"] is True
    assert body["providers"] == ["a"]
    assert body["cobaltConfigured"] is True
    assert body["cobaltBase"] == "https://cobalt.example"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


async def test_cors_preflight(make_client):
    client = await make_client(StubAdapter("a", Direct("u")))
    resp = await client.options("/api/download")
    assert resp.status == 204
    assert "GET" in resp.headers["Access-Control-Allow-Methods"]


async def test_video_info_non_youtube(make_client):
    client = await make_client(StubAdapter("a", Direct("u")))

    resp = await client.post("/api/video-info", json={"url": "https://www.tiktok.com/@u/video/1"})
    body = await resp.json()

    assert resp.status == 200
    assert body["success"] is True
    assert body["platform"] == "TikTok"
    assert body["title"] == "TikTok Video"
    assert [q["quality"] for q in body["qualities"]] == ["1080p", "720p", "480p", "360p"]
    assert body["qualities"][1]["url"] == (
        "/api/download?url=https%3A%2F%2Fwww.tiktok.com%2F%40u%2Fvideo%2F1&quality=720"
    )
    assert body["qualities"][0]["directDownload"] is True


async def test_video_info_requires_url(make_client):
    client = await make_client(StubAdapter("a", Direct("u")))

    resp = await client.post("/api/video-info", json={})
    assert resp.status == 400

    resp = await client.post("/api/video-info", data="not json")
    assert resp.status == 400

    resp = await client.post("/api/video-info", json={"url": "ftp://example.com/x"})
    body = await resp.json()
    assert resp.status == 400
    assert body["success"] is False
