from __future__ import annotations

import logging
from datetime import datetime, timezone

from aiohttp import web

from media_resolver.application.dto import ErrorResult, ExternalResult, Payload, Redirect
from media_resolver.application.use_cases.resolve_download import ResolveDownloadUseCase
from media_resolver.application.use_cases.video_info import VideoInfoUseCase
from media_resolver.constants import APP_NAME, MSG_INFO_FAILED
from media_resolver.domain.errors import DomainError
from media_resolver.infrastructure.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


def render(result: ExternalResult) -> web.StreamResponse:
    if isinstance(result, Redirect):
        raise web.HTTPFound(location=result.url)
    if isinstance(result, Payload):
        return web.json_response(result.body)
    if isinstance(result, ErrorResult):
        body = {"success": False, "error": result.message}
        if result.kind is not None:
            body["kind"] = result.kind.value
        body["debug"] = result.detail
        return web.json_response(body, status=result.status)
    raise TypeError(f"Unknown result: {result!r}")


@routes.get("/api/health")
async def health(request: web.Request) -> web.Response:
    registry: ProviderRegistry = request.app["container"].get("provider_registry")
    settings = request.app["container"].settings
    return web.json_response(
        {
            "ok": True,
            "service": APP_NAME,
            "providers": registry.provider_ids,
            "cobaltConfigured": bool(settings.cobalt_base_url),
            "cobaltBase": settings.cobalt_base_url,
            "time": datetime.now(timezone.utc).isoformat(),
        }
    )


@routes.post("/api/video-info")
async def video_info(request: web.Request) -> web.Response:
    use_case: VideoInfoUseCase = request.app["container"].get("video_info_uc")

    try:
        payload = await request.json()
    except ValueError:
        return web.json_response({"success": False, "error": "Invalid JSON body"}, status=400)

    url = payload.get("url") if isinstance(payload, dict) else None
    if not isinstance(url, str):
        return web.json_response({"success": False, "error": "URL required"}, status=400)

    try:
        dto = await use_case.execute(url)
    except DomainError as exc:
        return web.json_response({"success": False, "error": str(exc)}, status=400)
    except Exception:
        logger.exception("video-info failed url=%s", url)
        return web.json_response({"success": False, "error": MSG_INFO_FAILED}, status=500)

    return web.json_response(
        {
            "success": True,
            "platform": dto.platform.display_name,
            "title": dto.title,
            "thumbnail": dto.thumbnail,
            "duration": "Available",
            "author": dto.author,
            "qualities": [
                {
                    "quality": q.quality,
                    "format": q.format,
                    "url": q.url,
                    "directDownload": q.direct_download,
                }
                for q in dto.qualities
            ],
            "note": dto.note,
        }
    )


@routes.get("/api/download")
async def download(request: web.Request) -> web.StreamResponse:
    use_case: ResolveDownloadUseCase = request.app["container"].get("resolve_download_uc")

    url = request.query.get("url")
    quality = request.query.get("quality")
    want_choice = request.query.get("respond", "").lower() == "json"

    result = await use_case.execute(url=url, quality=quality, want_choice=want_choice)
    return render(result)
