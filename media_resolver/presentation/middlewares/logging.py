from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from aiohttp import web

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

_logger = logging.getLogger("http")


@web.middleware
async def logging_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    started = time.monotonic()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as exc:
        status = exc.status
        raise
    finally:
        _logger.info(
            "%s %s -> %s (%.0fms)",
            request.method,
            request.path,
            status,
            (time.monotonic() - started) * 1000.0,
        )
