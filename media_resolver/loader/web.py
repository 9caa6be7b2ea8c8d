from __future__ import annotations

from typing import AsyncIterator, Callable, Optional

import aiohttp
from aiohttp import web
from loguru import logger

from media_resolver.config.settings import AppSettings, get_settings
from media_resolver.di import Container, build_graph
from media_resolver.infrastructure.providers import AbstractProviderAdapter
from media_resolver.presentation.middlewares import cors_middleware, logging_middleware
from media_resolver.presentation.routes import routes

AdapterFactory = Callable[[aiohttp.ClientSession], list[AbstractProviderAdapter]]


def create_web_app(
    settings: Optional[AppSettings] = None,
    *,
    adapter_factory: Optional[AdapterFactory] = None,
) -> web.Application:
    settings = settings or get_settings()

    app = web.Application(
        middlewares=[
            cors_middleware(allow_origin=settings.cors_allow_origin),
            logging_middleware,
        ]
    )

    async def dependencies(app: web.Application) -> AsyncIterator[None]:
        session = aiohttp.ClientSession()
        try:
            container = Container.build(settings)
            adapters = adapter_factory(session) if adapter_factory is not None else None
            build_graph(container, session=session, adapters=adapters)
            app["container"] = container
            logger.info("Dependency graph built")
            yield
        finally:
            await session.close()
            logger.info("HTTP session closed")

    app.cleanup_ctx.append(dependencies)
    app.add_routes(routes)

    return app
