import asyncio

import uvloop
from aiohttp import web
from loguru import logger

from media_resolver.config.settings import get_settings
from media_resolver.loader.logging import setup_logging
from media_resolver.loader.web import create_web_app


def main():
    uvloop.install()
    setup_logging()
    settings = get_settings()

    logger.info("Starting app on {}:{}", settings.webapp_host, settings.webapp_port)

    async def _run():
        app = create_web_app(settings)
        # Client disconnect cancels the handler, so no further providers are tried.
        runner = web.AppRunner(app, handler_cancellation=True)
        await runner.setup()
        site = web.TCPSite(runner, host=settings.webapp_host, port=settings.webapp_port)
        await site.start()
        logger.info("App started, health check: http://localhost:{}/api/health", settings.webapp_port)
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            await runner.cleanup()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
