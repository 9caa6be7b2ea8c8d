import logging
import sys

from loguru import logger

from media_resolver.config.settings import get_settings
from media_resolver.constants import APP_NAME

# "orchestrator" and "http" sit outside the package namespace.
SERVICE_LOGGERS = ("media_resolver", APP_NAME, "orchestrator", "http")
LIBRARY_LOGGERS = ("aiohttp", "aiohttp.access", "asyncio")


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str | None = None) -> None:
    level = level or get_settings().log_level

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level if level != "TRACE" else "DEBUG")

    for name in SERVICE_LOGGERS + LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.root.level)

    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>",
        backtrace=True,
        diagnose=False,
    )

    logger.info("Logging configured: level={}", level)
