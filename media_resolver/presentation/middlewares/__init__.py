from .cors import cors_middleware
from .logging import logging_middleware

__all__ = ["cors_middleware", "logging_middleware"]
