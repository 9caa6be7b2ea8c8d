from __future__ import annotations

from .base import AbstractProviderAdapter
from .cobalt import CobaltAdapter
from .format_api import FormatApiAdapter
from .ytdlp import YtDlpAdapter
from .registry import ProviderRegistry

__all__ = [
    "AbstractProviderAdapter",
    "CobaltAdapter",
    "FormatApiAdapter",
    "YtDlpAdapter",
    "ProviderRegistry",
]
