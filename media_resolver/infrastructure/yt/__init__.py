from __future__ import annotations

from .ydl_client import ExtractedFormats, YdlClient, YdlError
from .ydl_config import YdlConfig

__all__ = ["ExtractedFormats", "YdlClient", "YdlError", "YdlConfig"]
