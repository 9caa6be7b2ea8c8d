from __future__ import annotations

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
