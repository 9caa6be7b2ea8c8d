from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from yt_dlp import YoutubeDL

from media_resolver.domain.policies import FormatEntry, height_label
from .ydl_config import YdlConfig


log = logging.getLogger(__name__)


class YdlError(RuntimeError):
    pass


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _safe_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _has(codec: Any) -> bool:
    return codec not in (None, "none")


def _is_plain_http(f: Dict[str, Any]) -> bool:
    protocol = str(f.get("protocol") or "https")
    return protocol in ("http", "https")


@dataclass(frozen=True, slots=True)
class ExtractedFormats:
    """
    What the extractor knows about a URL, reduced to what resolution needs.
    """
    progressive: List[FormatEntry] = field(default_factory=list)
    split_streams: bool = False
    direct_url: str | None = None


@dataclass(frozen=True)
class YdlClient:
    cfg: YdlConfig = field(default_factory=YdlConfig)

    async def extract_info(self, url: str) -> Dict[str, Any]:
        def _extract() -> Dict[str, Any]:
            with YoutubeDL(self.cfg.to_opts()) as ydl:
                info = ydl.extract_info(url, download=False)
                if not isinstance(info, dict):
                    raise YdlError("yt-dlp returned no metadata")
                return ydl.sanitize_info(info)

        try:
            return await asyncio.to_thread(_extract)
        except YdlError:
            raise
        except Exception as e:
            log.warning("yt-dlp extract failed: %s", e)
            raise YdlError(str(e)) from e

    def build_formats(self, info: Dict[str, Any]) -> ExtractedFormats:
        formats = info.get("formats")
        if not isinstance(formats, list) or not formats:
            direct = info.get("url")
            return ExtractedFormats(direct_url=str(direct) if direct else None)

        progressive: list[FormatEntry] = []
        video_only = 0
        audio_only = 0

        for f in formats:
            if not isinstance(f, dict):
                continue
            has_video = _has(f.get("vcodec"))
            has_audio = _has(f.get("acodec"))

            if has_video and not has_audio:
                video_only += 1
                continue
            if has_audio and not has_video:
                audio_only += 1
                continue

            height = _safe_int(f.get("height"))
            if not (has_video and has_audio) or height <= 0:
                continue
            if not f.get("url") or not _is_plain_http(f):
                continue

            progressive.append(
                FormatEntry(
                    height=height,
                    url=str(f["url"]),
                    label=height_label(height),
                    bitrate_kbps=_safe_float(f.get("tbr")),
                )
            )

        return ExtractedFormats(
            progressive=progressive,
            split_streams=video_only > 0 and audio_only > 0,
        )
