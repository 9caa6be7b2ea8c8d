from __future__ import annotations

import asyncio
import logging
import re
from urllib.parse import quote

import aiohttp

from media_resolver.application.dto import QualityLinkDTO, VideoInfoDTO
from media_resolver.application.use_cases.parse_link import ParseLinkUseCase
from media_resolver.constants import (
    INFO_QUALITIES,
    MSG_LIMITED_NOTE,
    MSG_OEMBED_NOTE,
    PLACEHOLDER_THUMBNAIL,
    YOUTUBE_OEMBED_URL,
)
from media_resolver.domain.models import Platform

logger = logging.getLogger(__name__)

_YT_ID_RX = re.compile(
    r"(?:youtu\.be/|youtube\.com/(?:embed/|v/|shorts/|watch\?v=|watch\?.+&v=))([^&\n?#/]+)"
)


def extract_youtube_id(url: str) -> str | None:
    m = _YT_ID_RX.search(url)
    return m.group(1) if m else None


def build_quality_links(url: str) -> list[QualityLinkDTO]:
    encoded = quote(url, safe="")
    return [
        QualityLinkDTO(
            quality=f"{q}p",
            format="mp4",
            url=f"/api/download?url={encoded}&quality={q}",
        )
        for q in INFO_QUALITIES
    ]


class VideoInfoUseCase:
    """
    Lightweight metadata for the UI: title/author/thumbnail (oEmbed for
    YouTube) and one download link per offered quality.
    """

    def __init__(
        self,
        *,
        parse_link: ParseLinkUseCase,
        session: aiohttp.ClientSession,
        oembed_url: str = YOUTUBE_OEMBED_URL,
        oembed_timeout_sec: float = 15.0,
    ) -> None:
        self._parse_link = parse_link
        self._session = session
        self._oembed_url = oembed_url
        self._timeout = aiohttp.ClientTimeout(total=oembed_timeout_sec)

    async def execute(self, raw_url: str | None) -> VideoInfoDTO:
        parsed = self._parse_link.execute(raw_url)
        platform = parsed.platform

        title = "Video"
        author = ""
        thumbnail = ""
        note = ""

        yt_id = extract_youtube_id(parsed.url)
        if platform is Platform.YOUTUBE and yt_id:
            thumbnail = f"https://img.youtube.com/vi/{yt_id}/maxresdefault.jpg"
            meta = await self._fetch_oembed(parsed.url)
            if meta is None:
                note = MSG_OEMBED_NOTE
            else:
                title = meta.get("title") or title
                author = meta.get("author_name") or author
        else:
            title = f"{platform.display_name} Video"
            note = MSG_LIMITED_NOTE

        return VideoInfoDTO(
            platform=platform,
            title=title,
            author=author,
            thumbnail=thumbnail or PLACEHOLDER_THUMBNAIL,
            qualities=build_quality_links(parsed.url),
            note=note,
        )

    async def _fetch_oembed(self, url: str) -> dict | None:
        try:
            async with self._session.get(
                self._oembed_url,
                params={"url": url, "format": "json"},
                timeout=self._timeout,
            ) as resp:
                if resp.status != 200:
                    logger.info("oembed status=%s url=%s", resp.status, url)
                    return None
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.info("oembed failed url=%s: %r", url, exc)
            return None
        return data if isinstance(data, dict) else None
