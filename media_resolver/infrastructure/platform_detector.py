from __future__ import annotations

from urllib.parse import urlparse

from media_resolver.domain.models import Platform


def _matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


class PlatformDetector:
    """
    URL -> Platform.
    Stateless and deterministic. Never raises: anything unrecognised is UNKNOWN.
    """

    def detect(self, url: str) -> Platform:
        try:
            parsed = urlparse((url or "").strip())
            host = (parsed.hostname or "").lower()
        except ValueError:
            return Platform.UNKNOWN

        if not host:
            return Platform.UNKNOWN

        if host.startswith("www."):
            host = host[4:]
        if host.startswith("m."):
            host = host[2:]

        if "youtube" in host or _matches(host, "youtu.be"):
            return Platform.YOUTUBE

        if _matches(host, "instagram.com"):
            return Platform.INSTAGRAM

        if _matches(host, "facebook.com") or _matches(host, "fb.watch") or _matches(host, "fb.com"):
            return Platform.FACEBOOK

        if _matches(host, "tiktok.com"):
            return Platform.TIKTOK

        if _matches(host, "twitter.com") or _matches(host, "x.com"):
            return Platform.TWITTER_X

        return Platform.UNKNOWN
