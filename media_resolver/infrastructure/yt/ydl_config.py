from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class YdlConfig:
    """
    Centralized yt-dlp config.
    IMPORTANT: metadata extraction only. Nothing is downloaded or merged.
    """

    # Networking / robustness
    socket_timeout_sec: int = 15
    retries: int = 1
    extractor_retries: int = 1

    # Behavior
    quiet: bool = True
    no_warnings: bool = True
    noplaylist: bool = True

    def to_opts(self) -> dict:
        return {
            "quiet": self.quiet,
            "no_warnings": self.no_warnings,
            "noprogress": True,
            "noplaylist": self.noplaylist,
            "socket_timeout": self.socket_timeout_sec,
            "retries": self.retries,
            "extractor_retries": self.extractor_retries,
            "skip_download": True,
        }
