from __future__ import annotations


APP_NAME: str = "video-downloader-backend"

# User-facing, short, user-safe messages (details go to "debug")
MSG_RESOLVE_FAILED: str = "Failed to generate download link. Please try again."
MSG_UNSUPPORTED: str = "This platform is not supported."
MSG_DEFERRED: str = "This media needs local processing (merging streams), which this backend does not handle."
MSG_INFO_FAILED: str = "Failed to fetch video info"
MSG_OEMBED_NOTE: str = "Could not fetch full metadata, but download may still work."
MSG_LIMITED_NOTE: str = "Metadata may be limited for this platform, but download can still work."

PLACEHOLDER_THUMBNAIL: str = "https://via.placeholder.com/480x270/667eea/ffffff?text=Video"
YOUTUBE_OEMBED_URL: str = "https://www.youtube.com/oembed"
INFO_QUALITIES: tuple[str, ...] = ("1080", "720", "480", "360")
