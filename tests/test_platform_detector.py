import pytest

from media_resolver.domain.models import Platform
from media_resolver.infrastructure.platform_detector import PlatformDetector


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://youtu.be/abc123", Platform.YOUTUBE),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", Platform.YOUTUBE),
        ("https://m.youtube.com/shorts/xyz", Platform.YOUTUBE),
        ("https://music.youtube.com/watch?v=1", Platform.YOUTUBE),
        ("https://www.instagram.com/reel/Cabc/", Platform.INSTAGRAM),
        ("https://www.facebook.com/watch/?v=1", Platform.FACEBOOK),
        ("https://fb.watch/abc/", Platform.FACEBOOK),
        ("https://vm.tiktok.com/ZM123/", Platform.TIKTOK),
        ("https://twitter.com/user/status/1", Platform.TWITTER_X),
        ("https://x.com/user/status/1", Platform.TWITTER_X),
        ("https://vimeo.com/123", Platform.UNKNOWN),
    ],
)
def test_detect_known_hosts(url, expected):
    assert PlatformDetector().detect(url) is expected


def test_lookalike_hosts_are_not_matched():
    detector = PlatformDetector()
    assert detector.detect("https://notx.com/status/1") is Platform.UNKNOWN
    assert detector.detect("https://mytiktok.com.evil/") is Platform.UNKNOWN


@pytest.mark.parametrize("url", ["not a url", "", "http://", "https://[::1", None])
def test_unparseable_input_is_unknown(url):
    assert PlatformDetector().detect(url) is Platform.UNKNOWN


def test_detect_is_pure():
    detector = PlatformDetector()
    url = "https://youtu.be/abc123"
    assert detector.detect(url) == detector.detect(url) == Platform.YOUTUBE
