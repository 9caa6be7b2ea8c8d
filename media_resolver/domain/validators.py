from __future__ import annotations

from urllib.parse import urlparse

from .errors import ValidationError


def validate_url(url: str | None) -> str:
    u = (url or "").strip()
    if not u:
        raise ValidationError("URL required")
    if not (u.startswith("http://") or u.startswith("https://")):
        raise ValidationError("URL must start with http:// or https://")
    if " " in u:
        raise ValidationError("URL must not contain spaces")

    try:
        parsed = urlparse(u)
    except ValueError as exc:
        raise ValidationError("Malformed URL") from exc
    if not parsed.hostname:
        raise ValidationError("URL has no host")

    return u
