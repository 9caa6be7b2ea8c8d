from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    # Web server
    webapp_host: str = Field(default="0.0.0.0", alias="WEBAPP_HOST")
    webapp_port: int = Field(default=5000, alias="PORT")
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")

    # Cobalt
    cobalt_base_url: Optional[str] = Field(default=None, alias="COBALT_BASE_URL")
    cobalt_api_key: Optional[str] = Field(default=None, alias="COBALT_API_KEY")
    cobalt_timeout_sec: float = Field(default=60.0, alias="COBALT_TIMEOUT_SEC", gt=0)

    # Format-list metadata service
    format_api_base_url: Optional[str] = Field(default=None, alias="FORMAT_API_BASE_URL")
    format_api_path: str = Field(default="/formats", alias="FORMAT_API_PATH")
    format_api_key: Optional[str] = Field(default=None, alias="FORMAT_API_KEY")
    format_api_timeout_sec: float = Field(default=30.0, alias="FORMAT_API_TIMEOUT_SEC", gt=0)

    # Local yt-dlp
    ytdlp_enabled: bool = Field(default=True, alias="YTDLP_ENABLED")
    ytdlp_timeout_sec: float = Field(default=45.0, alias="YTDLP_TIMEOUT_SEC", gt=0)

    # Provider order. None => every configured provider in the built-in order.
    provider_chain: Optional[List[str]] = Field(default=None, alias="PROVIDER_CHAIN")
    platform_providers: Dict[str, List[str]] = Field(default_factory=dict, alias="PLATFORM_PROVIDERS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        frozen = True

    @field_validator("cobalt_base_url", "format_api_base_url")
    @classmethod
    def _strip_base_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @field_validator("cobalt_api_key", "format_api_key")
    @classmethod
    def _blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.strip().upper()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE"}
        if level not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL={v!r}. Allowed: {sorted(allowed)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
