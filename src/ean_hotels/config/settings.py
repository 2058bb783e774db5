"""Runtime configuration for the EAN hotel client.

Relies on pydantic-settings so that environment variables (prefixed with ``EAN_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class EANSettings(BaseSettings):
    """Credentials and connection options for the EAN hotel API."""

    cid: str = Field(description="EAN customer/partner identifier")
    api_key: str = Field(description="EAN hotel API key")
    minor_rev: int = Field(description="API minor revision sent with every request")

    base_url: str = Field(
        default="http://api.ean.com",
        description="Host serving the /ean-services REST endpoints",
    )
    timeout_s: float = Field(default=30.0, description="Per-request timeout in seconds")
    user_agent: str = Field(default="ean-hotel-client/0.1.0")
    locale: Optional[str] = Field(default=None, description="e.g. 'en_US'; omitted when unset")
    currency_code: Optional[str] = Field(default=None, description="e.g. 'USD'; omitted when unset")

    log_level: str = Field(default="INFO")
    log_dir: Optional[Path] = Field(default=None, description="Write ean_hotels.log here when set")
    download_dir: Path = Field(default=Path("data/downloads"))

    model_config = SettingsConfigDict(
        env_prefix="EAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("cid", "api_key", mode="before")
    def _strip_credential(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("credential must not be blank")
        return value

    @field_validator("base_url")
    def _trim_base_url(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_s must be positive")
        return value

    @field_validator("log_dir", mode="before")
    def _expand_log_dir(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("download_dir", mode="before")
    def _expand_download_dir(cls, value: str | Path) -> Path:  # noqa: D401
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.download_dir.mkdir(parents=True, exist_ok=True)
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def credentials(self) -> dict[str, object]:
        return {
            "cid": self.cid,
            "apiKey": self.api_key,
            "minorRev": self.minor_rev,
        }

    def common_params(self) -> dict[str, object]:
        """Parameters appended to every request, including optional locale/currency."""
        params = self.credentials()
        if self.locale:
            params["locale"] = self.locale
        if self.currency_code:
            params["currencyCode"] = self.currency_code
        return params
