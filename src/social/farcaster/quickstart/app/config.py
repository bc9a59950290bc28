"""
Configuration Module for the Frames Quickstart

This module defines the settings used to resolve custody accounts and build frame
metadata, loaded with Pydantic from environment variables and from the project's
.env and .env.local files.

The configuration follows these principles:
1. Environment-based configuration with sensible defaults
2. Strong validation and typing through Pydantic
3. Secrets (API key, recovery phrase) held as SecretStr so they never appear in
   logs or reprs

Environment variable names match the ones the scaffolded frame app reads, so the
same .env file drives both the app and this tool.
"""

from typing import Optional
import logging

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from social.farcaster.quickstart.manifest.frame import (
    DEFAULT_BUTTON_TITLE,
    DEFAULT_FRAME_NAME,
    DEFAULT_SPLASH_BACKGROUND_COLOR,
    FrameConfig,
    default_webhook_url,
)
from social.farcaster.quickstart.resolve.fid import (
    DEFAULT_API_BASE,
    DEFAULT_LOOKUP_TIMEOUT,
)


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Settings for the frames quickstart tool.

    Values are read from environment variables first, then .env and .env.local
    (later files win). Frame fields use the NEXT_PUBLIC_* names of the frame app.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
        populate_by_name=True,
    )

    debug: bool = False
    """
    Enable debug logging.
    Set with DEBUG=true environment variable.
    """

    neynar_api_key: Optional[SecretStr] = None
    """
    API key for the Neynar directory, sent as x-api-key.
    Set with NEYNAR_API_KEY environment variable.
    """

    neynar_client_id: Optional[str] = None
    """
    Neynar app client id. Together with the API key, frame events are sent to
    Neynar's webhook for this app instead of the frame's own /api/webhook.
    Set with NEYNAR_CLIENT_ID environment variable.
    """

    neynar_api_base: str = DEFAULT_API_BASE
    """
    Base URL of the Neynar API.
    Set with NEYNAR_API_BASE environment variable.
    """

    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    """
    Total timeout in seconds for a single FID lookup.
    Set with LOOKUP_TIMEOUT environment variable.
    """

    seed_phrase: Optional[SecretStr] = None
    """
    Custody account recovery phrase. Optional, the CLI prompts when not set.
    Set with SEED_PHRASE environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    # Frame descriptor settings shared with the frame app
    frame_name: str = Field(alias="NEXT_PUBLIC_FRAME_NAME", default=DEFAULT_FRAME_NAME)
    frame_button_text: str = Field(
        alias="NEXT_PUBLIC_FRAME_BUTTON_TEXT", default=DEFAULT_BUTTON_TITLE
    )
    frame_icon_image_url: Optional[str] = Field(
        alias="NEXT_PUBLIC_FRAME_ICON_IMAGE_URL", default=None
    )
    frame_splash_image_url: Optional[str] = Field(
        alias="NEXT_PUBLIC_FRAME_SPLASH_IMAGE_URL", default=None
    )

    @field_validator("lookup_timeout")
    @classmethod
    def check_lookup_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("lookup_timeout must be positive")
        return v

    @field_validator("frame_icon_image_url", "frame_splash_image_url", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v):
        """
        Treat empty values as unset.

        Older scaffolding wrote the literal string "null" when no image URL was
        given, so that is treated as unset too.
        """
        if v is None:
            return None
        if isinstance(v, str) and v.strip() in ("", "null"):
            return None
        return v

    def api_key(self) -> Optional[str]:
        if self.neynar_api_key is None:
            return None
        return self.neynar_api_key.get_secret_value()

    def recovery_phrase(self) -> Optional[str]:
        if self.seed_phrase is None:
            return None
        return self.seed_phrase.get_secret_value()

    def webhook_url(self, domain: str) -> str:
        return default_webhook_url(domain, self.api_key(), self.neynar_client_id)

    def frame_config(self) -> FrameConfig:
        return FrameConfig(
            name=self.frame_name,
            button_title=self.frame_button_text,
            icon_url=self.frame_icon_image_url,
            splash_image_url=self.frame_splash_image_url,
            splash_background_color=DEFAULT_SPLASH_BACKGROUND_COLOR,
        )
