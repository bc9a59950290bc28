"""Frame metadata document.

Assembles the document a frames v2 app serves from /.well-known/farcaster.json:
the optional account association plus the frame descriptor. Without an
association the document is still valid, the frame is just unsigned.
"""

import json
import logging
from typing import Literal, Optional

from eth_account.signers.local import LocalAccount
from pydantic import BaseModel, ConfigDict, Field

from social.farcaster.quickstart.manifest.association import (
    AccountAssociation,
    build_manifest,
)

logger = logging.getLogger(__name__)

DEFAULT_FRAME_NAME = "Frames v2 Demo"
DEFAULT_BUTTON_TITLE = "Launch Frame"
DEFAULT_SPLASH_BACKGROUND_COLOR = "#f7f7f7"
NEYNAR_WEBHOOK_URL = "https://api.neynar.com/f/app/{client_id}/event"


class FrameConfig(BaseModel):
    """User-facing frame settings, with URLs defaulting to assets on the domain."""

    name: str = DEFAULT_FRAME_NAME
    button_title: str = DEFAULT_BUTTON_TITLE
    icon_url: Optional[str] = None
    splash_image_url: Optional[str] = None
    splash_background_color: str = DEFAULT_SPLASH_BACKGROUND_COLOR


class Frame(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: Literal["1"] = "1"
    name: str
    icon_url: str = Field(alias="iconUrl")
    home_url: str = Field(alias="homeUrl")
    image_url: str = Field(alias="imageUrl")
    button_title: str = Field(alias="buttonTitle")
    splash_image_url: str = Field(alias="splashImageUrl")
    splash_background_color: str = Field(alias="splashBackgroundColor")
    webhook_url: str = Field(alias="webhookUrl")


class FarcasterMetadata(BaseModel):
    """The /.well-known/farcaster.json document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    account_association: Optional[AccountAssociation] = Field(
        default=None, alias="accountAssociation"
    )
    frame: Frame

    @property
    def signed(self) -> bool:
        return self.account_association is not None

    def to_json(self, indent: Optional[int] = None) -> str:
        document = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if indent is None:
            return json.dumps(document, separators=(",", ":"))
        return json.dumps(document, indent=indent)

    def to_env_line(self) -> str:
        """Render the document as the FRAME_METADATA environment variable."""
        return f"FRAME_METADATA={self.to_json()}"


def default_webhook_url(
    domain: str, api_key: Optional[str] = None, client_id: Optional[str] = None
) -> str:
    """Pick the webhook URL for frame events.

    Neynar receives the events when both an API key and a client id are
    configured, otherwise the frame app handles them itself.
    """
    if api_key and client_id:
        return NEYNAR_WEBHOOK_URL.format(client_id=client_id)
    return f"https://{domain}/api/webhook"


def build_frame(
    config: FrameConfig, domain: str, webhook_url: Optional[str] = None
) -> Frame:
    base_url = f"https://{domain}"
    return Frame(
        name=config.name,
        icon_url=config.icon_url or f"{base_url}/icon.png",
        home_url=base_url,
        image_url=f"{base_url}/opengraph-image",
        button_title=config.button_title,
        splash_image_url=config.splash_image_url or f"{base_url}/splash.png",
        splash_background_color=config.splash_background_color,
        webhook_url=webhook_url or default_webhook_url(domain),
    )


def build_frame_metadata(
    config: FrameConfig,
    domain: str,
    webhook_url: Optional[str] = None,
    association: Optional[AccountAssociation] = None,
) -> FarcasterMetadata:
    """Assemble the frame metadata document.

    Args:
        config: Frame settings
        domain: Normalised deployment domain
        webhook_url: Webhook URL, passed through untouched when given
        association: Signed account association, None for an unsigned frame

    Returns:
        FarcasterMetadata ready to be serialised
    """
    if association is None:
        logger.warning("Frame metadata for %s is unsigned", domain)
    return FarcasterMetadata(
        account_association=association,
        frame=build_frame(config, domain, webhook_url),
    )


def build_signed_frame_metadata(
    fid: int,
    account: LocalAccount,
    domain: str,
    webhook_url: Optional[str],
    config: FrameConfig,
) -> FarcasterMetadata:
    """Sign the account association for a domain and wrap it in frame metadata.

    Raises:
        SigningError: If signing fails
    """
    association = build_manifest(fid, account, domain, webhook_url)
    return build_frame_metadata(config, domain, webhook_url, association)
