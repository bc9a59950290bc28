"""
Account association encoding and signing.

Builds the three-segment {header, payload, signature} structure that Farcaster
clients fetch from a frame's domain to confirm which FID owns it. Header and
payload are serialised as compact JSON in declaration order and encoded as
unpadded base64url, so the same inputs always produce the same segments. The
signature is an EIP-191 personal_sign over "header.payload" by the custody key.
"""

import logging
from typing import Literal, Optional

from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from jwcrypto.common import base64url_decode, base64url_encode
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from social.farcaster.quickstart.errors import SigningError

logger = logging.getLogger(__name__)

CUSTODY_KEY_TYPE = "custody"


class ManifestHeader(BaseModel):
    """Identifies the FID and the key that signed the association."""

    model_config = ConfigDict(frozen=True)

    fid: StrictInt = Field(gt=0)
    type: Literal["custody"] = CUSTODY_KEY_TYPE
    key: str = Field(min_length=1)


class ManifestPayload(BaseModel):
    """The domain the FID claims."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(min_length=1)


class AccountAssociation(BaseModel):
    """Signed account association, each segment base64url encoded."""

    model_config = ConfigDict(frozen=True)

    header: str
    payload: str
    signature: str

    def signed_message(self) -> str:
        return f"{self.header}.{self.payload}"


def encode_segment(model: BaseModel) -> str:
    """Serialise a model to compact JSON and encode it as unpadded base64url."""
    return base64url_encode(model.model_dump_json())


def decode_segment(segment: str) -> bytes:
    """Decode a base64url segment.

    Padded standard base64 is accepted as well, which is how older tooling
    encoded the header.
    """
    normalized = segment.strip().rstrip("=").replace("+", "-").replace("/", "_")
    return base64url_decode(normalized)


def decode_header(association: AccountAssociation) -> ManifestHeader:
    return ManifestHeader.model_validate_json(decode_segment(association.header))


def decode_payload(association: AccountAssociation) -> ManifestPayload:
    return ManifestPayload.model_validate_json(decode_segment(association.payload))


def decode_signature(association: AccountAssociation) -> str:
    """Return the 0x-prefixed hex signature carried by the association."""
    return decode_segment(association.signature).decode("utf-8")


def sign_message(account: LocalAccount, message: str) -> str:
    """Sign a message with EIP-191 personal_sign.

    Args:
        account: Custody account holding the private key
        message: Text to sign

    Returns:
        0x-prefixed hex encoding of the 65 byte signature

    Raises:
        SigningError: If the account cannot produce a signature
    """
    try:
        signed = account.sign_message(encode_defunct(text=message))
    except Exception as e:
        raise SigningError(f"Unable to sign account association: {e}") from e
    return "0x" + bytes(signed.signature).hex()


def build_manifest(
    fid: int,
    account: LocalAccount,
    domain: str,
    webhook_url: Optional[str] = None,
) -> AccountAssociation:
    """Build and sign the account association for a domain.

    Args:
        fid: FID the custody account is registered to
        account: Custody account derived from the recovery phrase
        domain: Domain the frame is deployed on
        webhook_url: Webhook URL of the frame. It is not part of the signed
            message and only travels on to the frame metadata

    Returns:
        AccountAssociation with encoded header, payload and signature

    Raises:
        ValueError: If fid is not a positive integer or domain is empty
        SigningError: If signing fails
    """
    header = ManifestHeader(fid=fid, key=account.address)
    payload = ManifestPayload(domain=domain)

    encoded_header = encode_segment(header)
    encoded_payload = encode_segment(payload)

    signature = sign_message(account, f"{encoded_header}.{encoded_payload}")

    # The signature segment encodes the hex text, not the raw signature bytes.
    encoded_signature = base64url_encode(signature)

    logger.info("Signed account association for fid %d on %s", fid, domain)
    if webhook_url is not None:
        logger.debug("Frame webhook for %s is %s (unsigned)", domain, webhook_url)
    return AccountAssociation(
        header=encoded_header,
        payload=encoded_payload,
        signature=encoded_signature,
    )
