"""Farcaster FID resolution by custody address.

Looks up the FID registered to a custody address through the Neynar directory
and drives the caller-controlled retry loop around derive and resolve.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Literal, Optional, Union

import aiohttp
import sentry_sdk
from aiohttp import ClientSession
from eth_account.signers.local import LocalAccount
from pydantic import BaseModel, ConfigDict

from social.farcaster.quickstart.account.custody import derive_account
from social.farcaster.quickstart.errors import (
    MissingCredential,
    NotFound,
    ResolutionError,
    TransportOrServerError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.neynar.com"
DEFAULT_LOOKUP_TIMEOUT = 15.0
CUSTODY_ADDRESS_PATH = "/v2/farcaster/user/custody-address"


class Resolved(BaseModel):
    """A recovery phrase that resolved to a registered FID.

    Holds the account derived in the successful attempt only.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: Literal["resolved"] = "resolved"
    fid: int
    account: LocalAccount

    @property
    def address(self) -> str:
        return self.account.address


class Declined(BaseModel):
    """The caller gave up on resolution; the flow continues unsigned."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: Literal["declined"] = "declined"
    reason: Optional[ResolutionError] = None


ResolutionOutcome = Union[Resolved, Declined]

AskRetry = Callable[
    [ResolutionError], Union[Optional[str], Awaitable[Optional[str]]]
]


def extract_fid(body: Any) -> Optional[int]:
    """Pull a positive FID out of a custody-address lookup response.

    Args:
        body: Decoded JSON response body

    Returns:
        FID if the body has a positive integer user.fid, None otherwise
    """
    if not isinstance(body, dict):
        return None
    user = body.get("user", None)
    if not isinstance(user, dict):
        return None
    fid = user.get("fid", None)
    if isinstance(fid, bool) or not isinstance(fid, int) or fid <= 0:
        return None
    return fid


async def resolve_fid(
    session: ClientSession,
    address: str,
    api_key: Optional[str],
    api_base: str = DEFAULT_API_BASE,
    timeout: float = DEFAULT_LOOKUP_TIMEOUT,
) -> int:
    """Resolve a custody address to its FID.

    Args:
        session: HTTP client session
        address: Custody address to look up
        api_key: Neynar API key
        api_base: Base URL of the directory API
        timeout: Total request timeout in seconds

    Returns:
        The FID registered to the custody address

    Raises:
        MissingCredential: If no API key is given; no request is made
        NotFound: If the address has no FID
        TransportOrServerError: On network failure, timeout, malformed body or
            a non-2xx status
    """
    if not api_key:
        raise MissingCredential()

    url = f"{api_base.rstrip('/')}{CUSTODY_ADDRESS_PATH}"
    headers = {"x-api-key": api_key, "accept": "application/json"}

    try:
        async with session.get(
            url,
            params={"custody_address": address},
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if resp.status == 404:
                raise NotFound(address)
            if resp.status < 200 or resp.status >= 300:
                raise TransportOrServerError(
                    f"FID lookup failed with status {resp.status}",
                    status=resp.status,
                )
            body = await resp.json()
    except asyncio.TimeoutError as e:
        sentry_sdk.capture_exception(e)
        raise TransportOrServerError(
            f"FID lookup timed out after {timeout} seconds"
        ) from e
    except aiohttp.ClientError as e:
        sentry_sdk.capture_exception(e)
        raise TransportOrServerError(f"FID lookup failed: {e}") from e
    except ValueError as e:
        raise TransportOrServerError(f"FID lookup returned invalid JSON: {e}") from e

    fid = extract_fid(body)
    if fid is None:
        raise NotFound(address)

    logger.info("Resolved custody address %s to fid %d", address, fid)
    return fid


async def resolve_custody(
    session: ClientSession,
    phrase: Optional[str],
    api_key: Optional[str],
    api_base: str = DEFAULT_API_BASE,
    timeout: float = DEFAULT_LOOKUP_TIMEOUT,
) -> Resolved:
    """Derive the custody account for a phrase and resolve its FID.

    Raises:
        ResolutionError: Any of InvalidPhrase, MissingCredential, NotFound or
            TransportOrServerError
    """
    account = derive_account(phrase)
    fid = await resolve_fid(session, account.address, api_key, api_base, timeout)
    return Resolved(fid=fid, account=account)


async def resolve_with_retry(
    session: ClientSession,
    phrase: Optional[str],
    api_key: Optional[str],
    ask_retry: AskRetry,
    api_base: str = DEFAULT_API_BASE,
    timeout: float = DEFAULT_LOOKUP_TIMEOUT,
) -> ResolutionOutcome:
    """Resolve a phrase, asking the caller for another one after each failure.

    Every attempt starts from scratch with the new phrase. There is no limit on
    attempts; the loop ends when resolution succeeds or ask_retry returns an
    empty value. A missing API key ends the loop immediately because no phrase
    can fix it.

    Args:
        session: HTTP client session
        phrase: First recovery phrase to try
        api_key: Neynar API key
        ask_retry: Called with the failure, returns (or awaits to) the next
            phrase or None
        api_base: Base URL of the directory API
        timeout: Total request timeout in seconds per attempt

    Returns:
        Resolved with the FID and account of the successful attempt, or Declined
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await resolve_custody(session, phrase, api_key, api_base, timeout)
        except MissingCredential as e:
            logger.warning("Skipping FID lookup: %s", e)
            return Declined(reason=e)
        except ResolutionError as e:
            logger.warning("Custody resolution attempt %d failed: %s", attempt, e)
            phrase = ask_retry(e)
            if inspect.isawaitable(phrase):
                phrase = await phrase
            if not phrase or len(phrase.strip()) == 0:
                logger.info("Custody resolution declined after %d attempt(s)", attempt)
                return Declined(reason=e)
