"""Farcaster custody account derivation.

Derives the custody account from a BIP-39 recovery phrase using the default
Ethereum derivation path, matching what Farcaster wallets produce.
"""

import logging
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError

from social.farcaster.quickstart.errors import InvalidPhrase

logger = logging.getLogger(__name__)

CUSTODY_DERIVATION_PATH = "m/44'/60'/0'/0/0"

Account.enable_unaudited_hdwallet_features()


def normalize_phrase(phrase: Optional[str]) -> str:
    """Collapse whitespace in a recovery phrase.

    Args:
        phrase: Recovery phrase as typed by the user

    Returns:
        Words joined by single spaces, empty string if nothing was given
    """
    if phrase is None:
        return ""
    return " ".join(phrase.split())


def derive_account(phrase: Optional[str]) -> LocalAccount:
    """Derive the custody account for a recovery phrase.

    Derivation is deterministic: the same phrase always yields the same
    account. Nothing is returned when the phrase is rejected.

    Args:
        phrase: BIP-39 recovery phrase

    Returns:
        LocalAccount able to sign messages with the custody key

    Raises:
        InvalidPhrase: If the phrase is empty, has the wrong word count, contains
            unknown words or fails the checksum
    """
    words = normalize_phrase(phrase)
    if len(words) == 0:
        raise InvalidPhrase("Seed phrase cannot be empty")

    try:
        account = Account.from_mnemonic(
            words, account_path=CUSTODY_DERIVATION_PATH
        )
    except (ValidationError, ValueError):
        # The underlying message repeats the words back, keep it out of logs.
        raise InvalidPhrase() from None

    logger.debug("Derived custody account %s", account.address)
    return account
