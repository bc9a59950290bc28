"""Error taxonomy for custody resolution and manifest signing.

Resolution errors are recoverable: the retry protocol catches them and asks the
caller for another recovery phrase. SigningError is fatal and is never retried.
"""

from typing import Optional


class QuickstartError(Exception):
    """Base class for all errors raised by the quickstart core."""


class ResolutionError(QuickstartError):
    """A recovery phrase could not be resolved to an FID."""


class InvalidPhrase(ResolutionError):
    """The recovery phrase is not a valid BIP-39 mnemonic."""

    def __init__(self, message: str = "Invalid seed phrase") -> None:
        super().__init__(message)


class MissingCredential(ResolutionError):
    """No directory API key was configured, so no lookup was attempted."""

    def __init__(self, message: str = "NEYNAR_API_KEY not configured") -> None:
        super().__init__(message)


class TransportOrServerError(ResolutionError):
    """The directory could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class NotFound(ResolutionError):
    """The directory has no FID registered for the custody address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"No FID found for custody address {address}")
        self.address = address


class SigningError(QuickstartError):
    """The custody account could not sign the account association."""
