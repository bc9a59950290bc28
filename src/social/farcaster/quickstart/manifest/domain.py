"""Deployment domain normalisation.

Reduces what a user types (bare host or URL) to the hostname that goes into the
signed payload and the frame URLs.
"""

import re

HOSTNAME_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}$"
)


def normalize_domain(value: str) -> str:
    """Reduce user input to the bare hostname a frame is deployed on.

    Strips surrounding whitespace, an http:// or https:// scheme and any
    trailing slash, then checks the remainder looks like a public hostname.

    Args:
        value: Domain or URL as typed by the user

    Returns:
        Lowercased hostname, e.g. "example.com"

    Raises:
        ValueError: If the value is not a valid domain
    """
    domain = value.strip()
    domain = re.sub(r"^https?://", "", domain, flags=re.IGNORECASE)
    domain = domain.rstrip("/").lower()

    if len(domain) > 253 or HOSTNAME_PATTERN.match(domain) is None:
        raise ValueError("Invalid domain format")

    return domain
