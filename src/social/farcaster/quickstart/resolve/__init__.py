"""
FID Resolution

This package resolves Farcaster custody addresses to their numeric identity (FID)
through the Neynar directory API, and implements the retry protocol used when a
recovery phrase cannot be resolved.

Key Components:
- fid.py: Directory lookup, single derive/resolve attempt and the retry loop
- __main__.py: CLI interface for resolving custody addresses

Resolution flow:
1. Derive the custody account from the recovery phrase
2. Query the directory by custody address, authenticated with an API key
3. Return the FID, or report a distinct failure (missing key, transport or
   server error, address not registered)

When an attempt fails the caller decides whether to try again with a different
phrase. Declining ends the flow without an FID, which callers treat as a valid
unsigned outcome rather than an error.
"""
