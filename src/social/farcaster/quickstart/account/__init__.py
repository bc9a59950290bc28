"""
Custody Accounts

This package derives Farcaster custody accounts from BIP-39 recovery phrases.

Key Components:
- custody.py: Deterministic derivation of the custody account and its address

The derived account is an Ethereum account on the standard BIP-44 path
(m/44'/60'/0'/0/0), which is the path Farcaster clients use for custody
wallets. The same phrase always yields the same address. The account carries
the private key needed to sign the account association and only lives for the
duration of a single resolution or signing operation.
"""
