"""
Frames Quickstart - Farcaster account association

This package proves that a Farcaster identity controls the domain a frames v2
app is deployed on. It derives the custody account from a recovery phrase,
resolves the account's FID through the Neynar directory, and signs the account
association that the app serves from /.well-known/farcaster.json.

Key Components:
- account: Custody account derivation from BIP-39 recovery phrases
- resolve: FID lookup by custody address and the interactive retry protocol
- manifest: Account association encoding/signing and frame metadata
- app: Settings, logging and the frames-manifest command line tool
- errors: Error taxonomy shared by the components

Flow:
1. Derive the custody account from the recovery phrase
2. Resolve the account's FID (retrying with another phrase on failure)
3. Encode the header and payload and sign them with the custody key
4. Wrap the association in the frame metadata document

If resolution is declined the frame metadata is produced unsigned. Signing
failures are fatal.
"""
