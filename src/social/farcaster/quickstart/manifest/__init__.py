"""
Account Association Manifests

This package builds the signed account association that proves a Farcaster
custody account controls a domain, and the frame metadata document that carries
it.

Key Components:
- association.py: Header/payload encoding and custody signature
- domain.py: Deployment domain normalisation
- frame.py: Frame metadata document served from /.well-known/farcaster.json

Association layout:
1. header: base64url(JSON {"fid", "type": "custody", "key"})
2. payload: base64url(JSON {"domain"})
3. signature: base64url of the EIP-191 signature over "header.payload"

The three segments mirror a compact JWS. A third party verifies the association
by recovering the signer address from the signature and comparing it with the
key in the header, then checking the key is the custody address of the FID.
"""
