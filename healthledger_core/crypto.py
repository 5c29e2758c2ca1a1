"""
healthledger_core.crypto
------------------------
Identity helpers built on Ed25519 keypairs.

The ledger itself never signs, verifies, or unwraps anything: callers
authenticate out of band and encrypted keys are opaque blobs. These helpers
exist so owners and recipients can mint identities the same way a wallet
would.
"""

from __future__ import annotations
from typing import Tuple
from cryptography.hazmat.primitives.asymmetric import ed25519

from .identity import Identity
from .utils import sha256


def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = ed25519.Ed25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def identity_from_private(priv_raw: bytes) -> Identity:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return Identity(sk.public_key().public_bytes_raw())

def generate_identity() -> Tuple[bytes, Identity]:
    priv, pub = ed25519_generate()
    return priv, Identity(pub)

def compute_identity_fingerprint(identity: Identity) -> str:
    """
    Stable short fingerprint for an identity: SHA256 hex, truncated to 32
    chars. Used in log lines so full keys stay out of the logs.
    """
    return sha256(identity.raw)[:32]
