# healthledger_core/identity.py
from __future__ import annotations
from dataclasses import dataclass
import binascii

from .constants import IDENTITY_LEN
from .utils import b64e, b64d


@dataclass(frozen=True)
class Identity:
    """
    A 32-byte principal identity (an Ed25519 public key in practice).

    The ledger never verifies signatures; it only compares identities.
    Text form is standard base64.
    """
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, (bytes, bytearray)):
            raise TypeError("Identity requires bytes")
        if len(self.raw) != IDENTITY_LEN:
            raise ValueError(f"Identity must be {IDENTITY_LEN} bytes, got {len(self.raw)}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_b64(cls, text: str) -> "Identity":
        try:
            return cls(b64d(text))
        except (binascii.Error, UnicodeEncodeError) as exc:
            raise ValueError(f"Invalid identity encoding: {text!r}") from exc

    def to_b64(self) -> str:
        return b64e(self.raw)

    def __str__(self) -> str:
        return self.to_b64()

    def __repr__(self) -> str:
        return f"Identity({self.to_b64()})"
