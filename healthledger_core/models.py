# healthledger_core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import CONFIG_BUMP
from .identity import Identity
from .utils import b64e, b64d


@dataclass
class AdminConfig:
    """
    Singleton ledger configuration. Created once by ``Ledger.initialize``.

    ``bump`` is an addressing tag for the storage collaborator; the ledger
    itself never reads it.
    """
    admin: Identity
    bump: int = CONFIG_BUMP

    def to_dict(self) -> Dict[str, Any]:
        return {"admin": self.admin.to_b64(), "bump": self.bump}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminConfig":
        return cls(admin=Identity.from_b64(data["admin"]), bump=int(data.get("bump", CONFIG_BUMP)))


@dataclass
class AccessEntry:
    """
    One recipient grant: a content key wrapped for ``recipient``.

    Revocation is a soft delete. ``revoked=True`` entries keep their
    ``encrypted_key`` and are never removed from the parent record.
    """
    recipient: Identity
    encrypted_key: bytes
    revoked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipient": self.recipient.to_b64(),
            "encrypted_key": b64e(self.encrypted_key),
            "revoked": self.revoked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessEntry":
        return cls(
            recipient=Identity.from_b64(data["recipient"]),
            encrypted_key=b64d(data["encrypted_key"]),
            revoked=bool(data.get("revoked", False)),
        )


@dataclass
class Record:
    owner: Identity
    cid: str
    title: str
    created_at: int
    access_entries: List[AccessEntry] = field(default_factory=list)

    def find_entry(self, recipient: Identity) -> Optional[AccessEntry]:
        # first match wins; create_record may have stored duplicates
        return next((e for e in self.access_entries if e.recipient == recipient), None)

    def copy(self) -> "Record":
        return Record(
            owner=self.owner,
            cid=self.cid,
            title=self.title,
            created_at=self.created_at,
            access_entries=[
                AccessEntry(e.recipient, e.encrypted_key, e.revoked) for e in self.access_entries
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner.to_b64(),
            "cid": self.cid,
            "title": self.title,
            "created_at": self.created_at,
            "access_entries": [e.to_dict() for e in self.access_entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        return cls(
            owner=Identity.from_b64(data["owner"]),
            cid=data["cid"],
            title=data["title"],
            created_at=int(data["created_at"]),
            access_entries=[AccessEntry.from_dict(e) for e in data.get("access_entries", [])],
        )
