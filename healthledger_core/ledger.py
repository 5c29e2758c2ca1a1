"""
healthledger_core.ledger
------------------------
The four state transitions of the access ledger:

- initialize      create the admin singleton
- create_record   register a document reference with its first recipients
- grant_access    add a recipient or rotate/un-revoke an existing one
- revoke_access   flag a recipient's entry as withdrawn

Every operation runs validation, then authorization, then a single write.
A rejected operation raises a ``LedgerError`` and leaves storage untouched.

Revocation is declarative. A recipient who already unwrapped the content key
keeps it; only downstream gating (see ``key_for``) can honor the flag.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence, Tuple

from .authorization import require_owner
from .constants import CONFIG_BUMP
from .crypto import compute_identity_fingerprint
from .errors import (
    LedgerError, AlreadyInitialized, NotInitialized,
    RecordNotFound, RecipientNotFound,
)
from .identity import Identity
from .logger import get_logger
from .models import AdminConfig, AccessEntry, Record
from .storage import StorageProvider, load_storage_provider
from .utils import new_id, unix_now
from . import validation

log = get_logger("HL.Ledger")


class Ledger:
    def __init__(
        self,
        storage: Optional[StorageProvider] = None,
        clock: Callable[[], int] = unix_now,
    ):
        self.storage = storage or load_storage_provider()
        self.clock = clock

    @contextmanager
    def _operation(self, name: str):
        try:
            yield
        except LedgerError as exc:
            log.warning(f"[{name}] rejected code={exc.code}")
            raise

    def _load(self, address: str) -> Record:
        record = self.storage.get_record(address)
        if record is None:
            raise RecordNotFound(f"Record not found: {address}")
        return record

    # ------------------------------------------------------------------
    # Admin registry
    # ------------------------------------------------------------------
    def initialize(self, caller: Identity) -> AdminConfig:
        with self._operation("initialize"):
            validation.check_identity(caller)
            if self.storage.get_config() is not None:
                raise AlreadyInitialized()
            config = AdminConfig(admin=caller, bump=CONFIG_BUMP)

        event = {"admin": caller.to_b64()}
        self.storage.save_config(config)
        self.storage.log_event("config.initialized", event)
        log.info(f"[initialize] admin={compute_identity_fingerprint(caller)}")
        return config

    def get_config(self) -> AdminConfig:
        config = self.storage.get_config()
        if config is None:
            raise NotInitialized()
        return config

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def create_record(
        self,
        caller: Identity,
        cid: str,
        title: str,
        recipients: Sequence[Identity],
        encrypted_keys: Sequence[bytes],
    ) -> Tuple[str, Record]:
        """
        Register a record owned by ``caller``.

        The whole input is validated before any entry is built. Duplicate
        recipients are kept as separate entries.
        """
        with self._operation("create_record"):
            validation.validate_new_record(cid, title, recipients, encrypted_keys)
            validation.check_identity(caller)

        record = Record(
            owner=caller,
            cid=cid,
            title=title,
            created_at=int(self.clock()),
            access_entries=[
                AccessEntry(recipient=r, encrypted_key=bytes(k), revoked=False)
                for r, k in zip(recipients, encrypted_keys)
            ],
        )
        address = new_id()
        event = {
            "address": address,
            "owner": caller.to_b64(),
            "recipients": [r.to_b64() for r in recipients],
        }
        self.storage.insert_record(address, record)
        self.storage.log_event("record.created", event)
        log.info(f"[create_record] address={address} entries={len(record.access_entries)}")
        return address, record

    def get_record(self, address: str) -> Record:
        return self._load(address)

    def list_records(self, owner: Optional[Identity] = None) -> List[Tuple[str, Record]]:
        return self.storage.list_records(owner)

    # ------------------------------------------------------------------
    # Access entries
    # ------------------------------------------------------------------
    def grant_access(
        self,
        caller: Identity,
        address: str,
        recipient: Identity,
        encrypted_key: bytes,
    ) -> Record:
        """
        Upsert ``recipient``'s entry. An existing entry gets the new key and
        is un-revoked; otherwise a new entry is appended. Only the insert
        path counts against the recipient quota.
        """
        with self._operation("grant_access"):
            record = self._load(address)
            require_owner(caller, record)
            validation.check_identity(recipient)
            validation.check_encrypted_key(encrypted_key)
            entry = record.find_entry(recipient)
            if entry is None:
                validation.check_room_for_insert(len(record.access_entries))

        if entry is not None:
            entry.encrypted_key = bytes(encrypted_key)
            entry.revoked = False
            action = "updated"
        else:
            record.access_entries.append(
                AccessEntry(recipient=recipient, encrypted_key=bytes(encrypted_key), revoked=False)
            )
            action = "inserted"
        event = {
            "address": address,
            "recipient": recipient.to_b64(),
            "action": action,
        }
        self.storage.update_record(address, record)
        self.storage.log_event("access.granted", event)
        log.info(
            f"[grant_access] address={address} "
            f"recipient={compute_identity_fingerprint(recipient)} {action}"
        )
        return record

    def revoke_access(self, caller: Identity, address: str, recipient: Identity) -> Record:
        """Flag ``recipient``'s entry as revoked. Calling twice is harmless."""
        with self._operation("revoke_access"):
            record = self._load(address)
            require_owner(caller, record)
            validation.check_identity(recipient)
            entry = record.find_entry(recipient)
            if entry is None:
                raise RecipientNotFound()

        entry.revoked = True
        event = {
            "address": address,
            "recipient": recipient.to_b64(),
        }
        self.storage.update_record(address, record)
        self.storage.log_event("access.revoked", event)
        log.info(f"[revoke_access] address={address} recipient={compute_identity_fingerprint(recipient)}")
        return record

    def key_for(self, address: str, recipient: Identity) -> Optional[bytes]:
        """
        Decryption-gating hook: the recipient's wrapped key if their entry is
        active, else None. This only honors the flag; it cannot take back a
        key the recipient already unwrapped.
        """
        entry = self._load(address).find_entry(recipient)
        if entry is None or entry.revoked:
            return None
        return entry.encrypted_key
