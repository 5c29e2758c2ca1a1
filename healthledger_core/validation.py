"""
healthledger_core.validation
----------------------------
Pure bound checks. Nothing here reads or writes state.

String lengths are measured in UTF-8 bytes, which is what the persisted
layout bounds.
"""

from __future__ import annotations
from typing import Sequence

from .constants import MAX_CID_LEN, MAX_TITLE_LEN, MAX_ENC_KEY_LEN, MAX_RECIPIENTS
from .errors import (
    RecipientsKeysMismatch, CidTooLong, TitleTooLong,
    TooManyRecipients, EncryptedKeyTooLarge, InvalidIdentity,
)
from .identity import Identity


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def check_pairing(recipients: Sequence, encrypted_keys: Sequence) -> None:
    if len(recipients) != len(encrypted_keys):
        raise RecipientsKeysMismatch()


def check_cid(cid: str) -> None:
    if _utf8_len(cid) > MAX_CID_LEN:
        raise CidTooLong()


def check_title(title: str) -> None:
    if _utf8_len(title) > MAX_TITLE_LEN:
        raise TitleTooLong()


def check_recipient_count(count: int) -> None:
    if count > MAX_RECIPIENTS:
        raise TooManyRecipients()


def check_room_for_insert(current: int) -> None:
    """Insert path only: appending must keep the collection within bounds."""
    if current >= MAX_RECIPIENTS:
        raise TooManyRecipients()


def check_encrypted_key(encrypted_key: bytes) -> None:
    if len(encrypted_key) > MAX_ENC_KEY_LEN:
        raise EncryptedKeyTooLarge()


def check_identity(value) -> None:
    if not isinstance(value, Identity):
        raise InvalidIdentity(f"Expected Identity, got {type(value).__name__}")


def validate_new_record(cid: str, title: str, recipients: Sequence, encrypted_keys: Sequence) -> None:
    """Run every create-time check, in order, over the entire input."""
    check_pairing(recipients, encrypted_keys)
    check_cid(cid)
    check_title(title)
    check_recipient_count(len(recipients))
    for key in encrypted_keys:
        check_encrypted_key(key)
    for recipient in recipients:
        check_identity(recipient)
