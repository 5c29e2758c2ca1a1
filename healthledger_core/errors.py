"""
healthledger_core.errors
------------------------
Error taxonomy for ledger operations.

Every error carries a stable ``code`` (the taxonomy name surfaced to callers)
and is raised before any state is touched. Nothing here is retried.
"""

from __future__ import annotations


class LedgerError(Exception):
    code: str = "LedgerError"
    message: str = "Ledger operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


# --- input-shape errors: caller can resubmit corrected input ---

class InputError(LedgerError):
    pass


class RecipientsKeysMismatch(InputError):
    code = "RecipientsKeysMismatch"
    message = "Recipients and encrypted keys arrays length mismatch"


class CidTooLong(InputError):
    code = "CidTooLong"
    message = "CID too long"


class TitleTooLong(InputError):
    code = "TitleTooLong"
    message = "Title too long"


class TooManyRecipients(InputError):
    code = "TooManyRecipients"
    message = "Too many recipients"


class EncryptedKeyTooLarge(InputError):
    code = "EncryptedKeyTooLarge"
    message = "Encrypted symmetric key too large"


class InvalidIdentity(InputError):
    code = "InvalidIdentity"
    message = "Expected a 32-byte Identity"


# --- authorization ---

class AuthorizationError(LedgerError):
    pass


class Unauthorized(AuthorizationError):
    code = "Unauthorized"
    message = "Unauthorized"


# --- lookups ---

class LookupFailure(LedgerError):
    pass


class RecipientNotFound(LookupFailure):
    code = "RecipientNotFound"
    message = "Recipient not found"


class RecordNotFound(LookupFailure):
    code = "RecordNotFound"
    message = "Record not found"


class NotInitialized(LookupFailure):
    code = "NotInitialized"
    message = "Admin config has not been initialized"


# --- singleton state ---

class StateError(LedgerError):
    pass


class AlreadyInitialized(StateError):
    code = "AlreadyInitialized"
    message = "Admin config already initialized"
