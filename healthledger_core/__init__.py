"""
HealthLedger Core Package
=========================
Access-control ledger for encrypted documents.

Provides:
- Record / AccessEntry / AdminConfig models with bounded access lists
- Ledger operations: initialize, create_record, grant_access, revoke_access
- Pluggable storage interface (SQLite default, in-memory for tests)

The ledger stores already-wrapped content keys only. It never sees plaintext
keys and never checks the cryptography of what it stores.
"""

from .errors import LedgerError
from .identity import Identity
from .ledger import Ledger
from .models import AccessEntry, AdminConfig, Record

__all__ = ["AccessEntry", "AdminConfig", "Identity", "Ledger", "LedgerError", "Record"]
