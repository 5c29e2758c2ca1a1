# healthledger_core/authorization.py
from __future__ import annotations

from .errors import Unauthorized
from .identity import Identity
from .models import Record


def require_owner(caller: Identity, record: Record) -> None:
    if caller != record.owner:
        raise Unauthorized()
