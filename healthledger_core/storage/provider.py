# healthledger_core/storage/provider.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from healthledger_core.identity import Identity
from healthledger_core.models import AdminConfig, Record


class StorageProvider(ABC):
    """
    Persistence collaborator for the ledger.

    Providers allocate record addresses, hold the admin singleton, and keep
    an audit trail. They never validate or authorize; the ledger hands them
    fully checked entities only. Returned entities are copies, so callers may
    mutate them freely without touching stored state.
    """

    # admin singleton
    @abstractmethod
    def get_config(self) -> Optional[AdminConfig]: ...

    @abstractmethod
    def save_config(self, config: AdminConfig) -> None: ...

    # records
    @abstractmethod
    def insert_record(self, address: str, record: Record) -> None: ...

    @abstractmethod
    def update_record(self, address: str, record: Record) -> None: ...

    @abstractmethod
    def get_record(self, address: str) -> Optional[Record]: ...

    @abstractmethod
    def list_records(self, owner: Optional[Identity] = None) -> List[Tuple[str, Record]]: ...

    # audit
    @abstractmethod
    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None: ...

    @abstractmethod
    def list_events(self) -> List[Tuple[str, Dict[str, Any]]]: ...

    def close(self) -> None:
        return
