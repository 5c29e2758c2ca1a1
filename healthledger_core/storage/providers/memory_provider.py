from typing import Optional, Dict, Any, List, Tuple
from healthledger_core.identity import Identity
from healthledger_core.models import AdminConfig, Record
from healthledger_core.storage.provider import StorageProvider

class InMemoryStorage(StorageProvider):
    def __init__(self):
        self.config: Optional[AdminConfig] = None
        self.records: Dict[str, Record] = {}
        self.audit: List[Tuple[str, Dict[str, Any]]] = []

    # admin singleton
    def get_config(self):
        if self.config is None:
            return None
        return AdminConfig(self.config.admin, self.config.bump)

    def save_config(self, config: AdminConfig):
        if self.config is not None:
            raise KeyError("config already stored")
        self.config = AdminConfig(config.admin, config.bump)

    # records
    def insert_record(self, address: str, record: Record):
        if address in self.records:
            raise KeyError(f"address in use: {address}")
        self.records[address] = record.copy()

    def update_record(self, address: str, record: Record):
        if address not in self.records:
            raise KeyError(f"unknown address: {address}")
        self.records[address] = record.copy()

    def get_record(self, address: str):
        rec = self.records.get(address)
        return rec.copy() if rec else None

    def list_records(self, owner: Optional[Identity] = None):
        return [(addr, rec.copy()) for addr, rec in self.records.items()
                if owner is None or rec.owner == owner]

    # audit
    def log_event(self, event_type: str, payload: Dict[str, Any]):
        self.audit.append((event_type, dict(payload)))

    def list_events(self):
        return list(self.audit)
