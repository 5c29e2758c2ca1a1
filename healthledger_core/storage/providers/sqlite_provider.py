from __future__ import annotations
from typing import Optional, Dict, Any, List, Tuple
import json, sqlite3, os
from healthledger_core.identity import Identity
from healthledger_core.models import AdminConfig, Record
from healthledger_core.storage.provider import StorageProvider
from healthledger_core.utils import canonical_json, now_ts


class SQLiteStorage(StorageProvider):
    def __init__(self, path="db/ledger_state.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.db = sqlite3.connect(path, check_same_thread=False)

        self._init()

    def _init(self) -> None:
        c = self.db.cursor()

        # id is pinned to 1 so a second config row collides
        c.execute("""CREATE TABLE IF NOT EXISTS admin_config(
            id INTEGER PRIMARY KEY CHECK (id = 1),
            admin TEXT NOT NULL,
            bump INTEGER NOT NULL
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS records(
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            address TEXT NOT NULL UNIQUE,
            owner TEXT NOT NULL,
            body TEXT NOT NULL
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS audit(
            ts TEXT,
            event_type TEXT,
            payload TEXT
        )""")
        self.db.commit()

    # --- admin singleton ---

    def get_config(self) -> Optional[AdminConfig]:
        row = self.db.execute("SELECT admin, bump FROM admin_config WHERE id = 1").fetchone()
        if not row:
            return None
        return AdminConfig(admin=Identity.from_b64(row[0]), bump=row[1])

    def save_config(self, config: AdminConfig) -> None:
        # sqlite3.IntegrityError on a second insert
        self.db.execute(
            "INSERT INTO admin_config(id, admin, bump) VALUES(1, ?, ?)",
            (config.admin.to_b64(), config.bump),
        )
        self.db.commit()

    # --- records ---

    def insert_record(self, address: str, record: Record) -> None:
        self.db.execute(
            "INSERT INTO records(address, owner, body) VALUES(?, ?, ?)",
            (address, record.owner.to_b64(), canonical_json(record.to_dict())),
        )
        self.db.commit()

    def update_record(self, address: str, record: Record) -> None:
        cur = self.db.execute(
            "UPDATE records SET body = ? WHERE address = ?",
            (canonical_json(record.to_dict()), address),
        )
        if cur.rowcount != 1:
            self.db.rollback()
            raise KeyError(f"unknown address: {address}")
        self.db.commit()

    def get_record(self, address: str) -> Optional[Record]:
        row = self.db.execute("SELECT body FROM records WHERE address = ?", (address,)).fetchone()
        if not row:
            return None
        return Record.from_dict(json.loads(row[0]))

    def list_records(self, owner: Optional[Identity] = None) -> List[Tuple[str, Record]]:
        if owner is None:
            cur = self.db.execute("SELECT address, body FROM records ORDER BY seq")
        else:
            cur = self.db.execute(
                "SELECT address, body FROM records WHERE owner = ? ORDER BY seq",
                (owner.to_b64(),),
            )
        return [(address, Record.from_dict(json.loads(body))) for address, body in cur.fetchall()]

    # --- audit ---

    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.db.execute("INSERT INTO audit(ts,event_type,payload) VALUES(?,?,?)",
                        (now_ts(), event_type, canonical_json(payload)))
        self.db.commit()

    def list_events(self) -> List[Tuple[str, Dict[str, Any]]]:
        cur = self.db.execute("SELECT event_type, payload FROM audit ORDER BY rowid")
        return [(event_type, json.loads(payload)) for event_type, payload in cur.fetchall()]

    def close(self):
        self.db.close()
