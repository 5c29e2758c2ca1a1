import pytest
import sqlite3
from healthledger_core.ledger import Ledger
from healthledger_core.models import AccessEntry, AdminConfig, Record
from healthledger_core.storage import (
    InMemoryStorage, SQLiteStorage, load_storage_provider,
)

# CMD Line Usage: pytest -v -s --log-cli-level=DEBUG .\tests\test_storage.py


def test_sqlite_record_roundtrip(tmp_path, make_identity):
    db_path = tmp_path / "state.db"
    s = SQLiteStorage(str(db_path))
    owner, bob = make_identity(), make_identity()
    rec = Record(owner, "cid", "Blood test", 1_700_000_000, [AccessEntry(bob, b"\x00\xff", True)])

    s.insert_record("addr1", rec)
    s.close()

    reopened = SQLiteStorage(str(db_path))
    assert reopened.get_record("addr1") == rec
    assert reopened.get_record("missing") is None


def test_sqlite_config_is_singleton(tmp_path, make_identity):
    s = SQLiteStorage(str(tmp_path / "state.db"))
    assert s.get_config() is None
    admin = make_identity()
    s.save_config(AdminConfig(admin))
    with pytest.raises(sqlite3.IntegrityError):
        s.save_config(AdminConfig(make_identity()))
    assert s.get_config().admin == admin


def test_sqlite_update_unknown_address(tmp_path, make_identity):
    s = SQLiteStorage(str(tmp_path / "state.db"))
    with pytest.raises(KeyError):
        s.update_record("nope", Record(make_identity(), "c", "t", 0))


def test_sqlite_schema_exists(tmp_path):
    store = SQLiteStorage(str(tmp_path / "state.db"))

    cur = store.db.execute("PRAGMA table_info(records)")
    cols = [row[1] for row in cur.fetchall()]

    for col in {"seq", "address", "owner", "body"}:
        assert col in cols


def test_ledger_on_sqlite_survives_reopen(tmp_path, make_identity):
    db_path = str(tmp_path / "ledger.db")
    owner, bob = make_identity(), make_identity()

    ledger = Ledger(storage=SQLiteStorage(db_path), clock=lambda: 42)
    ledger.initialize(owner)
    address, _ = ledger.create_record(owner, "cid", "t", [bob], [b"kb"])
    ledger.revoke_access(owner, address, bob)
    ledger.storage.close()

    again = Ledger(storage=SQLiteStorage(db_path))
    assert again.get_config().admin == owner
    rec = again.get_record(address)
    assert rec.created_at == 42
    assert rec.access_entries == [AccessEntry(bob, b"kb", True)]
    assert [e for e, _ in again.storage.list_events()] == [
        "config.initialized", "record.created", "access.revoked",
    ]
    # audit never carries key material
    assert all("encrypted_key" not in p for _, p in again.storage.list_events())


def test_storage_factory_modes(monkeypatch, tmp_path):
    """Verify that load_storage_provider honors HLEDGER_STORAGE_PROVIDER."""
    monkeypatch.setenv("HLEDGER_STORAGE_PROVIDER", "memory")
    assert isinstance(load_storage_provider(), InMemoryStorage)

    monkeypatch.setenv("HLEDGER_STORAGE_PROVIDER", "sqlite")
    monkeypatch.setenv("HLEDGER_DB_PATH", str(tmp_path / "env.db"))
    assert isinstance(load_storage_provider(), SQLiteStorage)
    assert (tmp_path / "env.db").exists()

    # explicit config beats the environment
    assert isinstance(load_storage_provider({"provider": "memory"}), InMemoryStorage)

    with pytest.raises(ValueError):
        load_storage_provider({"provider": "firestore"})


def test_memory_provider_rejects_address_reuse(make_identity):
    s = InMemoryStorage()
    rec = Record(make_identity(), "c", "t", 0)
    s.insert_record("a", rec)
    with pytest.raises(KeyError):
        s.insert_record("a", rec)


def test_sqlite_list_records_by_owner(tmp_path, make_identity):
    s = SQLiteStorage(str(tmp_path / "state.db"))
    alice, bob = make_identity(), make_identity()
    s.insert_record("a1", Record(alice, "c1", "t", 1))
    s.insert_record("b1", Record(bob, "c2", "t", 2))
    s.insert_record("a2", Record(alice, "c3", "t", 3))

    assert [a for a, _ in s.list_records()] == ["a1", "b1", "a2"]
    assert [(a, r.cid) for a, r in s.list_records(owner=alice)] == [("a1", "c1"), ("a2", "c3")]
    assert s.list_records(owner=make_identity()) == []


def test_sqlite_rejections_leave_state_unchanged(tmp_path, make_identity):
    from healthledger_core.errors import (
        Unauthorized, TooManyRecipients, RecipientNotFound, InvalidIdentity,
    )

    ledger = Ledger(storage=SQLiteStorage(str(tmp_path / "ledger.db")), clock=lambda: 7)
    owner = make_identity()
    recipients = [make_identity() for _ in range(10)]
    address, _ = ledger.create_record(owner, "cid", "t", recipients, [b"k"] * 10)

    def snapshot():
        return (
            [(a, r.to_dict()) for a, r in ledger.list_records()],
            ledger.storage.list_events(),
        )

    before = snapshot()
    with pytest.raises(Unauthorized):
        ledger.grant_access(recipients[0], address, recipients[0], b"x")
    with pytest.raises(TooManyRecipients):
        ledger.grant_access(owner, address, make_identity(), b"x")
    with pytest.raises(RecipientNotFound):
        ledger.revoke_access(owner, address, make_identity())
    with pytest.raises(InvalidIdentity):
        ledger.create_record(owner, "cid2", "t", [b"\x01" * 32], [b"k"])
    assert snapshot() == before
