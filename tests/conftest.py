import pytest
from healthledger_core.crypto import generate_identity
from healthledger_core.ledger import Ledger
from healthledger_core.storage import InMemoryStorage


@pytest.fixture
def make_identity():
    def _make():
        _, ident = generate_identity()
        return ident
    return _make


@pytest.fixture
def ledger():
    return Ledger(storage=InMemoryStorage(), clock=lambda: 1_700_000_000)
