from datetime import date
from itertools import count

import pytest

from pocketbook.ledger import ExpenseLedger
from pocketbook.storage import InMemoryStore

TODAY = date(2026, 10, 19)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def make_ledger(store):
    """Build ledgers over the shared store, as if the page were reloaded."""
    ids = count(1)

    def factory(backing=None):
        return ExpenseLedger(
            backing if backing is not None else store,
            clock=lambda: TODAY,
            id_factory=lambda: f"id-{next(ids)}",
        )

    return factory


@pytest.fixture
def ledger(make_ledger):
    return make_ledger()
