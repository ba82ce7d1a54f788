"""Core bookkeeping package for expenses and savings goals."""

from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .ledger import EXPENSES_KEY, GOALS_KEY, ExpenseLedger
from .models import Expense, Goal
from .notifications import Notification
from .storage import InMemoryStore, JSONFileStore, KeyValueStore
from .validators import CATEGORIES

__all__ = [
    "CATEGORIES",
    "EXPENSES_KEY",
    "GOALS_KEY",
    "Expense",
    "ExpenseLedger",
    "Goal",
    "InMemoryStore",
    "JSONFileStore",
    "KeyValueStore",
    "Notification",
    "PersistenceError",
    "RecordNotFoundError",
    "ValidationError",
]
