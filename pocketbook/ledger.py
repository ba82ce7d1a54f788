"""Expense and savings-goal bookkeeping with write-through persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
from uuid import uuid4

from .exceptions import PersistenceError
from .models import Expense, Goal
from .storage import KeyValueStore
from .validators import (
    CATEGORIES,
    parse_amount,
    parse_contribution,
    validate_enum,
    validate_required_str,
)

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
GOALS_KEY = "goals"

Record = TypeVar("Record", Expense, Goal)


def _new_id() -> str:
    return str(uuid4())


class ExpenseLedger:
    """Owns the expense and goal collections and keeps the store in sync.

    Every mutating call validates its input, updates the in-memory
    collection and then writes both collections back to the store before
    returning.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._expenses: List[Expense] = []
        self._goals: List[Goal] = []
        self.load()  # Hydrate in-memory state from the store on construction.

    # Expenses -------------------------------------------------------------
    def add_expense(self, description: object, amount_text: object, category: object) -> Expense:
        expense = Expense(
            id=self._id_factory(),
            description=validate_required_str(description, "description"),
            amount=parse_amount(amount_text, "amount"),
            date=self._clock(),
            category=validate_enum(category, "category", CATEGORIES),
        )
        self._expenses.append(expense)
        logger.debug("Added expense %s (%s %s)", expense.id, expense.category, expense.amount)
        self.save()
        return expense

    def remove_expense(self, expense_id: str) -> None:
        self._expenses = [expense for expense in self._expenses if expense.id != expense_id]
        self.save()

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        return next((expense for expense in self._expenses if expense.id == expense_id), None)

    @property
    def expenses(self) -> List[Expense]:
        return list(self._expenses)

    def total_spend(self) -> Decimal:
        return sum((expense.amount for expense in self._expenses), start=Decimal("0"))

    def spend_by_category(self) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = {}
        for expense in self._expenses:
            totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.amount
        return totals

    # Goals ----------------------------------------------------------------
    def add_goal(self, description: object, target_amount_text: object) -> Goal:
        goal = Goal(
            id=self._id_factory(),
            description=validate_required_str(description, "description"),
            target_amount=parse_amount(target_amount_text, "target amount"),
        )
        self._goals.append(goal)
        logger.debug("Added goal %s (target %s)", goal.id, goal.target_amount)
        self.save()
        return goal

    def remove_goal(self, goal_id: str) -> None:
        self._goals = [goal for goal in self._goals if goal.id != goal_id]
        self.save()

    def contribute_to_goal(self, goal_id: str, amount_text: object) -> Optional[Goal]:
        """Add to a goal's progress without ever passing its target.

        Input that is not a positive number counts as a zero contribution.
        Returns the updated goal, or None when no goal has that id.
        """
        contribution = parse_contribution(amount_text)
        updated: Optional[Goal] = None
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                current = goal.current_amount + min(contribution, goal.remaining)
                updated = replace(goal, current_amount=current)
                self._goals[index] = updated
                break
        self.save()
        return updated

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return next((goal for goal in self._goals if goal.id == goal_id), None)

    @property
    def goals(self) -> List[Goal]:
        return list(self._goals)

    # Persistence ----------------------------------------------------------
    def load(self) -> None:
        """Reload both collections; unreadable data leaves a collection empty."""
        self._expenses = self._load_collection(EXPENSES_KEY, Expense)
        self._goals = self._load_collection(GOALS_KEY, Goal)

    def save(self) -> None:
        snapshot = self.snapshot()
        self._store.write(EXPENSES_KEY, json.dumps(snapshot[EXPENSES_KEY]))
        self._store.write(GOALS_KEY, json.dumps(snapshot[GOALS_KEY]))

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return the serialisable payload written to the store."""
        return {
            EXPENSES_KEY: [expense.to_dict() for expense in self._expenses],
            GOALS_KEY: [goal.to_dict() for goal in self._goals],
        }

    def _load_collection(self, key: str, model: Type[Record]) -> List[Record]:
        try:
            raw = self._store.read(key)
        except PersistenceError as exc:
            logger.warning("Could not read %r from storage, starting empty: %s", key, exc)
            return []
        if raw is None:
            return []
        try:
            payload = json.loads(raw, parse_float=Decimal)
            if not isinstance(payload, list):
                raise TypeError(f"expected a list, got {type(payload).__name__}")
            records = [model.from_dict(record) for record in payload]
            if len({record.id for record in records}) != len(records):
                raise ValueError("duplicate ids")
            return records
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            logger.warning("Discarding stored %r, data is malformed: %s", key, exc)
            return []
