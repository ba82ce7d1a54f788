"""Console interface for the pocketbook ledger."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from pocketbook import notifications
from pocketbook.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from pocketbook.ledger import ExpenseLedger
from pocketbook.models import Expense, Goal
from pocketbook.notifications import Notification
from pocketbook.storage import JSONFileStore
from pocketbook.validators import CATEGORIES, DEFAULT_CATEGORY


def _load_ledger(data_dir: Path) -> ExpenseLedger:
    return ExpenseLedger(JSONFileStore(data_dir))


def _notify(notification: Notification) -> None:
    stream = sys.stderr if notification.destructive else sys.stdout
    print(str(notification), file=stream)


def _format_expense(expense: Expense) -> str:
    return (
        f"[{expense.id}] {expense.date.isoformat()} {expense.amount:.2f}\n"
        f"  Category: {expense.category} | Description: {expense.description}\n"
    )


def _format_goal(goal: Goal) -> str:
    return (
        f"[{goal.id}] {goal.description}\n"
        f"  Progress: {goal.current_amount:.2f} / {goal.target_amount:.2f} ({goal.progress:.0f}%)\n"
    )


def handle_expense(args: argparse.Namespace, ledger: ExpenseLedger) -> None:
    if args.command == "add":
        expense = ledger.add_expense(args.description, args.amount, args.category)
        _notify(notifications.success(notifications.EXPENSE_ADDED))
        print(_format_expense(expense))
    elif args.command == "list":
        expenses = ledger.expenses
        if not expenses:
            print("No expenses found.")
            return
        print(f"Found {len(expenses)} expenses (total {ledger.total_spend():.2f}):")
        for expense in expenses:
            print(_format_expense(expense))
    elif args.command == "delete":
        ledger.remove_expense(args.id)
        _notify(notifications.success(notifications.EXPENSE_DELETED))


def handle_goal(args: argparse.Namespace, ledger: ExpenseLedger) -> None:
    if args.command == "add":
        goal = ledger.add_goal(args.description, args.target)
        _notify(notifications.success(notifications.GOAL_ADDED))
        print(_format_goal(goal))
    elif args.command == "list":
        goals = ledger.goals
        if not goals:
            print("No goals found.")
            return
        for goal in goals:
            print(_format_goal(goal))
    elif args.command == "delete":
        ledger.remove_goal(args.id)
        _notify(notifications.success(notifications.GOAL_DELETED))
    elif args.command == "contribute":
        goal = ledger.contribute_to_goal(args.id, args.amount)
        if goal is None:
            raise RecordNotFoundError(f"Goal {args.id} not found")
        _notify(notifications.success(notifications.GOAL_PROGRESS_UPDATED))
        print(_format_goal(goal))


def handle_summary(args: argparse.Namespace, ledger: ExpenseLedger) -> None:
    print(f"Total spend: {ledger.total_spend():.2f}")
    for category, amount in ledger.spend_by_category().items():
        print(f"  {category}: {amount:.2f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pocketbook expense and savings-goal tracker")
    parser.add_argument(
        "--data-dir",
        default=os.getenv("POCKETBOOK_DATA_DIR", "data"),
        type=Path,
        help="Directory to store JSON data (default: $POCKETBOOK_DATA_DIR or ./data)",
    )

    subparsers = parser.add_subparsers(dest="entity", required=True)

    expense_parser = subparsers.add_parser("expense", help="Manage expenses")
    expense_sub = expense_parser.add_subparsers(dest="command", required=True)

    expense_add = expense_sub.add_parser("add", help="Record a new expense")
    expense_add.add_argument("description")
    expense_add.add_argument("amount")
    expense_add.add_argument("--category", choices=CATEGORIES, default=DEFAULT_CATEGORY)

    expense_sub.add_parser("list", help="List expenses")

    expense_delete = expense_sub.add_parser("delete", help="Delete an expense")
    expense_delete.add_argument("id")

    goal_parser = subparsers.add_parser("goal", help="Manage savings goals")
    goal_sub = goal_parser.add_subparsers(dest="command", required=True)

    goal_add = goal_sub.add_parser("add", help="Add a savings goal")
    goal_add.add_argument("description")
    goal_add.add_argument("target")

    goal_sub.add_parser("list", help="List savings goals")

    goal_delete = goal_sub.add_parser("delete", help="Delete a savings goal")
    goal_delete.add_argument("id")

    goal_contribute = goal_sub.add_parser("contribute", help="Put money toward a goal")
    goal_contribute.add_argument("id")
    goal_contribute.add_argument("amount")

    subparsers.add_parser("summary", help="Show total and per-category spend")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        ledger = _load_ledger(args.data_dir)
        if args.entity == "expense":
            handle_expense(args, ledger)
        elif args.entity == "goal":
            handle_goal(args, ledger)
        elif args.entity == "summary":
            handle_summary(args, ledger)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown entity: {args.entity}")
            return 2
    except ValidationError as exc:
        _notify(notifications.failure(str(exc)))
        return 1
    except RecordNotFoundError as exc:
        _notify(notifications.failure(str(exc)))
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
