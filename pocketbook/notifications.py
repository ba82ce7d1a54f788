"""Toast-style messages the front ends show after ledger operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

EXPENSE_ADDED = "Expense added successfully"
EXPENSE_DELETED = "Expense deleted successfully"
GOAL_ADDED = "Financial goal added successfully"
GOAL_DELETED = "Financial goal deleted successfully"
GOAL_PROGRESS_UPDATED = "Goal progress updated"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    destructive: bool = False

    @property
    def variant(self) -> str:
        return "destructive" if self.destructive else "default"

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.message, "variant": self.variant}

    def __str__(self) -> str:
        return f"{self.title}: {self.message}"


def success(message: str) -> Notification:
    return Notification(title="Success", message=message)


def failure(message: str) -> Notification:
    return Notification(title="Error", message=message, destructive=True)
