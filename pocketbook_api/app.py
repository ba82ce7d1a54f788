"""Flask JSON API backing the pocketbook single-page widget."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from pocketbook import notifications
from pocketbook.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from pocketbook.ledger import ExpenseLedger
from pocketbook.storage import JSONFileStore, KeyValueStore
from pocketbook.validators import DEFAULT_CATEGORY


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def create_app(data_dir: Optional[Path] = None, store: Optional[KeyValueStore] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("POCKETBOOK_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("POCKETBOOK_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    if store is None:
        store = JSONFileStore(Path(data_dir or os.getenv("POCKETBOOK_DATA_DIR", "data")))
    ledger = ExpenseLedger(store)

    def _success(payload: Dict[str, Any], message: Optional[str] = None, status: int = 200):
        if message is not None:
            payload = {**payload, "notification": notifications.success(message).to_dict()}
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        notification = notifications.failure(str(exc) or message)
        return jsonify({
            "error": message,
            "details": str(exc),
            "notification": notification.to_dict(),
        }), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _summary() -> Dict[str, Any]:
        return {
            "total": _money(ledger.total_spend()),
            "by_category": {
                category: _money(amount)
                for category, amount in ledger.spend_by_category().items()
            },
        }

    def _goal_view(goal) -> Dict[str, Any]:
        return {**goal.to_dict(), "progress": float(round(goal.progress, 2))}

    @app.get("/state")
    def state():
        return _success({
            "expenses": [expense.to_dict() for expense in ledger.expenses],
            "goals": [_goal_view(goal) for goal in ledger.goals],
            **_summary(),
        })

    @app.get("/expenses")
    def list_expenses():
        return _success({
            "items": [expense.to_dict() for expense in ledger.expenses],
            "total": _money(ledger.total_spend()),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        expense = ledger.add_expense(
            payload.get("description"),
            payload.get("amount"),
            payload.get("category", DEFAULT_CATEGORY),
        )
        return _success(expense.to_dict(), notifications.EXPENSE_ADDED, 201)

    @app.delete("/expenses/<expense_id>")
    def delete_expense(expense_id: str):
        ledger.remove_expense(expense_id)
        return _success({}, notifications.EXPENSE_DELETED)

    @app.get("/summary")
    def summary():
        return _success(_summary())

    @app.get("/goals")
    def list_goals():
        return _success({"items": [_goal_view(goal) for goal in ledger.goals]})

    @app.post("/goals")
    def create_goal():
        payload = _json_body()
        goal = ledger.add_goal(payload.get("description"), payload.get("targetAmount"))
        return _success(_goal_view(goal), notifications.GOAL_ADDED, 201)

    @app.delete("/goals/<goal_id>")
    def delete_goal(goal_id: str):
        ledger.remove_goal(goal_id)
        return _success({}, notifications.GOAL_DELETED)

    @app.post("/goals/<goal_id>/contributions")
    def contribute_to_goal(goal_id: str):
        payload = _json_body()
        goal = ledger.contribute_to_goal(goal_id, payload.get("amount"))
        if goal is None:
            raise RecordNotFoundError(f"Goal {goal_id} not found")
        return _success(_goal_view(goal), notifications.GOAL_PROGRESS_UPDATED)

    return app
