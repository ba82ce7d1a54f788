"""Tests for the Flask JSON API."""

import json

import pytest

from pocketbook.ledger import EXPENSES_KEY, GOALS_KEY
from pocketbook.storage import InMemoryStore
from pocketbook_api import create_app


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def client(store):
    app = create_app(store=store)
    app.config["TESTING"] = True
    return app.test_client()


def _add_expense(client, description="Coffee", amount="4.50", category="food"):
    return client.post(
        "/expenses",
        json={"description": description, "amount": amount, "category": category},
    )


def test_create_expense(client, store):
    response = _add_expense(client)

    assert response.status_code == 201
    body = response.get_json()
    assert body["description"] == "Coffee"
    assert body["amount"] == 4.5
    assert body["notification"]["description"] == "Expense added successfully"
    assert len(json.loads(store.read(EXPENSES_KEY))) == 1


def test_create_expense_defaults_category(client):
    response = client.post("/expenses", json={"description": "Bagel", "amount": 3})
    assert response.get_json()["category"] == "food"


def test_invalid_expense_returns_error_notification(client, store):
    response = _add_expense(client, amount="-5")

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "Validation error"
    assert body["notification"]["variant"] == "destructive"
    assert store.read(EXPENSES_KEY) is None


def test_non_json_body_is_rejected(client):
    response = client.post("/expenses", data="description=Coffee")
    assert response.status_code == 400


def test_summary(client):
    _add_expense(client)
    _add_expense(client, "Bus", "2.25", "transport")
    _add_expense(client, "Cake", "3", "food")

    body = client.get("/summary").get_json()

    assert body["total"] == "9.75"
    assert body["by_category"] == {"food": "7.50", "transport": "2.25"}


def test_list_and_delete_expense(client):
    expense_id = _add_expense(client).get_json()["id"]

    listing = client.get("/expenses").get_json()
    assert [item["id"] for item in listing["items"]] == [expense_id]
    assert listing["total"] == "4.50"

    response = client.delete(f"/expenses/{expense_id}")
    assert response.status_code == 200
    assert response.get_json()["notification"]["description"] == "Expense deleted successfully"
    assert client.get("/expenses").get_json()["items"] == []


def test_delete_unknown_expense_is_not_an_error(client):
    assert client.delete("/expenses/missing").status_code == 200


def test_goal_lifecycle(client, store):
    response = client.post("/goals", json={"description": "Vacation", "targetAmount": "1000"})
    assert response.status_code == 201
    goal = response.get_json()
    assert goal["currentAmount"] == 0
    assert goal["progress"] == 0

    response = client.post(f"/goals/{goal['id']}/contributions", json={"amount": "1500"})
    assert response.status_code == 200
    updated = response.get_json()
    assert updated["currentAmount"] == 1000
    assert updated["progress"] == 100

    stored = json.loads(store.read(GOALS_KEY))
    assert stored[0]["currentAmount"] == 1000

    assert client.delete(f"/goals/{goal['id']}").status_code == 200
    assert client.get("/goals").get_json()["items"] == []


def test_contribution_to_unknown_goal(client):
    response = client.post("/goals/missing/contributions", json={"amount": "10"})
    assert response.status_code == 404
    assert response.get_json()["error"] == "Record not found"


def test_invalid_goal(client):
    response = client.post("/goals", json={"description": "", "targetAmount": "100"})
    assert response.status_code == 400
    assert client.get("/goals").get_json()["items"] == []


def test_state_reflects_existing_store():
    store = InMemoryStore({
        EXPENSES_KEY: json.dumps([
            {"id": "1", "description": "Coffee", "amount": 4.5, "date": "2026-10-19", "category": "food"}
        ]),
        GOALS_KEY: json.dumps([
            {"id": "2", "description": "Car", "targetAmount": 400, "currentAmount": 100}
        ]),
    })
    client = create_app(store=store).test_client()

    body = client.get("/state").get_json()

    assert [expense["id"] for expense in body["expenses"]] == ["1"]
    assert body["goals"][0]["progress"] == 25
    assert body["total"] == "4.50"
    assert body["by_category"] == {"food": "4.50"}


def test_json_file_store_from_data_dir(tmp_path):
    client = create_app(data_dir=tmp_path).test_client()
    _add_expense(client)
    assert (tmp_path / "expenses.json").exists()
