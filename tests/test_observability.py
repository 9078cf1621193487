import json
import logging

import pytest

from fitout.core.observability import logger


class _JsonLines(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[dict] = []

    def emit(self, record):
        self.records.append(json.loads(record.getMessage()))


@pytest.fixture()
def api_log():
    handler = _JsonLines()
    logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)


def _request_line(records: list[dict], path: str) -> dict:
    lines = [item for item in records if item["event"] == "request" and item["path"] == path]
    assert len(lines) == 1, records
    return lines[0]


def test_request_line_carries_ledger_context(test_context, api_log):
    client, _ = test_context

    res = client.post(
        "/inventory",
        json={
            "scope_of_work": "electrical",
            "part_name": "6A modular switch",
            "part_price": 10,
            "date_of_receipt": "2024-01-01",
            "receipts": [
                {"date": "2024-01-01", "quantity": "20"},
                {"date": "", "quantity": ""},
            ],
        },
        headers={"X-Request-ID": "req-ledger"},
    )
    assert res.status_code == 201, res.text

    line = _request_line(api_log, "/inventory")
    assert line["request_id"] == "req-ledger"
    assert line["status_code"] == 201
    assert line["inventory_id"] == res.json()["id"]
    assert line["ignored_entries"] == 1

    event = next(item for item in api_log if item["event"] == "inventory.create")
    assert event["request_id"] == "req-ledger"


def test_preview_request_line_counts_ignored_rows(test_context, api_log):
    client, _ = test_context

    res = client.post(
        "/inventory/balance-preview",
        json={"unit_price": 1, "receipts": [{"date": "2024-01-01", "quantity": "4"}, {"quantity": "2"}]},
    )
    assert res.status_code == 200, res.text

    line = _request_line(api_log, "/inventory/balance-preview")
    assert line["ignored_entries"] == 1
    assert line["current_stock"] == 4


def test_rejected_ledger_fields_are_logged(test_context, api_log):
    client, _ = test_context

    res = client.post(
        "/inventory",
        json={"scope_of_work": "electrical", "part_name": "Switch", "part_price": 0},
    )
    assert res.status_code == 422, res.text

    line = _request_line(api_log, "/inventory")
    assert "part_price" in line["rejected_fields"]
    assert "receipts" in line["rejected_fields"]


def test_request_context_does_not_leak_between_requests(test_context, api_log):
    client, _ = test_context

    client.post("/inventory/balance-preview", json={"unit_price": 1})
    client.get("/health")

    assert "ignored_entries" not in _request_line(api_log, "/health")
