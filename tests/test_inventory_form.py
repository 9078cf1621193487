from datetime import date

import pytest

from fitout.services.inventory_form import InventoryLedgerForm, parse_entry_date


def _form(**overrides) -> InventoryLedgerForm:
    values = {
        "scope_of_work": "electrical",
        "part_name": "6A modular switch",
        "part_price": "10",
        "date_of_receipt": "2024-01-01",
    }
    values.update(overrides)
    return InventoryLedgerForm(**values)


def test_add_row_defaults_differ_for_receipts_and_other_lists():
    form = _form()

    receipt = form.add_row("receipts", today=date(2024, 5, 6))
    dispatch = form.add_row("dispatches")
    returned = form.add_row("returns")

    assert receipt.date == "2024-05-06"
    assert receipt.unit == "nos"
    assert receipt.quantity == ""
    assert dispatch.date == ""
    assert dispatch.unit == ""
    assert returned.date == ""


def test_every_edit_recomputes_the_summary():
    form = _form()
    form.add_row("receipts", today=date(2024, 1, 1))
    assert form.summary.current_stock == 0

    form.update_entry("receipts", 0, quantity="20")
    assert form.summary.current_stock == 20
    assert form.summary.current_value == 200

    form.add_row("dispatches")
    form.update_entry("dispatches", 0, date="2024-01-02", quantity="5")
    assert form.summary.current_stock == 15

    form.add_row("returns")
    form.update_entry("returns", 0, date="2024-01-03", quantity="2")
    assert form.summary.current_stock == 17
    assert form.summary.current_value == 170

    form.set_unit_price("4")
    assert form.summary.current_value == 68
    assert form.receipts[0].cumulative_price == 80

    form.remove_row("dispatches", 0)
    assert form.summary.current_stock == 22
    assert form.dispatches == []


def test_rows_carry_running_figures_after_edit():
    form = _form(
        receipts=[
            {"date": "2024-01-01", "quantity": "3"},
            {"date": "2024-01-02", "quantity": ""},
            {"date": "2024-01-03", "quantity": "4"},
        ]
    )

    assert [row.cumulative_quantity for row in form.receipts] == [3, 3, 7]

    form.update_entry("receipts", 1, quantity="1")
    assert [row.cumulative_quantity for row in form.receipts] == [3, 4, 8]


def test_unknown_kind_and_fields_are_programming_errors():
    form = _form()

    with pytest.raises(ValueError):
        form.add_row("transfers")
    form.add_row("receipts")
    with pytest.raises(ValueError):
        form.update_entry("receipts", 0, cumulative_quantity=99)
    with pytest.raises(IndexError):
        form.remove_row("returns", 0)


def test_validate_reports_required_header_fields():
    form = InventoryLedgerForm()

    errors = form.validate(is_new=True)

    assert errors["scope_of_work"] == "Scope of work is required"
    assert errors["part_name"] == "Part name is required"
    assert errors["part_price"] == "Valid part price is required"
    assert errors["date_of_receipt"] == "Date of receipt is required"
    assert errors["receipts"] == "At least one valid receipt is required"


def test_validate_flags_half_filled_rows_by_position():
    form = _form(
        receipts=[{"date": "2024-01-01", "quantity": "5"}],
        dispatches=[
            {"date": "", "quantity": "2"},
            {"date": "2024-01-03", "quantity": "0"},
            {"date": "", "quantity": ""},
        ],
    )

    errors = form.validate(is_new=True)

    assert errors == {
        "dispatches.0.date": "Date is required",
        "dispatches.1.quantity": "Valid quantity is required",
    }


def test_existing_records_do_not_need_a_receipt():
    form = _form()

    assert "receipts" in form.validate(is_new=True)
    assert "receipts" not in form.validate(is_new=False)


def test_submission_keeps_only_contributing_rows_with_coerced_values():
    form = _form(
        receipts=[
            {"date": "2024-01-01", "quantity": "10", "unit": ""},
            {"date": "", "quantity": "5"},
            {"date": "2024-01-04", "quantity": "2.5", "unit": "metres"},
        ],
        dispatches=[{"date": "2024-01-02", "quantity": "4", "unit": "nos"}],
        returns=[{"date": "", "quantity": ""}],
        remarks="  ",
    )

    submission = form.to_submission()

    assert [row.quantity for row in submission.receipts] == [10, 2.5]
    assert [row.date for row in submission.receipts] == [date(2024, 1, 1), date(2024, 1, 4)]
    assert [row.unit for row in submission.receipts] == ["nos", "metres"]
    assert [row.cumulative_quantity for row in submission.receipts] == [10, 12.5]
    assert [row.total for row in submission.receipts] == [100, 25]
    assert submission.dispatches[0].total is None
    assert submission.dispatches[0].cumulative_price == 40
    assert submission.returns == []
    assert submission.part_price == 10
    assert submission.date_of_receipt == date(2024, 1, 1)
    assert submission.remarks is None
    assert submission.cumulative_quantity == 8.5
    assert submission.cumulative_price_value == 85


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-31", date(2024, 1, 31)),
        ("2024-01-31T10:00:00.000Z", date(2024, 1, 31)),
        (date(2024, 2, 1), date(2024, 2, 1)),
        ("", None),
        (None, None),
        ("31/01/2024", None),
    ],
)
def test_parse_entry_date(value, expected):
    assert parse_entry_date(value) == expected


def test_validate_rejects_values_the_ledger_columns_cannot_hold():
    form = _form(
        part_price="1e10",
        receipts=[
            {"date": "2024-01-01", "quantity": "5"},
            {"date": "2024-01-02", "quantity": "1e9"},
        ],
    )

    errors = form.validate(is_new=True)

    assert errors["part_price"] == "Part price is too large"
    assert errors["receipts.1.quantity"] == "Quantity is too large"
    assert "receipts.0.quantity" not in errors


def test_validate_rejects_running_value_beyond_storage():
    form = _form(
        part_price="1000000",
        receipts=[{"date": "2024-01-01", "quantity": "500000000"}],
    )

    errors = form.validate(is_new=True)

    assert "part_price" not in errors
    assert "receipts.0.quantity" not in errors
    assert errors["receipts"] == "Running totals are too large to store"
    assert errors["cumulative_quantity"] == "Stock balance is too large to store"


def test_validate_accepts_largest_storable_values():
    form = _form(
        part_price="100",
        receipts=[{"date": "2024-01-01", "quantity": "999999999"}],
    )

    assert form.validate(is_new=True) == {}
