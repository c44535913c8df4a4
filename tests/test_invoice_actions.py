from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from dashboard import db
from dashboard.actions import (
    State,
    create_invoice,
    delete_invoice,
    update_invoice,
)
from dashboard.models import ActivityLog, Invoice
from dashboard.utils.cache import get_page_cache


def _form(customer_id, amount="12.34", status="pending"):
    return MultiDict({"customerId": customer_id, "amount": amount, "status": status})


def _drop_invoices_table():
    db.session.remove()
    Invoice.__table__.drop(db.engine)


def test_create_invoice_stores_cents_and_redirects(app, customer_id):
    with app.test_request_context("/dashboard/invoices/create", method="POST"):
        result = create_invoice(State(), _form(customer_id, amount="12.34", status="paid"))

        assert result.status_code == 302
        assert result.location.endswith("/dashboard/invoices")

        invoice = Invoice.query.filter_by(customer_id=customer_id).one()
        assert invoice.amount == 1234
        assert invoice.status == "paid"
        assert invoice.date == date.today()
        assert len(invoice.id) == 36
        assert ActivityLog.query.filter_by(
            activity=f"Created invoice {invoice.id}"
        ).count() == 1


def test_create_invoice_accepts_plain_mapping(app, customer_id):
    with app.test_request_context(method="POST"):
        result = create_invoice(
            None, {"customerId": customer_id, "amount": "50", "status": "pending"}
        )
        assert result.status_code == 302
        assert Invoice.query.one().amount == 5000


def test_create_invoice_reports_every_missing_field(app):
    with app.test_request_context(method="POST"):
        result = create_invoice(State(), MultiDict())

    assert isinstance(result, State)
    assert result.message == "Missing Fields. Failed to Create Invoice."
    assert result.errors == {
        "customerId": ["Please select a customer."],
        "amount": ["Amount must be greater than 0."],
        "status": ["Please select a status."],
    }


@pytest.mark.parametrize("amount", ["0", "-5", "", "abc", "NaN", "0.001", "0.004"])
def test_create_invoice_rejects_non_positive_amounts(app, customer_id, amount):
    with app.test_request_context(method="POST"):
        result = create_invoice(State(), _form(customer_id, amount=amount))
        assert Invoice.query.count() == 0

    assert result.errors == {"amount": ["Amount must be greater than 0."]}


@pytest.mark.parametrize(
    "amount",
    ["1e30", "123456789012345678901234567890", "30000000", "21474836.48"],
)
def test_create_invoice_rejects_amounts_too_large_to_store(app, customer_id, amount):
    with app.test_request_context(method="POST"):
        result = create_invoice(State(), _form(customer_id, amount=amount))
        assert Invoice.query.count() == 0

    assert result.message == "Missing Fields. Failed to Create Invoice."
    assert result.errors == {"amount": ["Amount is too large."]}


def test_create_invoice_accepts_largest_storable_amount(app, customer_id):
    with app.test_request_context(method="POST"):
        result = create_invoice(State(), _form(customer_id, amount="21474836.47"))
        assert result.status_code == 302
        assert Invoice.query.one().amount == 2**31 - 1


def test_update_invoice_rejects_huge_amount(app, invoice_id, customer_id):
    with app.test_request_context(method="POST"):
        result = update_invoice(invoice_id, _form(customer_id, amount="1e30"))
        assert db.session.get(Invoice, invoice_id).amount == 15795

    assert result.errors == {"amount": ["Amount is too large."]}


def test_create_invoice_rejects_unknown_customer_and_status(app, customer_id):
    with app.test_request_context(method="POST"):
        result = create_invoice(
            State(), _form("not-a-customer", status="overdue")
        )

    assert result.errors == {
        "customerId": ["Please select a customer."],
        "status": ["Please select a status."],
    }


def test_create_invoice_database_error(app, customer_id):
    with app.test_request_context(method="POST"):
        get_page_cache().set("/dashboard/invoices", "", ([], 0))
        _drop_invoices_table()

        result = create_invoice(State(), _form(customer_id))

        assert result == State(message="Database Error: Failed to create invoice.")
        assert "/dashboard/invoices" in get_page_cache()
        assert ActivityLog.query.count() == 0


def test_update_invoice_requires_id(app, customer_id):
    with app.test_request_context(method="POST"):
        assert update_invoice(None, _form(customer_id)) == State(
            message="Invoice ID is required."
        )
        assert update_invoice("", _form(customer_id)) == State(
            message="Invoice ID is required."
        )


def test_update_invoice_changes_row(app, invoice_id, customer_id):
    with app.test_request_context(method="POST"):
        result = update_invoice(invoice_id, _form(customer_id, amount="99.99", status="paid"))

        assert result.status_code == 302
        invoice = db.session.get(Invoice, invoice_id)
        db.session.refresh(invoice)
        assert invoice.amount == 9999
        assert invoice.status == "paid"


def test_update_invoice_validation_errors(app, invoice_id):
    with app.test_request_context(method="POST"):
        result = update_invoice(invoice_id, MultiDict({"status": "paid"}))
        assert db.session.get(Invoice, invoice_id).amount == 15795

    assert result.message == "Missing Fields. Failed to Update Invoice."
    assert set(result.errors) == {"customerId", "amount"}


def test_update_invoice_database_error(app, invoice_id, customer_id):
    with app.test_request_context(method="POST"):
        _drop_invoices_table()
        result = update_invoice(invoice_id, _form(customer_id))

    assert result == State(message="Database Error: Failed to update invoice.")


def test_delete_invoice(app, invoice_id):
    with app.test_request_context(method="POST"):
        get_page_cache().set("/dashboard/invoices", "page=2", ([], 0))

        result = delete_invoice(invoice_id)

        assert result == State(message="Invoice deleted.")
        assert db.session.get(Invoice, invoice_id) is None
        assert "/dashboard/invoices" not in get_page_cache()


def test_delete_invoice_database_error(app, invoice_id):
    with app.test_request_context(method="POST"):
        _drop_invoices_table()
        result = delete_invoice(invoice_id)

    assert result == State(message="Database Error: Failed to delete invoice.")
