"""Invoice mutations and the sign-in callback.

Each handler validates submitted form data, runs a single SQL statement and
then either redirects back to the invoice list or returns a :class:`State`
for the form page to re-render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Union

from flask import current_app, redirect, url_for
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.wrappers import Response

from dashboard import db
from dashboard.auth import CredentialsSignin, sign_in
from dashboard.forms import InvoiceForm, as_formdata
from dashboard.models import Invoice, new_id
from dashboard.utils.activity import log_activity
from dashboard.utils.cache import revalidate_path
from dashboard.utils.numeric import coerce_amount, to_cents

INVOICES_PATH = "/dashboard/invoices"


@dataclass
class State:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None


ActionResult = Union[State, Response]


def _validated(form_data: Mapping) -> InvoiceForm:
    form = InvoiceForm(formdata=as_formdata(form_data))
    form.validate()
    return form


def _invoices_redirect() -> Response:
    revalidate_path(INVOICES_PATH)
    return redirect(url_for("invoices.view_invoices"))


def create_invoice(prev_state: Optional[State], form_data: Mapping) -> ActionResult:
    form = _validated(form_data)
    if form.errors:
        return State(
            errors=form.field_errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    invoice_id = new_id()
    amount_in_cents = to_cents(coerce_amount(form.amount.data))
    today = date.today()

    try:
        db.session.execute(
            insert(Invoice).values(
                id=invoice_id,
                customer_id=form.customer_id.data,
                amount=amount_in_cents,
                status=form.status.data,
                date=today,
            )
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to create invoice")
        return State(message="Database Error: Failed to create invoice.")

    log_activity(f"Created invoice {invoice_id}")
    return _invoices_redirect()


def update_invoice(invoice_id: Optional[str], form_data: Mapping) -> ActionResult:
    if not invoice_id:
        return State(message="Invoice ID is required.")

    form = _validated(form_data)
    if form.errors:
        return State(
            errors=form.field_errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    amount_in_cents = to_cents(coerce_amount(form.amount.data))

    try:
        db.session.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=form.customer_id.data,
                amount=amount_in_cents,
                status=form.status.data,
            )
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to update invoice %s", invoice_id)
        return State(message="Database Error: Failed to update invoice.")

    log_activity(f"Updated invoice {invoice_id}")
    return _invoices_redirect()


def delete_invoice(invoice_id: str) -> State:
    try:
        db.session.execute(delete(Invoice).where(Invoice.id == invoice_id))
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Failed to delete invoice %s", invoice_id)
        return State(message="Database Error: Failed to delete invoice.")

    revalidate_path(INVOICES_PATH)
    log_activity(f"Deleted invoice {invoice_id}")
    return State(message="Invoice deleted.")


def authenticate(prev_state: Optional[str], form_data: Mapping):
    """Sign in with email and password.

    Returns ``"CredentialSignin"`` when the credentials are rejected and the
    sign-in redirect otherwise. Any other failure is re-raised.
    """
    try:
        response = sign_in("credentials", form_data)
    except CredentialsSignin:
        return "CredentialSignin"
    log_activity("Logged in")
    return response
