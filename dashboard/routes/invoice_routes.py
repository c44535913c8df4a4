from flask import (
    Blueprint,
    abort,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from dashboard import db
from dashboard.actions import State, create_invoice, delete_invoice, update_invoice
from dashboard.forms import CSRFOnlyForm, InvoiceForm
from dashboard.models import Invoice
from dashboard.services.invoice_queries import fetch_filtered_invoices
from dashboard.utils.cache import cached_page_data
from dashboard.utils.numeric import from_cents
from dashboard.utils.pagination import (
    build_pagination_args,
    get_page,
    get_per_page,
    total_pages,
)

invoices = Blueprint("invoices", __name__)


@invoices.route("/dashboard/invoices")
@login_required
def view_invoices():
    """List invoices matching the search box, one page at a time."""
    query = request.args.get("query", "")
    page = get_page()
    per_page = get_per_page()

    rows, total = cached_page_data(
        lambda: fetch_filtered_invoices(query, page, per_page),
        key=(query.strip().lower(), page, per_page),
    )
    return render_template(
        "invoices/view_invoices.html",
        invoices=rows,
        query=query,
        page=page,
        per_page=per_page,
        pages=total_pages(total, per_page),
        total=total,
        delete_form=CSRFOnlyForm(),
        pagination_args=build_pagination_args(per_page),
    )


@invoices.route("/dashboard/invoices/create", methods=["GET", "POST"])
@login_required
def create_invoice_page():
    """Show the new invoice form and submit it."""
    form = InvoiceForm()
    state = State()
    if request.method == "POST":
        result = create_invoice(state, request.form)
        if not isinstance(result, State):
            return result
        state = result
    return render_template(
        "invoices/invoice_form.html",
        form=form,
        state=state,
        title="Create Invoice",
        action=url_for("invoices.create_invoice_page"),
    )


@invoices.route("/dashboard/invoices/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice_page(invoice_id):
    """Show an existing invoice in the form and submit changes.

    Submitting to an unknown id behaves like the update statement itself:
    nothing changes and the user is sent back to the list.
    """
    form = InvoiceForm()
    state = State()
    if request.method == "POST":
        result = update_invoice(invoice_id, request.form)
        if not isinstance(result, State):
            return result
        state = result
    else:
        invoice = db.session.get(Invoice, invoice_id)
        if invoice is None:
            abort(404)
        form.customer_id.data = invoice.customer_id
        form.amount.data = str(from_cents(invoice.amount))
        form.status.data = invoice.status

    return render_template(
        "invoices/invoice_form.html",
        form=form,
        state=state,
        title="Edit Invoice",
        action=url_for("invoices.edit_invoice_page", invoice_id=invoice_id),
    )


@invoices.route("/dashboard/invoices/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice_page(invoice_id):
    """Delete an invoice and return to the list."""
    form = CSRFOnlyForm()
    if not form.validate_on_submit():
        abort(400)
    state = delete_invoice(invoice_id)
    category = "danger" if state.message.startswith("Database Error") else "success"
    flash(state.message, category)
    return redirect(url_for("invoices.view_invoices"))
