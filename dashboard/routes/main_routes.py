from flask import Blueprint, render_template
from flask_login import current_user, login_required

from dashboard.services.invoice_queries import card_data, latest_invoices

main = Blueprint("main", __name__)


@main.route("/dashboard")
@login_required
def overview():
    """Render the dashboard cards and the most recent invoices."""

    return render_template(
        "dashboard.html",
        user=current_user,
        cards=card_data(),
        latest=latest_invoices(),
    )
