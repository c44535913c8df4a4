"""Read queries backing the invoice list and overview pages.

Results are returned as plain dictionaries so they can be kept in the page
cache after the SQLAlchemy session that produced them has closed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from sqlalchemy import String, cast, func, or_

from dashboard import db
from dashboard.models import Customer, Invoice


def _search_filter(query: str):
    pattern = f"%{query.strip()}%"
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
        cast(Invoice.amount, String).ilike(pattern),
        cast(Invoice.date, String).ilike(pattern),
        Invoice.status.ilike(pattern),
    )


def _filtered(query: str):
    stmt = db.session.query(Invoice, Customer).join(
        Customer, Invoice.customer_id == Customer.id
    )
    if query and query.strip():
        stmt = stmt.filter(_search_filter(query))
    return stmt


def fetch_filtered_invoices(
    query: str, page: int, per_page: int
) -> Tuple[List[Dict[str, Any]], int]:
    """Return one page of invoices matching ``query`` and the match count."""

    base = _filtered(query)
    total = base.count()
    rows = (
        base.order_by(Invoice.date.desc(), Invoice.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    invoices = [
        {
            "id": invoice.id,
            "amount": invoice.amount,
            "date": invoice.date,
            "status": invoice.status,
            "customer_id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "image_url": customer.image_url,
        }
        for invoice, customer in rows
    ]
    return invoices, total


def _sum_for_status(status: str) -> int:
    result = (
        db.session.query(func.coalesce(func.sum(Invoice.amount), 0))
        .filter(Invoice.status == status)
        .scalar()
    )
    return int(result or 0)


def card_data() -> Dict[str, int]:
    """Counts and totals (in cents) for the overview cards."""

    return {
        "invoice_count": db.session.query(func.count(Invoice.id)).scalar() or 0,
        "customer_count": db.session.query(func.count(Customer.id)).scalar() or 0,
        "total_paid": _sum_for_status("paid"),
        "total_pending": _sum_for_status("pending"),
    }


def latest_invoices(limit: int = 5) -> List[Dict[str, Any]]:
    invoices, _ = fetch_filtered_invoices("", 1, limit)
    return invoices
