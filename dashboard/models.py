import uuid
from datetime import date, datetime

from flask_login import UserMixin
from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import relationship

from dashboard import db

INVOICE_STATUSES = ("pending", "paid")


def new_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False, default="")
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    active = db.Column(db.Boolean, default=True, nullable=False)


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    image_url = db.Column(db.String(255), nullable=False, default="")

    invoices = db.relationship("Invoice", back_populates="customer", lazy=True)

    __table_args__ = (db.Index("ix_customers_name", "name"),)


class Invoice(db.Model):
    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    customer_id = db.Column(
        db.String(36),
        db.ForeignKey("customers.id"),
        nullable=False,
        index=True,
    )
    # Stored in cents
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(10), nullable=False)
    date = db.Column(db.Date, nullable=False, default=date.today, index=True)

    customer = relationship("Customer", back_populates="invoices")

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
    )

    @property
    def amount_dollars(self) -> float:
        return (self.amount or 0) / 100


class ActivityLog(db.Model):
    __tablename__ = "activity_log"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    activity = db.Column(db.String(255), nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="activity_logs")


class PageRevision(db.Model):
    """Counter bumped each time the data behind a cached page changes.

    Every worker process compares its cached copy against this row, so a
    change made through one worker is seen by all of them.
    """

    __tablename__ = "page_revisions"

    path = db.Column(db.String(255), primary_key=True)
    revision = db.Column(db.Integer, nullable=False, default=0)

    @classmethod
    def current(cls, path: str) -> int:
        """Return the stored revision of ``path`` (0 when never bumped)."""

        value = db.session.execute(
            select(cls.revision).where(cls.path == path)
        ).scalar()
        return value or 0

    @classmethod
    def bump(cls, path: str) -> None:
        """Increment the revision of ``path`` and commit."""

        stmt = (
            update(cls)
            .where(cls.path == path)
            .values(revision=cls.revision + 1)
        )
        if db.session.execute(stmt).rowcount:
            db.session.commit()
            return
        try:
            db.session.execute(insert(cls).values(path=path, revision=1))
            db.session.commit()
        except IntegrityError:
            # Another worker inserted the row first.
            db.session.rollback()
            db.session.execute(stmt)
            db.session.commit()
