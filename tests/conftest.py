from __future__ import annotations

import os

import pytest
from werkzeug.security import generate_password_hash

from dashboard import create_admin_user, create_app, db
from dashboard.models import Customer, Invoice, User


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "testsecret")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")
    monkeypatch.setenv("ADMIN_PASS", "adminpass")
    monkeypatch.setenv("RATELIMIT_ENABLED", "false")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "dashboard.db"))
    monkeypatch.delenv("DATABASE_URL", raising=False)

    cwd = os.getcwd()
    os.chdir(tmp_path)
    app = create_app(["--demo"])
    os.chdir(cwd)

    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()

        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    """An active user whose password is ``123456``."""
    with app.app_context():
        account = User(
            name="User",
            email="user@example.com",
            password=generate_password_hash("123456"),
            active=True,
        )
        db.session.add(account)
        db.session.commit()
        return account.email


@pytest.fixture
def customer_id(app):
    with app.app_context():
        customer = Customer(
            name="Delba de Oliveira",
            email="delba@oliveira.com",
            image_url="/customers/delba-de-oliveira.png",
        )
        db.session.add(customer)
        db.session.commit()
        return customer.id


@pytest.fixture
def invoice_id(app, customer_id):
    with app.app_context():
        invoice = Invoice(customer_id=customer_id, amount=15795, status="pending")
        db.session.add(invoice)
        db.session.commit()
        return invoice.id
