"""Populate a fresh database with the admin account and sample invoices."""

from datetime import date

from werkzeug.security import generate_password_hash

from dashboard import create_admin_user, create_app, db
from dashboard.models import Customer, Invoice, User

SAMPLE_USER = {
    "name": "User",
    "email": "user@nextmail.com",
    "password": "123456",
}

CUSTOMERS = [
    ("Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer index, amount in cents, status, ISO date)
INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]


def seed_initial_data() -> None:
    """Seed the database with an admin, a demo user, customers and invoices."""
    app = create_app([])
    with app.app_context():
        create_admin_user()

        if User.query.filter_by(email=SAMPLE_USER["email"]).first() is None:
            db.session.add(
                User(
                    name=SAMPLE_USER["name"],
                    email=SAMPLE_USER["email"],
                    password=generate_password_hash(SAMPLE_USER["password"]),
                    active=True,
                )
            )

        if Customer.query.count() == 0:
            customers = [
                Customer(name=name, email=email, image_url=image_url)
                for name, email, image_url in CUSTOMERS
            ]
            db.session.add_all(customers)
            db.session.flush()
            db.session.add_all(
                Invoice(
                    customer_id=customers[index].id,
                    amount=amount,
                    status=status,
                    date=date.fromisoformat(day),
                )
                for index, amount, status, day in INVOICES
            )

        db.session.commit()
        print("Sample users, customers and invoices created.")


if __name__ == "__main__":
    seed_initial_data()
