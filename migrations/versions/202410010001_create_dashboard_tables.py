"""Create users, customers, invoices and activity log tables."""

import sqlalchemy as sa
from alembic import op


def _has_table(table_name: str, bind) -> bool:
    inspector = sa.inspect(bind)
    return inspector.has_table(table_name)


# revision identifiers, used by Alembic.
revision = "202410010001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()

    if not _has_table("users", bind):
        op.create_table(
            "users",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False, unique=True),
            sa.Column("password", sa.String(length=255), nullable=False),
            sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        )

    if not _has_table("customers", bind):
        op.create_table(
            "customers",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("image_url", sa.String(length=255), nullable=False, server_default=""),
        )
        op.create_index("ix_customers_name", "customers", ["name"])

    if not _has_table("invoices", bind):
        op.create_table(
            "invoices",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("customer_id", sa.String(length=36), nullable=False),
            sa.Column("amount", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(length=10), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.ForeignKeyConstraint(
                ["customer_id"], ["customers.id"], name="fk_invoices_customer_id"
            ),
            sa.CheckConstraint(
                "status IN ('pending', 'paid')", name="ck_invoices_status"
            ),
        )
        op.create_index("ix_invoices_customer_id", "invoices", ["customer_id"])
        op.create_index("ix_invoices_date", "invoices", ["date"])

    if not _has_table("activity_log", bind):
        op.create_table(
            "activity_log",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.String(length=36), nullable=True),
            sa.Column("activity", sa.String(length=255), nullable=False),
            sa.Column("timestamp", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(
                ["user_id"], ["users.id"], name="fk_activity_log_user_id"
            ),
        )


def downgrade():
    op.drop_table("activity_log")
    op.drop_index("ix_invoices_date", table_name="invoices")
    op.drop_index("ix_invoices_customer_id", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_customers_name", table_name="customers")
    op.drop_table("customers")
    op.drop_table("users")
