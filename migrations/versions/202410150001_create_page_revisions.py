"""Create the page revision table used to invalidate cached pages."""

import sqlalchemy as sa
from alembic import op


def _has_table(table_name: str, bind) -> bool:
    inspector = sa.inspect(bind)
    return inspector.has_table(table_name)


# revision identifiers, used by Alembic.
revision = "202410150001"
down_revision = "202410010001"
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()

    if not _has_table("page_revisions", bind):
        op.create_table(
            "page_revisions",
            sa.Column("path", sa.String(length=255), primary_key=True),
            sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        )


def downgrade():
    op.drop_table("page_revisions")
