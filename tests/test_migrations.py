import os

import sqlalchemy as sa
from flask_migrate import downgrade, upgrade

from dashboard import db

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "..", "migrations")


def _schema(engine):
    inspector = sa.inspect(engine)
    return {
        table: (
            {column["name"] for column in inspector.get_columns(table)},
            {index["name"] for index in inspector.get_indexes(table)},
        )
        for table in inspector.get_table_names()
        if table != "alembic_version"
    }


def test_upgrade_builds_the_model_schema(app):
    db.session.remove()
    db.drop_all()

    upgrade(directory=MIGRATIONS_DIR)

    expected = {
        table.name: (
            {column.name for column in table.columns},
            {index.name for index in table.indexes},
        )
        for table in db.metadata.sorted_tables
    }
    assert _schema(db.engine) == expected


def test_downgrade_removes_every_table(app):
    db.session.remove()
    db.drop_all()
    upgrade(directory=MIGRATIONS_DIR)

    downgrade(directory=MIGRATIONS_DIR, revision="base")

    assert _schema(db.engine) == {}
