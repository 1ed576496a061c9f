import pytest
from sqlalchemy import text

from blog import create_app
from blog.db import get_db, init_db


@pytest.fixture
def app(tmp_path):
    """App bound to a fresh database holding one post with one comment."""
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'blog.sqlite'}",
        }
    )

    with app.app_context():
        init_db()
        conn = get_db()
        conn.execute(
            text("INSERT INTO post (title, body) VALUES ('First post', 'Hello there')")
        )
        conn.execute(
            text("INSERT INTO comment (body, post_id) VALUES ('Nice post', 1)")
        )
        conn.commit()

    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def count_rows(table):
    """Number of rows in table, read through the request connection."""
    return get_db().execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
