import sqlite3 # checking the driver connection type

import click # command line interface (ships with Flask)
from flask import current_app, g
from flask.cli import with_appcontext
from sqlalchemy import event
from sqlalchemy.engine import Engine

from .models import db


# SQLite leaves foreign key enforcement off unless each connection asks for it
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def get_db():
    """Return the database connection for the current app context.

    The connection is opened from the Flask-SQLAlchemy engine the first time
    it is requested and reused for the rest of the request.
    """
    if "db" not in g:
        g.db = db.engine.connect()

    return g.db


def close_db(e=None):
    """Close the connection opened by get_db(), if there is one."""
    conn = g.pop("db", None)

    if conn is not None:
        conn.close()


def init_db():
    """Drop and recreate the post and comment tables."""
    conn = get_db()

    with current_app.open_resource("schema.sql") as f:
        script = f.read().decode("utf8")

    # One statement per call, the driver refuses multi-statement strings
    for statement in script.split(";"):
        if statement.strip():
            conn.exec_driver_sql(statement)
    conn.commit()

    current_app.logger.info("Database schema reset")


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Clear the existing data and create new tables."""
    init_db()
    click.echo("Initialized the database.")


def init_app(app):
    # close the connection after each request or CLI command
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)
