from flask import Blueprint, Flask, current_app, redirect, render_template, request, url_for # web framework
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import sys
# Access environment variables
import os

from . import db as database # connection handle, teardown hook and init-db command
from .db import get_db
from .models import db, Post, Comment  # Import db and data models from models.py

# All blog pages live on one blueprint so any app built by create_app gets them
bp = Blueprint("blog", __name__)


def create_app(test_config=None):
    # Flask(__name__)
    #  - __name__ is "blog.app", so Flask looks for templates/ and schema.sql
    #    next to this file
    #  - instance_relative_config keeps the SQLite file out of the package
    app = Flask(__name__, instance_relative_config=True)

    # Configure database with fallback
    # A relative sqlite path resolves inside the instance folder
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY", "dev"),
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", "sqlite:///blog.sqlite"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,  # Avoids a warning
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO"),
    )

    if test_config is not None:
        app.config.from_mapping(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    os.makedirs(app.instance_path, exist_ok=True)

    # Initialize db with app
    db.init_app(app)
    database.init_app(app)

    app.register_blueprint(bp)

    return app


# handler for the root URL path "/", only accepts HTTP GET requests
# Displays all posts, newest first (READ operation)
@bp.route("/", methods=["GET"])
def index():
    posts = db.session.execute(
        db.select(Post).order_by(Post.created.desc(), Post.id.desc())
    ).scalars().all()
    current_app.logger.debug("Retrieved %d posts", len(posts))
    # template loops through 'posts' and displays them
    return render_template("index.html", posts=posts)


# Handles /create URL for both GET (display form) and POST (process form) requests
@bp.route("/create", methods=["GET", "POST"])
def create():
    if request.method == "POST":
        # Extracts form data when submitted
        title = request.form.get("title", "").strip()
        body = request.form.get("body", "").strip()

        error = None
        if not title:
            error = "Title is required."
        elif not body:
            error = "Body is required."

        if error is not None:
            return render_template("create.html", error=error)

        # Creates new Post object with form data.
        # Adds it to the database session.
        # Commits the transaction to save
        new_post = Post(title=title, body=body)
        try:
            db.session.add(new_post)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error("Error creating post: %s", e)
            return render_template("create.html", error=str(e))

        current_app.logger.info("Created post %d: %s", new_post.id, title)
        return redirect(url_for("blog.index"))

    return render_template("create.html")


# Shows a single post with its comments, 404 if the id is unknown
@bp.route("/<int:post_id>", methods=["GET"])
def post(post_id):
    post = db.get_or_404(Post, post_id)
    return render_template("post.html", post=post)


@bp.route("/<int:post_id>/comment", methods=["POST"])
def comment(post_id):
    post = db.get_or_404(Post, post_id)
    body = request.form.get("body", "").strip()

    if not body:
        return render_template("post.html", post=post, error="Comment is required.")

    new_comment = Comment(body=body, post_id=post.id)
    try:
        db.session.add(new_comment)
        db.session.commit()
    except SQLAlchemyError as e:
        # e.g. the post was removed by init-db between the lookup and the commit
        db.session.rollback()
        current_app.logger.error("Error adding comment to post %d: %s", post_id, e)
        return render_template("post.html", post=post, error=str(e))

    current_app.logger.info("Added comment %d to post %d", new_comment.id, post_id)
    return redirect(url_for("blog.post", post_id=post_id))


@bp.route("/health")
def health():
    try:
        get_db().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        current_app.logger.error("Health check failed: %s", e)
        return {"status": "unhealthy", "database": str(e)}, 503
    return {"status": "healthy", "database": "connected"}, 200


# Test database connection on startup
# Only creates tables that are missing, use init-db to reset them
def check_db_connection(app):
    try:
        with app.app_context():
            db.create_all()
            app.logger.info("Database connected successfully")
            return True
    except SQLAlchemyError as e:
        app.logger.error("Database connection failed: %s", e)
        sys.exit(1)


# Run the app and create database
# python -m blog.app
if __name__ == "__main__":
    app = create_app()
    if check_db_connection(app):
        # Starts the Flask development server
        # host='0.0.0.0' accepts connections from outside a container
        app.run(host="0.0.0.0", debug=True)
