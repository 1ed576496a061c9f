from flask_sqlalchemy import SQLAlchemy # database operations

# Create SQLAlchemy instance
db = SQLAlchemy()

# Define Data Models (Data Layer Interface)
# Table layout matches schema.sql, which is what init-db actually runs.
# Timestamps are filled in by the database at insertion.
class Post(db.Model):
    __tablename__ = "post"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    created = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )
    title = db.Column(db.Text, nullable=False)
    body = db.Column(db.Text, nullable=False)


# Each comment belongs to exactly one post
class Comment(db.Model):
    __tablename__ = "comment"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    created = db.Column(
        db.DateTime, nullable=False, server_default=db.func.current_timestamp()
    )
    body = db.Column(db.Text, nullable=False)
    post_id = db.Column(db.Integer, db.ForeignKey(Post.id), nullable=False)
    post = db.relationship(
        Post,
        backref=db.backref("comments", order_by=[created, id]),
    )
