import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from blog.models import Comment, Post, db


def test_post_gets_id_and_timestamp(app):
    with app.app_context():
        post = Post(title="Second", body="More words")
        db.session.add(post)
        db.session.commit()

        assert post.id == 2
        assert isinstance(post.created, datetime.datetime)


def test_comment_on_missing_post_is_rejected(app):
    with app.app_context():
        db.session.add(Comment(body="orphan", post_id=999))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()

        assert db.session.execute(
            db.select(db.func.count()).select_from(Comment)
        ).scalar_one() == 1


def test_post_comments_in_insertion_order(app):
    with app.app_context():
        post = db.session.get(Post, 1)
        db.session.add(Comment(body="Second comment", post=post))
        db.session.add(Comment(body="Third comment", post=post))
        db.session.commit()

        db.session.expire_all()
        post = db.session.get(Post, 1)

        assert [c.body for c in post.comments] == [
            "Nice post",
            "Second comment",
            "Third comment",
        ]
        assert all(c.post is post for c in post.comments)
