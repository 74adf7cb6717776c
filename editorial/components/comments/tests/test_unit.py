"""
Comment moderation unit tests.
"""

from __future__ import annotations

import dataclasses
from datetime import timedelta
from uuid import uuid4

import pytest

from editorial.components.comments import CommentComponent, CreateCommentInput
from editorial.components.query import CommentFilter
from editorial.domain.entities import Post
from editorial.domain.errors import InvalidInputError, NotFoundError
from editorial.rules.models import CommentRules, Rules

# --- Fixtures ---


@pytest.fixture
def post(uow, clock) -> Post:
    now = clock.now_utc()
    item = Post(
        title="Derby Day Recap",
        slug="derby-day-recap",
        content="It rained.",
        status="published",
        author_id=uuid4(),
        published_at=now,
        created_at=now,
        updated_at=now,
    )
    with uow:
        uow.posts.insert(item)
        uow.commit()
    return item


@pytest.fixture
def comments(uow, clock, rules) -> CommentComponent:
    return CommentComponent(uow, clock, rules)


def reader(post_id, **kwargs) -> CreateCommentInput:
    fields = dict(
        post_id=post_id,
        author_name="Ann Reader",
        author_email="ann@example.com",
        content="Great recap!",
    )
    fields.update(kwargs)
    return CreateCommentInput(**fields)


# --- Create ---


class TestCreate:
    def test_new_comment_is_pending(self, comments, post, clock) -> None:
        comment = comments.create(reader(post.id, ip_address="203.0.113.9", user_agent="ua"))

        assert comment.status == "pending"
        assert comment.parent_id is None
        assert comment.created_at == clock.now_utc()
        assert comments.get(comment.id) == comment

    @pytest.mark.parametrize("field", ["author_name", "author_email", "content"])
    def test_required_fields(self, comments, post, field) -> None:
        with pytest.raises(InvalidInputError) as exc:
            comments.create(reader(post.id, **{field: "  "}))
        assert exc.value.field == field

    def test_malformed_email(self, comments, post) -> None:
        with pytest.raises(InvalidInputError) as exc:
            comments.create(reader(post.id, author_email="not-an-email"))
        assert exc.value.field == "author_email"

    def test_content_length_limit(self, uow, clock, post) -> None:
        rules = Rules(comments=CommentRules(max_content_length=10))
        with pytest.raises(InvalidInputError):
            CommentComponent(uow, clock, rules).create(reader(post.id, content="x" * 11))

    def test_unknown_post(self, comments) -> None:
        with pytest.raises(InvalidInputError) as exc:
            comments.create(reader(uuid4()))
        assert exc.value.field == "post_id"

    def test_reply_to_root(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        reply = comments.create(reader(post.id, parent_id=root.id))
        assert reply.parent_id == root.id
        assert reply.status == "pending"

    def test_reply_to_reply_rejected(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        reply = comments.create(reader(post.id, parent_id=root.id))

        with pytest.raises(InvalidInputError) as exc:
            comments.create(reader(post.id, parent_id=reply.id))
        assert exc.value.field == "parent_id"

    def test_reply_to_unknown_parent(self, comments, post) -> None:
        with pytest.raises(InvalidInputError):
            comments.create(reader(post.id, parent_id=uuid4()))

    def test_reply_across_posts_rejected(self, comments, post, uow, clock) -> None:
        other = post.model_copy(update={"id": uuid4(), "slug": "other-post"})
        with uow:
            uow.posts.insert(other)
            uow.commit()
        root = comments.create(reader(post.id))

        with pytest.raises(InvalidInputError):
            comments.create(reader(other.id, parent_id=root.id))


# --- Moderation ---


class TestModeration:
    @pytest.mark.parametrize("status", ["approved", "spam", "trash"])
    def test_pending_to_any(self, comments, post, status) -> None:
        comment = comments.create(reader(post.id))
        assert comments.set_status(comment.id, status).status == status
        assert comments.get(comment.id).status == status

    def test_decisions_are_reversible(self, comments, post) -> None:
        comment = comments.create(reader(post.id))
        for status in ("spam", "approved", "trash", "pending", "approved"):
            comments.set_status(comment.id, status)
        assert comments.get(comment.id).status == "approved"

    def test_unknown_status(self, comments, post) -> None:
        comment = comments.create(reader(post.id))
        with pytest.raises(InvalidInputError):
            comments.set_status(comment.id, "published")

    def test_missing_comment(self, comments) -> None:
        with pytest.raises(NotFoundError):
            comments.set_status(uuid4(), "approved")


# --- Listing ---


class TestListForPost:
    def test_public_listing_only_approved_roots(self, comments, post, clock) -> None:
        approved = comments.create(reader(post.id, content="first"))
        clock.advance(timedelta(minutes=1))
        comments.create(reader(post.id, content="pending"))
        clock.advance(timedelta(minutes=1))
        spam = comments.create(reader(post.id, content="spam"))
        comments.set_status(approved.id, "approved")
        comments.set_status(spam.id, "spam")

        threads = comments.list_for_post(post.id, only_approved=True)

        assert [t.comment.id for t in threads] == [approved.id]
        assert all(t.comment.status == "approved" for t in threads)

    def test_roots_newest_first_replies_oldest_first(self, comments, post, clock) -> None:
        older = comments.create(reader(post.id))
        clock.advance(timedelta(minutes=1))
        newer = comments.create(reader(post.id))
        clock.advance(timedelta(minutes=1))
        r1 = comments.create(reader(post.id, parent_id=older.id))
        clock.advance(timedelta(minutes=1))
        r2 = comments.create(reader(post.id, parent_id=older.id))

        threads = comments.list_for_post(post.id, only_approved=False)

        assert [t.comment.id for t in threads] == [newer.id, older.id]
        assert [r.id for r in threads[1].replies] == [r1.id, r2.id]
        assert threads[0].replies == []

    def test_unapproved_replies_hidden_on_public_path(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        good = comments.create(reader(post.id, parent_id=root.id))
        comments.create(reader(post.id, parent_id=root.id))
        comments.set_status(root.id, "approved")
        comments.set_status(good.id, "approved")

        (thread,) = comments.list_for_post(post.id, only_approved=True)

        assert [r.id for r in thread.replies] == [good.id]

    def test_reply_filter_can_be_switched_off(self, uow, clock, post) -> None:
        rules = Rules(comments=CommentRules(public_replies_require_approval=False))
        comments = CommentComponent(uow, clock, rules)
        root = comments.create(reader(post.id))
        pending_reply = comments.create(reader(post.id, parent_id=root.id))
        comments.set_status(root.id, "approved")

        (thread,) = comments.list_for_post(post.id, only_approved=True)

        assert [r.id for r in thread.replies] == [pending_reply.id]
        assert thread.replies[0].status == "pending"

    def test_admin_listing_sees_everything(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        comments.create(reader(post.id, parent_id=root.id))

        (thread,) = comments.list_for_post(post.id, only_approved=False)

        assert thread.comment.status == "pending"
        assert len(thread.replies) == 1


class TestModerationQueue:
    def test_queue_filters_by_status_and_post(self, comments, post, clock) -> None:
        a = comments.create(reader(post.id))
        clock.advance(timedelta(seconds=1))
        b = comments.create(reader(post.id))
        comments.create(reader(post.id, parent_id=a.id))
        comments.set_status(a.id, "approved")

        pending = comments.list(CommentFilter(status="pending"))
        assert [c.id for c in pending.items] == [b.id]

        everything = comments.list(CommentFilter(post_id=post.id))
        assert [c.id for c in everything.items] == [b.id, a.id]
        assert everything.total == 2

    def test_unknown_status_filter(self, comments) -> None:
        with pytest.raises(InvalidInputError):
            comments.list(dataclasses.replace(CommentFilter(), status="deleted"))


# --- Delete ---


class TestDelete:
    def test_deleting_root_deletes_replies(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        reply = comments.create(reader(post.id, parent_id=root.id))

        comments.delete(root.id)

        for gone in (root.id, reply.id):
            with pytest.raises(NotFoundError):
                comments.get(gone)

    def test_deleting_reply_keeps_root(self, comments, post) -> None:
        root = comments.create(reader(post.id))
        reply = comments.create(reader(post.id, parent_id=root.id))

        comments.delete(reply.id)

        assert comments.get(root.id).id == root.id
        (thread,) = comments.list_for_post(post.id, only_approved=False)
        assert thread.replies == []

    def test_delete_missing(self, comments) -> None:
        with pytest.raises(NotFoundError):
            comments.delete(uuid4())
