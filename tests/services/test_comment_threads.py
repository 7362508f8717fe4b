# tests/services/test_comment_threads.py
"""Tests for comments and the comment counter."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from squadboard.core.errors import AuthorizationError, NotFoundError, ValidationError
from squadboard.core.settings import settings
from squadboard.models import Account, Comment, Post
from squadboard.services.comments import COMMENT_MAX_LENGTH, CommentThreads
from squadboard.services.posts import PostBoard


def _count_rows(db_session, post_id: int) -> int:
    return db_session.query(Comment).filter(Comment.post_id == post_id).count()


def test_add_increments_counter_and_snapshots_author(db_session, alice_post, bob) -> None:
    comment = CommentThreads(db_session).add_comment(alice_post.id, bob, "I can play tank")

    db_session.refresh(alice_post)
    assert alice_post.comment_count == 1
    assert comment.author_handle == "bob00001"
    assert comment.author_snapshot["display_name"] == "Bob"


def test_long_comment_is_truncated(db_session, alice_post, bob) -> None:
    comment = CommentThreads(db_session).add_comment(alice_post.id, bob, "x" * 500)
    assert len(comment.body) == COMMENT_MAX_LENGTH


def test_empty_comment_is_rejected(db_session, alice_post, bob) -> None:
    with pytest.raises(ValidationError):
        CommentThreads(db_session).add_comment(alice_post.id, bob, "   ")


def test_comment_on_missing_post(db_session, bob) -> None:
    with pytest.raises(NotFoundError):
        CommentThreads(db_session).add_comment(4242, bob, "hello?")


def test_interleaved_adds_and_deletes_keep_counter_exact(db_session, alice, alice_post, bob) -> None:
    threads = CommentThreads(db_session)
    first = threads.add_comment(alice_post.id, bob, "one")
    threads.add_comment(alice_post.id, alice, "two")
    threads.delete_comment(alice_post.id, first.id, bob)
    third = threads.add_comment(alice_post.id, bob, "three")
    threads.delete_comment(alice_post.id, third.id, bob)

    db_session.refresh(alice_post)
    assert alice_post.comment_count == _count_rows(db_session, alice_post.id) == 1


def test_only_author_or_admin_may_delete(db_session, alice, alice_post, bob, admin) -> None:
    threads = CommentThreads(db_session)
    comment = threads.add_comment(alice_post.id, bob, "mine")

    with pytest.raises(AuthorizationError):
        threads.delete_comment(alice_post.id, comment.id, alice)

    threads.delete_comment(alice_post.id, comment.id, admin)
    db_session.refresh(alice_post)
    assert alice_post.comment_count == 0


def test_delete_requires_matching_post(db_session, alice, alice_post, bob) -> None:
    other = PostBoard(db_session).create_post(bob, "Second post")
    comment = CommentThreads(db_session).add_comment(alice_post.id, bob, "here")

    with pytest.raises(NotFoundError):
        CommentThreads(db_session).delete_comment(other.id, comment.id, bob)


def test_list_comments_oldest_first(db_session, alice, alice_post, bob, clock) -> None:
    threads = CommentThreads(db_session, clock=clock)
    threads.add_comment(alice_post.id, bob, "first")
    clock.advance(minutes=1)
    threads.add_comment(alice_post.id, alice, "second")

    bodies = [comment.body for comment in threads.list_comments(alice_post.id)]
    assert bodies == ["first", "second"]


def test_deleting_post_removes_its_comments(db_session, alice, alice_post, bob) -> None:
    CommentThreads(db_session).add_comment(alice_post.id, bob, "soon gone")
    post_id = alice_post.id

    PostBoard(db_session).delete_post(post_id, alice)

    assert db_session.get(Post, post_id) is None
    assert _count_rows(db_session, post_id) == 0
    with pytest.raises(NotFoundError):
        CommentThreads(db_session).list_comments(post_id)


def test_concurrent_adds_and_deletes_keep_counter_exact(
    file_sessions, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "transaction_max_attempts", 50)
    with file_sessions() as setup:
        author = Account(handle="author01", password_digest="unused", display_name="Author")
        setup.add(author)
        setup.commit()
        post_id = PostBoard(setup).create_post(author, "Five-stack tonight").id
        threads = CommentThreads(setup)
        doomed = [threads.add_comment(post_id, author, f"old {n}").id for n in range(4)]

    def add(n: int) -> None:
        with file_sessions() as session:
            writer = session.get(Account, "author01")
            CommentThreads(session).add_comment(post_id, writer, f"new {n}")

    def delete(comment_id: int) -> None:
        with file_sessions() as session:
            writer = session.get(Account, "author01")
            CommentThreads(session).delete_comment(post_id, comment_id, writer)

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(add, n) for n in range(8)]
        futures += [pool.submit(delete, comment_id) for comment_id in doomed]
        for future in futures:
            future.result()

    with file_sessions() as check:
        post = check.get(Post, post_id)
        assert post.comment_count == _count_rows(check, post_id) == 8
