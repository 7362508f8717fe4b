# mypy: ignore-errors
# tests/v1/test_board_posts.py
"""Tests for post and like actions on the board endpoint."""

from fastapi import status

from squadboard.models import Post

BOARD = "/api/v1/board"


def test_create_and_list_posts(client, alice, auth_headers) -> None:
    response = client.post(
        BOARD,
        params={"action": "create_post"},
        json={"body": "Diamond jungler LF duo", "tagline": "Weekends", "images": ["a.png"]},
        headers=auth_headers(alice),
    )
    assert response.status_code == status.HTTP_200_OK
    post = response.json()["post"]
    assert post["author_handle"] == "alice001"
    assert post["author_snapshot"]["display_name"] == "Alice"
    assert post["like_count"] == 0
    assert post["images"] == ["a.png"]

    feed = client.get(BOARD)
    assert feed.status_code == status.HTTP_200_OK
    [listed] = feed.json()["posts"]
    assert listed["id"] == post["id"]
    assert listed["liked"] is False


def test_create_post_requires_login(client) -> None:
    response = client.post(BOARD, params={"action": "create_post"}, json={"body": "anon"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_truncates_long_body(client, alice, auth_headers) -> None:
    response = client.post(
        BOARD,
        params={"action": "create_post"},
        json={"body": "y" * 300},
        headers=auth_headers(alice),
    )
    assert len(response.json()["post"]["body"]) == 200


def test_too_many_images(client, alice, auth_headers) -> None:
    response = client.post(
        BOARD,
        params={"action": "create_post"},
        json={"body": "gallery", "images": [f"{n}.png" for n in range(10)]},
        headers=auth_headers(alice),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_feed_is_newest_first(client, alice, auth_headers) -> None:
    for body in ("older", "newer"):
        client.post(
            BOARD,
            params={"action": "create_post"},
            json={"body": body},
            headers=auth_headers(alice),
        )

    bodies = [post["body"] for post in client.get(BOARD, params={"action": "list_posts"}).json()["posts"]]
    assert bodies == ["newer", "older"]


def test_like_toggle_as_user(client, alice_post, bob, auth_headers) -> None:
    headers = auth_headers(bob)
    liked = client.post(BOARD, params={"action": "like"}, json={"post_id": alice_post.id}, headers=headers)
    assert liked.json() == {"success": True, "liked": True, "like_count": 1}

    feed = client.get(BOARD, headers=headers).json()["posts"]
    assert feed[0]["liked"] is True

    unliked = client.post(BOARD, params={"action": "like"}, json={"post_id": alice_post.id}, headers=headers)
    assert unliked.json() == {"success": True, "liked": False, "like_count": 0}


def test_anonymous_likes_are_keyed_by_forwarded_address(client, db_session, alice_post) -> None:
    first = client.post(
        BOARD,
        params={"action": "like"},
        json={"post_id": alice_post.id},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
    )
    second = client.post(
        BOARD,
        params={"action": "like"},
        json={"post_id": alice_post.id},
        headers={"X-Forwarded-For": "198.51.100.2"},
    )

    assert first.json()["like_count"] == 1
    assert second.json()["like_count"] == 2
    db_session.refresh(alice_post)
    assert alice_post.liker_ids == ["ip:203.0.113.7", "ip:198.51.100.2"]


def test_like_missing_post(client) -> None:
    response = client.post(BOARD, params={"action": "like"}, json={"post_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_permissions(client, db_session, alice_post, bob, admin, auth_headers) -> None:
    post_id = alice_post.id
    denied = client.post(
        BOARD, params={"action": "delete_post"}, json={"post_id": post_id}, headers=auth_headers(bob)
    )
    assert denied.status_code == status.HTTP_403_FORBIDDEN

    allowed = client.post(
        BOARD, params={"action": "delete_post"}, json={"post_id": post_id}, headers=auth_headers(admin)
    )
    assert allowed.status_code == status.HTTP_200_OK
    assert db_session.get(Post, post_id) is None
