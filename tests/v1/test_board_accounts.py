# mypy: ignore-errors
# tests/v1/test_board_accounts.py
"""Tests for account actions on the board endpoint."""

from fastapi import status

from squadboard.models import Account

BOARD = "/api/v1/board"


def test_register_and_login(client, db_session) -> None:
    """A new account can log in and receives a usable token."""
    response = client.post(
        BOARD,
        params={"action": "register"},
        json={"handle": "newbie01", "password": "hunter22", "display_name": "Newbie"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["user"]["handle"] == "newbie01"
    assert "password_digest" not in data["user"]

    login = client.post(BOARD, json={"handle": "newbie01", "password": "hunter22"})
    assert login.status_code == status.HTTP_200_OK
    token = login.json()["access_token"]

    inbox = client.get(
        BOARD,
        params={"action": "chat_inbox"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert inbox.status_code == status.HTTP_200_OK
    assert inbox.json()["sessions"] == []


def test_register_rejects_short_handle(client) -> None:
    response = client.post(
        BOARD,
        params={"action": "register"},
        json={"handle": "short", "password": "hunter22", "display_name": "Short"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in response.json()


def test_register_duplicate_handle(client, alice) -> None:
    response = client.post(
        BOARD,
        params={"action": "register"},
        json={"handle": "alice001", "password": "another", "display_name": "Copy"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_register_missing_field(client) -> None:
    response = client.post(BOARD, params={"action": "register"}, json={"handle": "nopass01"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "password" in response.json()["error"]


def test_login_lockout_flow(client, alice) -> None:
    """Two misses report remaining attempts, the third locks the account."""
    bad = {"handle": "alice001", "password": "wrong-password"}

    first = client.post(BOARD, params={"action": "login"}, json=bad)
    second = client.post(BOARD, params={"action": "login"}, json=bad)
    third = client.post(BOARD, params={"action": "login"}, json=bad)
    fourth = client.post(
        BOARD, params={"action": "login"}, json={"handle": "alice001", "password": "hunter22"}
    )

    assert first.status_code == status.HTTP_400_BAD_REQUEST
    assert first.json()["remaining_attempts"] == 2
    assert second.json()["remaining_attempts"] == 1
    assert third.status_code == status.HTTP_403_FORBIDDEN
    assert "locked_until" in third.json()
    assert fourth.status_code == status.HTTP_403_FORBIDDEN


def test_login_unknown_handle(client) -> None:
    response = client.post(BOARD, json={"handle": "stranger", "password": "hunter22"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_own_profile(client, alice, auth_headers) -> None:
    response = client.post(
        BOARD,
        params={"action": "update_profile"},
        json={"display_name": "Ally", "looking_for": "support main"},
        headers=auth_headers(alice),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["display_name"] == "Ally"

    profile = client.get(BOARD, params={"action": "get_user_profile", "handle": "alice001"})
    assert profile.status_code == status.HTTP_200_OK
    assert profile.json()["user"]["looking_for"] == "support main"


def test_update_other_profile_is_forbidden(client, alice, bob, auth_headers) -> None:
    response = client.post(
        BOARD,
        params={"action": "update_profile"},
        json={"handle": "alice001", "display_name": "Hijacked"},
        headers=auth_headers(bob),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_profile_requires_login(client) -> None:
    response = client.post(
        BOARD, params={"action": "update_profile"}, json={"display_name": "Nobody"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_missing_profile(client) -> None:
    response = client.get(BOARD, params={"action": "get_user_profile", "handle": "ghost000"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_user_admin_only(client, db_session, alice, bob, admin, auth_headers) -> None:
    denied = client.post(
        BOARD,
        params={"action": "delete_user"},
        json={"handle": "bob00001"},
        headers=auth_headers(alice),
    )
    assert denied.status_code == status.HTTP_403_FORBIDDEN

    allowed = client.post(
        BOARD,
        params={"action": "delete_user"},
        json={"handle": "bob00001"},
        headers=auth_headers(admin),
    )
    assert allowed.status_code == status.HTTP_200_OK
    assert db_session.get(Account, "bob00001") is None
