# tests/v1/test_messages.py
"""Tests for message endpoints."""

from datetime import datetime, timedelta

from fastapi import status


def _send(client, headers, to_username: str = "bob", body: str = "hello bob"):
    return client.post("/messages", json={"to_username": to_username, "body": body}, headers=headers)


def test_send_message(client, alice_auth, bob) -> None:
    response = _send(client, alice_auth)
    assert response.status_code == status.HTTP_201_CREATED
    message = response.json()["message"]
    assert message["from_username"] == "alice"
    assert message["to_username"] == "bob"
    assert message["body"] == "hello bob"
    assert message["sent_at"]
    assert isinstance(message["id"], int)


def test_send_message_to_nonexistent_user(client, alice_auth) -> None:
    response = _send(client, alice_auth, to_username="ghost")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Recipient user not found"


def test_send_message_requires_token(client, bob) -> None:
    response = client.post("/messages", json={"to_username": "bob", "body": "hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_send_message_cannot_spoof_sender(client, alice_auth, bob, carol) -> None:
    response = client.post(
        "/messages",
        json={"to_username": "bob", "body": "hi", "from_username": "carol"},
        headers=alice_auth,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["message"]["from_username"] == "alice"


def test_get_message_as_recipient(client, message, bob_auth) -> None:
    response = client.get(f"/messages/{message.id}", headers=bob_auth)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["message"]
    assert data["id"] == message.id
    assert data["body"] == "hi bob"
    assert data["read_at"] is None
    assert data["from_user"] == {
        "username": "alice",
        "first_name": "Alice",
        "last_name": "Tester",
        "phone": "555-0100",
    }
    assert data["to_user"]["username"] == "bob"
    assert "password" not in data["to_user"]


def test_get_message_as_sender(client, message, alice_auth) -> None:
    response = client.get(f"/messages/{message.id}", headers=alice_auth)
    assert response.status_code == status.HTTP_200_OK


def test_get_message_as_third_party(client, message, carol_auth) -> None:
    response = client.get(f"/messages/{message.id}", headers=carol_auth)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Unauthorized to view message"


def test_get_missing_message(client, alice_auth) -> None:
    response = client.get("/messages/424242", headers=alice_auth)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_read_as_recipient(client, message, bob_auth) -> None:
    response = client.post(f"/messages/{message.id}/read", headers=bob_auth)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["message"]
    assert data["id"] == message.id
    assert data["read_at"] is not None


def test_mark_read_as_sender(client, message, alice_auth, bob_auth) -> None:
    response = client.post(f"/messages/{message.id}/read", headers=alice_auth)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Unauthorized to update message"

    detail = client.get(f"/messages/{message.id}", headers=bob_auth).json()["message"]
    assert detail["read_at"] is None


def test_mark_read_missing_message(client, alice_auth) -> None:
    response = client.post("/messages/424242/read", headers=alice_auth)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Unauthorized to update message"


def test_mark_read_is_not_a_get(client, message, bob_auth) -> None:
    response = client.get(f"/messages/{message.id}/read", headers=bob_auth)
    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


def test_invalid_token_is_rejected(client, message) -> None:
    response = client.get(
        f"/messages/{message.id}",
        headers={"Authorization": "Bearer not.a.valid.jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"


def test_message_flow(client) -> None:
    """Register two users, exchange a message and read it."""
    tokens = {}
    for name in ("alice", "bob"):
        response = client.post(
            "/register",
            json={
                "username": name,
                "password": f"{name}-password",
                "first_name": name.title(),
                "last_name": "Example",
                "phone": "555-0000",
            },
        )
        assert response.status_code == status.HTTP_201_CREATED
        tokens[name] = {"Authorization": f"Bearer {response.json()['token']}"}

    sent = _send(client, tokens["alice"], body="lunch?")
    assert sent.status_code == status.HTTP_201_CREATED
    message_id = sent.json()["message"]["id"]

    # Both participants can read it.
    assert client.get(f"/messages/{message_id}", headers=tokens["bob"]).status_code == 200
    assert client.get(f"/messages/{message_id}", headers=tokens["alice"]).status_code == 200

    # Only the recipient can mark it read.
    denied = client.post(f"/messages/{message_id}/read", headers=tokens["alice"])
    assert denied.status_code == status.HTTP_400_BAD_REQUEST

    marked = client.post(f"/messages/{message_id}/read", headers=tokens["bob"])
    assert marked.status_code == status.HTTP_200_OK
    read_at = marked.json()["message"]["read_at"]
    assert read_at is not None

    # read_at never moves again.
    again = client.post(f"/messages/{message_id}/read", headers=tokens["bob"])
    assert again.json()["message"]["read_at"] == read_at
    detail = client.get(f"/messages/{message_id}", headers=tokens["alice"]).json()["message"]
    assert detail["read_at"] == read_at


def test_get_message_with_huge_id(client, alice_auth) -> None:
    response = client.get(f"/messages/{2**70}", headers=alice_auth)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Message not found"


def test_mark_read_with_huge_id(client, bob_auth) -> None:
    response = client.post(f"/messages/{2**70}/read", headers=bob_auth)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Unauthorized to update message"


def test_timestamps_are_serialized_as_utc(client, message, bob_auth) -> None:
    marked = client.post(f"/messages/{message.id}/read", headers=bob_auth).json()["message"]
    detail = client.get(f"/messages/{message.id}", headers=bob_auth).json()["message"]
    for value in (marked["read_at"], detail["sent_at"], detail["read_at"]):
        assert datetime.fromisoformat(value).utcoffset() == timedelta(0)
