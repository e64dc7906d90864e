# tests/v1/test_threads.py
"""Tests for thread, comment and vote endpoints."""

from __future__ import annotations

from fastapi import status


def _create_thread(client, headers, title="Hello", content="World"):
    response = client.post(
        "/api/v1/threads/", json={"title": title, "content": content}, headers=headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_list_threads_empty(client) -> None:
    response = client.get("/api/v1/threads/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_create_thread_requires_auth(client) -> None:
    response = client.post("/api/v1/threads/", json={"title": "T", "content": "C"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_thread(client, auth_token, test_user) -> None:
    data = _create_thread(client, auth_token)

    assert data["title"] == "Hello"
    assert data["upvotes"] == 1
    assert data["downvotes"] == 0
    assert data["score"] == 1
    assert data["comment_count"] == 0
    assert data["comments"] == []
    assert data["author"] == {
        "id": test_user.id,
        "username": "alice",
        "display_name": "Alice",
        "avatar_url": test_user.avatar_url,
        "deleted": False,
    }


def test_thread_body_reads_back_unchanged(client, auth_token) -> None:
    body = "    indented code\n\n> quote\n"
    thread = _create_thread(client, auth_token, content=body)

    detail = client.get(f"/api/v1/threads/{thread['id']}").json()
    assert detail["content"] == body


def test_create_thread_blank_title(client, auth_token) -> None:
    response = client.post(
        "/api/v1/threads/", json={"title": "  ", "content": "C"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["error"]["kind"] == "ValidationError"


def test_get_unknown_thread(client) -> None:
    response = client.get("/api/v1/threads/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": {"kind": "NotFound", "message": "Thread not found."}}


def test_comment_and_reply_nest(client, auth_token, other_auth_token) -> None:
    thread = _create_thread(client, auth_token)
    url = f"/api/v1/threads/{thread['id']}/comments"

    top = client.post(url, json={"content": "Top"}, headers=other_auth_token)
    assert top.status_code == status.HTTP_201_CREATED
    assert top.json()["upvotes"] == 1
    reply = client.post(
        url, json={"content": "Reply", "parent_id": top.json()["id"]}, headers=auth_token
    )
    assert reply.status_code == status.HTTP_201_CREATED

    detail = client.get(f"/api/v1/threads/{thread['id']}").json()
    assert detail["comment_count"] == 2
    assert len(detail["comments"]) == 1
    assert detail["comments"][0]["content"] == "Top"
    assert [r["content"] for r in detail["comments"][0]["replies"]] == ["Reply"]


def test_reply_to_unknown_parent(client, auth_token) -> None:
    thread = _create_thread(client, auth_token)
    response = client.post(
        f"/api/v1/threads/{thread['id']}/comments",
        json={"content": "Reply", "parent_id": "missing"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"]["kind"] == "NotFound"


def test_vote_thread(client, auth_token, other_auth_token) -> None:
    thread = _create_thread(client, auth_token)
    url = f"/api/v1/threads/{thread['id']}/vote"

    client.post(url, json={"direction": "up"}, headers=other_auth_token)
    response = client.post(url, json={"direction": "down"}, headers=other_auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"upvotes": 2, "downvotes": 1, "score": 1}


def test_vote_invalid_direction(client, auth_token) -> None:
    thread = _create_thread(client, auth_token)
    response = client.post(
        f"/api/v1/threads/{thread['id']}/vote", json={"direction": "sideways"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["error"]["kind"] == "ValidationError"


def test_vote_unknown_thread(client, auth_token) -> None:
    response = client.post(
        "/api/v1/threads/missing/vote", json={"direction": "up"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_comment(client, auth_token, other_auth_token) -> None:
    thread = _create_thread(client, auth_token)
    comment = client.post(
        f"/api/v1/threads/{thread['id']}/comments",
        json={"content": "Top"},
        headers=other_auth_token,
    ).json()

    response = client.post(
        f"/api/v1/threads/{thread['id']}/comments/{comment['id']}/vote",
        json={"direction": "up"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"upvotes": 2, "downvotes": 0, "score": 2}


def test_deleted_author_rendered_as_placeholder(client, auth_token, admin_user, test_user, headers_for) -> None:
    thread = _create_thread(client, auth_token)
    client.delete(f"/api/v1/admin/users/{test_user.id}", headers=headers_for(admin_user))

    detail = client.get(f"/api/v1/threads/{thread['id']}").json()
    assert detail["author"]["deleted"] is True
    assert detail["author"]["id"] is None
    assert detail["author"]["display_name"] == "Deleted User"


def test_list_threads_limit(client, auth_token) -> None:
    for i in range(3):
        _create_thread(client, auth_token, title=f"T{i}")

    assert len(client.get("/api/v1/threads/").json()) == 3
    assert len(client.get("/api/v1/threads/", params={"limit": 2}).json()) == 2
