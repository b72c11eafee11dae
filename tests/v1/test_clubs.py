# tests/v1/test_clubs.py
"""Tests for club listing and membership endpoints."""

from fastapi import status


def test_list_clubs(client, clubs) -> None:
    response = client.get("/api/v1/clubs/")

    assert response.status_code == status.HTTP_200_OK
    assert [club["slug"] for club in response.json()] == ["gaming", "movies", "music", "tech"]


def test_get_club(client, clubs) -> None:
    response = client.get("/api/v1/clubs/movies")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Movies & Cinema"
    assert response.json()["icon"] == "Film"


def test_get_missing_club(client, clubs) -> None:
    assert client.get("/api/v1/clubs/cooking").status_code == status.HTTP_404_NOT_FOUND


def test_join_and_leave(client, auth_token, clubs) -> None:
    joined = client.post("/api/v1/clubs/music/join", headers=auth_token)
    assert joined.status_code == status.HTTP_201_CREATED
    assert joined.json() == {"status": "joined"}

    again = client.post("/api/v1/clubs/music/join", headers=auth_token)
    assert again.status_code == status.HTTP_409_CONFLICT

    mine = client.get("/api/v1/clubs/mine", headers=auth_token)
    assert [club["slug"] for club in mine.json()] == ["music"]

    left = client.delete("/api/v1/clubs/music/leave", headers=auth_token)
    assert left.status_code == status.HTTP_204_NO_CONTENT

    not_member = client.delete("/api/v1/clubs/music/leave", headers=auth_token)
    assert not_member.status_code == status.HTTP_404_NOT_FOUND


def test_bulk_join(client, auth_token, clubs) -> None:
    response = client.post(
        "/api/v1/clubs/join",
        json={"slugs": ["tech", "gaming", "unknown"]},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert [club["slug"] for club in response.json()] == ["gaming", "tech"]


def test_bulk_join_requires_slugs(client, auth_token, clubs) -> None:
    response = client.post("/api/v1/clubs/join", json={"slugs": []}, headers=auth_token)
    assert response.status_code == 422


def test_members(client, clubs, membership) -> None:
    response = client.get("/api/v1/clubs/tech/members")

    assert response.status_code == status.HTTP_200_OK
    [member] = response.json()
    assert member["profile"]["username"] == "test_user"


def test_my_votes(client, auth_token, make_post, clubs, test_post, test_user) -> None:
    music_post = make_post(clubs["music"], test_user, title="Elsewhere")
    for post_id, value in ((test_post.id, 1), (music_post.id, -1)):
        client.post(
            "/api/v1/votes/",
            json={"post_id": str(post_id), "vote_value": value},
            headers=auth_token,
        )

    response = client.get("/api/v1/clubs/tech/my-votes", headers=auth_token)

    assert response.json() == [{"post_id": str(test_post.id), "vote_value": 1}]
