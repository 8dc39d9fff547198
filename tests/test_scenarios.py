"""End-to-end game flows through the HTTP API"""

from typing import List

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from scoreguard.core.config import settings
from scoreguard.infrastructure.database.models import User
from tests.fakes import FakeClock, get_auth_headers


async def register(client: AsyncClient, nickname: str, password: str = "pass1234") -> dict:
    response = await client.post(
        "/auth/register", json={"nickname": nickname, "password": password}
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def play_game(
    client: AsyncClient, clock: FakeClock, score: int, seconds: float = 30
) -> str:
    start_response = await client.post("/games/start")
    assert start_response.status_code == 201
    session_id = start_response.json()["session_id"]

    clock.advance(seconds)
    end_response = await client.post("/games/end", json={"session_id": session_id, "score": score})
    assert end_response.status_code == 200, end_response.text
    return session_id


@pytest.mark.asyncio
async def test_valid_game_is_accepted(async_client: AsyncClient, clock: FakeClock) -> None:
    start_response = await async_client.post("/games/start")
    assert start_response.status_code == 201
    start_data = start_response.json()
    assert len(start_data["session_id"]) == 32
    assert start_data["min_game_time"] == settings.min_game_time

    clock.advance(5)
    response = await async_client.post(
        "/games/end", json={"session_id": start_data["session_id"], "score": 100}
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "session_id": start_data["session_id"],
        "score": 100,
        "elapsed_seconds": 5.0,
    }


@pytest.mark.asyncio
async def test_too_short_game_is_rejected(async_client: AsyncClient, clock: FakeClock) -> None:
    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(1)

    response = await async_client.post("/games/end", json={"session_id": session_id, "score": 10})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["valid"] is False
    assert detail["reason"] == "too_short"


@pytest.mark.asyncio
async def test_implausible_score_is_rejected(async_client: AsyncClient, clock: FakeClock) -> None:
    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(5)

    response = await async_client.post(
        "/games/end", json={"session_id": session_id, "score": 1000}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "implausible_rate"


@pytest.mark.asyncio
async def test_validation_reason_can_be_hidden(
    async_client: AsyncClient, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "expose_rejection_reason", False)
    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(5)

    response = await async_client.post(
        "/games/end", json={"session_id": session_id, "score": 1000}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "result_not_accepted"


@pytest.mark.asyncio
async def test_session_can_only_be_ended_once(
    async_client: AsyncClient, clock: FakeClock
) -> None:
    session_id = await play_game(async_client, clock, 100)

    replay = await async_client.post("/games/end", json={"session_id": session_id, "score": 100})

    assert replay.status_code == 400
    assert replay.json()["detail"]["reason"] == "already_consumed"


@pytest.mark.asyncio
async def test_unknown_and_expired_sessions_are_invalid(
    async_client: AsyncClient, clock: FakeClock, test_app: FastAPI
) -> None:
    response = await async_client.post("/games/end", json={"session_id": "nope", "score": 1})
    assert response.json()["detail"]["reason"] == "invalid_session"

    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(settings.session_timeout_seconds + 1)
    assert test_app.state.session_sweeper.sweep_once() == 1

    response = await async_client.post("/games/end", json={"session_id": session_id, "score": 1})
    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "invalid_session"


@pytest.mark.asyncio
async def test_negative_score_fails_request_validation(async_client: AsyncClient) -> None:
    session_id = (await async_client.post("/games/start")).json()["session_id"]

    response = await async_client.post("/games/end", json={"session_id": session_id, "score": -5})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_guest_cannot_save_score(async_client: AsyncClient, clock: FakeClock) -> None:
    session_id = await play_game(async_client, clock, 100)

    response = await async_client.post("/scores", json={"session_id": session_id})
    assert response.status_code == 401
    assert response.json()["detail"]["reason"] == "unauthenticated"

    bad_token = await async_client.post(
        "/scores",
        json={"session_id": session_id},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert bad_token.status_code == 401


@pytest.mark.asyncio
async def test_guest_can_register_and_then_save(
    async_client: AsyncClient, clock: FakeClock
) -> None:
    session_id = await play_game(async_client, clock, 420)
    await async_client.post("/scores", json={"session_id": session_id})

    headers = await register(async_client, "late_joiner")
    response = await async_client.post("/scores", json={"session_id": session_id}, headers=headers)

    assert response.status_code == 200
    assert response.json()["best_score"] == 420


@pytest.mark.asyncio
async def test_personal_best_progression(async_client: AsyncClient, clock: FakeClock) -> None:
    headers = await register(async_client, "ace_pilot")

    results = []
    for score in (50, 30, 80):
        session_id = await play_game(async_client, clock, score)
        response = await async_client.post(
            "/scores", json={"session_id": session_id}, headers=headers
        )
        assert response.status_code == 200
        results.append(response.json())

    assert [r["is_new_record"] for r in results] == [True, False, True]
    assert [r["best_score"] for r in results] == [50, 50, 80]

    profile = await async_client.get("/auth/me", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["best_score"] == 80
    assert profile.json()["rank"] == 1


@pytest.mark.asyncio
async def test_score_cannot_be_saved_twice(async_client: AsyncClient, clock: FakeClock) -> None:
    headers = await register(async_client, "double_dip")
    session_id = await play_game(async_client, clock, 100)

    first = await async_client.post("/scores", json={"session_id": session_id}, headers=headers)
    second = await async_client.post("/scores", json={"session_id": session_id}, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["detail"]["reason"] == "invalid_or_unvalidated_session"


@pytest.mark.asyncio
async def test_replaying_a_rejected_game_is_flagged(
    async_client: AsyncClient, clock: FakeClock
) -> None:
    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(5)
    first = await async_client.post("/games/end", json={"session_id": session_id, "score": 5000})

    replay = await async_client.post("/games/end", json={"session_id": session_id, "score": 50})

    assert first.json()["detail"]["reason"] == "implausible_rate"
    assert replay.status_code == 400
    assert replay.json()["detail"]["reason"] == "already_consumed"


@pytest.mark.asyncio
async def test_rejected_game_cannot_be_saved(async_client: AsyncClient, clock: FakeClock) -> None:
    headers = await register(async_client, "speedy")
    session_id = (await async_client.post("/games/start")).json()["session_id"]
    clock.advance(5)
    await async_client.post("/games/end", json={"session_id": session_id, "score": 5000})

    response = await async_client.post("/scores", json={"session_id": session_id}, headers=headers)

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "invalid_or_unvalidated_session"


@pytest.mark.asyncio
async def test_rank_and_leaderboard(
    async_client: AsyncClient, clock: FakeClock, players: List[User]
) -> None:
    for player, score in zip(players, (80, 50, 30)):
        session_id = await play_game(async_client, clock, score)
        response = await async_client.post(
            "/scores",
            json={"session_id": session_id},
            headers=get_auth_headers(player.id, player.nickname),
        )
        assert response.status_code == 200

    newcomer = await register(async_client, "newcomer")
    session_id = await play_game(async_client, clock, 60)
    response = await async_client.post("/scores", json={"session_id": session_id}, headers=newcomer)
    assert response.json()["rank"] == 2

    leaderboard = (await async_client.get("/leaderboard")).json()
    assert leaderboard["total_entries"] == 4
    assert [(e["nickname"], e["score"], e["rank"]) for e in leaderboard["leaderboard"]] == [
        ("ace_pilot", 80, 1),
        ("newcomer", 60, 2),
        ("rookie", 50, 3),
        ("wingman", 30, 4),
    ]

    top_two = (await async_client.get("/leaderboard", params={"limit": 2})).json()
    assert top_two["total_entries"] == 2


@pytest.mark.asyncio
async def test_nickname_check_register_and_login(async_client: AsyncClient) -> None:
    check = await async_client.post("/auth/check-nickname", json={"nickname": "ace_pilot"})
    assert check.json() == {"nickname": "ace_pilot", "available": True}

    await register(async_client, "ace_pilot", "secret1")

    check = await async_client.post("/auth/check-nickname", json={"nickname": "ACE_PILOT"})
    assert check.json()["available"] is False

    duplicate = await async_client.post(
        "/auth/register", json={"nickname": "Ace_Pilot", "password": "secret1"}
    )
    assert duplicate.status_code == 400

    bad_login = await async_client.post(
        "/auth/login", json={"nickname": "ace_pilot", "password": "wrong"}
    )
    assert bad_login.status_code == 401

    login = await async_client.post(
        "/auth/login", json={"nickname": "ace_pilot", "password": "secret1"}
    )
    assert login.status_code == 200
    data = login.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["nickname"] == "ace_pilot"

    profile = await async_client.get(
        "/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert profile.json()["best_score"] is None
    assert profile.json()["rank"] is None


@pytest.mark.asyncio
async def test_register_rejects_bad_nickname(async_client: AsyncClient) -> None:
    response = await async_client.post(
        "/auth/register", json={"nickname": "bad name!", "password": "secret1"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_profile_requires_token(async_client: AsyncClient) -> None:
    response = await async_client.get("/auth/me")

    assert response.status_code == 401
