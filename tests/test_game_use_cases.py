"""Tests for the game session lifecycle"""

import asyncio
import logging

import pytest

from scoreguard.application.use_cases.game_use_cases import (
    EndGameUseCase,
    ExpireOldSessionsUseCase,
    StartGameUseCase,
)
from scoreguard.domain.entities.game_session import SessionStatus
from scoreguard.domain.results import Accepted, Rejected, RejectionReason
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy
from scoreguard.infrastructure.sessions.memory_session_store import InMemorySessionStore
from scoreguard.infrastructure.sessions.session_sweeper import SessionSweeper
from tests.fakes import FakeClock

TIMEOUT = 3600.0
POLICY = ValidationPolicy(min_game_time=3.0, max_score_per_second=150.0)


@pytest.fixture
def end_game(session_store: InMemorySessionStore, clock: FakeClock) -> EndGameUseCase:
    return EndGameUseCase(session_store, clock, POLICY, TIMEOUT)


def test_start_game_creates_session(session_store: InMemorySessionStore) -> None:
    session = StartGameUseCase(session_store).execute()

    assert session_store.get(session.id) is not None


def test_valid_game_is_accepted(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(5)

    result = end_game.execute(session.id, 100)

    assert result == Accepted(score=100, elapsed_seconds=5.0)
    stored = session_store.get(session.id)
    assert stored.consumed is True
    assert stored.status == SessionStatus.ACCEPTED
    assert stored.final_score == 100
    assert stored.elapsed_seconds == 5.0


def test_too_short_game_is_rejected(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(1)

    result = end_game.execute(session.id, 10)

    assert result == Rejected(RejectionReason.TOO_SHORT)
    stored = session_store.get(session.id)
    assert stored.consumed is True
    assert stored.status == SessionStatus.REJECTED
    assert stored.final_score is None


def test_implausible_rate_is_rejected(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(5)

    result = end_game.execute(session.id, 1000)

    assert result == Rejected(RejectionReason.IMPLAUSIBLE_RATE)
    assert session_store.get(session.id).status == SessionStatus.REJECTED


def test_second_evaluation_is_already_consumed(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(10)

    first = end_game.execute(session.id, 200)
    outcomes = [end_game.execute(session.id, 200) for _ in range(3)]

    assert isinstance(first, Accepted)
    assert outcomes == [Rejected(RejectionReason.ALREADY_CONSUMED)] * 3


def test_replay_after_rejection_is_already_consumed(
    session_store: InMemorySessionStore,
    clock: FakeClock,
    end_game: EndGameUseCase,
    caplog: pytest.LogCaptureFixture,
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(1)

    assert end_game.execute(session.id, 10) == Rejected(RejectionReason.TOO_SHORT)
    clock.advance(10)
    with caplog.at_level(logging.WARNING):
        assert end_game.execute(session.id, 10) == Rejected(RejectionReason.ALREADY_CONSUMED)
    assert "replay" in caplog.text


def test_rejected_session_is_swept_after_timeout(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(5)
    end_game.execute(session.id, 1000)
    clock.advance(TIMEOUT)

    assert ExpireOldSessionsUseCase(session_store, TIMEOUT).execute() == 1
    assert end_game.execute(session.id, 10) == Rejected(RejectionReason.INVALID_SESSION)


def test_unknown_session_is_invalid(end_game: EndGameUseCase) -> None:
    assert end_game.execute("deadbeef" * 4, 100) == Rejected(RejectionReason.INVALID_SESSION)


def test_expired_session_is_invalid_even_before_sweep(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(TIMEOUT + 1)

    assert end_game.execute(session.id, 100) == Rejected(RejectionReason.INVALID_SESSION)


def test_swept_session_is_invalid(
    session_store: InMemorySessionStore, clock: FakeClock, end_game: EndGameUseCase
) -> None:
    session = StartGameUseCase(session_store).execute()
    clock.advance(TIMEOUT + 1)

    removed = ExpireOldSessionsUseCase(session_store, TIMEOUT).execute()

    assert removed == 1
    assert session_store.get(session.id) is None
    assert end_game.execute(session.id, 100) == Rejected(RejectionReason.INVALID_SESSION)


def test_sweeper_can_be_triggered_directly(
    session_store: InMemorySessionStore, clock: FakeClock
) -> None:
    StartGameUseCase(session_store).execute()
    sweeper = SessionSweeper(ExpireOldSessionsUseCase(session_store, TIMEOUT).execute, 600)

    assert sweeper.sweep_once() == 0
    clock.advance(TIMEOUT + 1)
    assert sweeper.sweep_once() == 1
    assert len(session_store) == 0


def test_sweeper_rejects_non_positive_interval(session_store: InMemorySessionStore) -> None:
    with pytest.raises(ValueError):
        SessionSweeper(lambda: 0, 0)


@pytest.mark.asyncio
async def test_sweeper_runs_in_background_until_stopped() -> None:
    calls = []
    sweeper = SessionSweeper(lambda: calls.append(1) or 0, interval_seconds=0.01)

    sweeper.start()
    assert sweeper.is_running
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert not sweeper.is_running
    assert len(calls) >= 1
    count = len(calls)
    await asyncio.sleep(0.05)
    assert len(calls) == count


@pytest.mark.asyncio
async def test_sweeper_survives_a_failing_sweep() -> None:
    calls = []

    def flaky_sweep() -> int:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return 0

    sweeper = SessionSweeper(flaky_sweep, interval_seconds=0.01)
    sweeper.start()
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert len(calls) >= 2
