"""Tests for reconnect backoff"""

from unittest.mock import AsyncMock, call

import pytest

from rofex.streaming.backoff import Backoff


@pytest.fixture
def sleep(mocker):
    return mocker.patch(
        "rofex.streaming.backoff.asyncio.sleep", new_callable=AsyncMock
    )


@pytest.mark.unit
def test_delay_doubles_up_to_ceiling():
    """1, 2, 4, 8, 16 then capped at 30"""
    backoff = Backoff()

    delays = [backoff.next_delay() for _ in range(8)]

    assert delays == [1, 2, 4, 8, 16, 30, 30, 30]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_wait_sleeps_current_delay(sleep):
    """wait() sleeps, then advances the delay"""
    backoff = Backoff(initial=0.5, maximum=1.0)

    assert await backoff.wait() == 0.5
    assert await backoff.wait() == 1.0
    assert await backoff.wait() == 1.0

    assert sleep.await_args_list == [call(0.5), call(1.0), call(1.0)]


@pytest.mark.unit
def test_reset_restores_initial_delay_and_retries():
    """A successful subscribe starts the sequence over"""
    backoff = Backoff()
    backoff.next_delay()
    backoff.next_delay()
    backoff.retries = 4

    backoff.reset()

    assert backoff.delay == 1
    assert backoff.retries == 0
    assert not backoff.exhausted


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failure_budget(sleep):
    """The tenth failure reports exhaustion without sleeping"""
    backoff = Backoff(max_retries=10)

    results = [await backoff.failure() for _ in range(10)]

    assert results == [True] * 9 + [False]
    assert backoff.exhausted
    assert sleep.await_count == 9
    assert [c.args[0] for c in sleep.await_args_list] == [
        1, 2, 4, 8, 16, 30, 30, 30, 30
    ]
