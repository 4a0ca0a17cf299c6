import asyncio

import pytest

from landing_resolver.deadline import run_with_deadline
from landing_resolver.errors import ConfigError, ResolutionTimeout


async def finish_after(delay, value):
    await asyncio.sleep(delay)
    return value


def test_result_returned_within_deadline():
    assert asyncio.run(run_with_deadline(1.0, finish_after(0, "done"))) == "done"


@pytest.mark.parametrize("timeout", [None, 0])
def test_disabled_deadline(timeout):
    assert asyncio.run(run_with_deadline(timeout, finish_after(0.01, "done"))) == "done"


def test_expired_deadline_cancels_work():
    cancelled = []

    async def slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return "late"

    with pytest.raises(ResolutionTimeout):
        asyncio.run(run_with_deadline(0.05, slow()))
    assert cancelled == [True]


def test_negative_deadline_rejected():
    with pytest.raises(ConfigError):
        asyncio.run(run_with_deadline(-1, finish_after(0, "never")))
