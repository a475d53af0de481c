"""Tests for the serial task queue."""
import asyncio

import pytest

from coaching_config.infra.jobs.queue import SerialTaskQueue


async def test_runs_jobs_one_at_a_time_in_order():
    queue = SerialTaskQueue()
    running = 0
    peak = 0
    order = []

    async def job(n):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        order.append(n)
        running -= 1
        return n * 10

    results = await asyncio.gather(*(queue.submit("job", job, n) for n in range(5)))
    await queue.stop()

    assert results == [0, 10, 20, 30, 40]
    assert order == [0, 1, 2, 3, 4]
    assert peak == 1


async def test_exception_reaches_its_submitter_only():
    queue = SerialTaskQueue()

    async def boom():
        raise ValueError("bad input")

    async def ok():
        return "fine"

    results = await asyncio.gather(queue.submit("boom", boom), queue.submit("ok", ok), return_exceptions=True)
    await queue.stop()

    assert isinstance(results[0], ValueError)
    assert results[1] == "fine"


async def test_starts_on_first_submit_and_stops():
    queue = SerialTaskQueue(maxsize=2)
    assert not queue.running

    async def job():
        return 1

    assert await queue.submit("job", job) == 1
    assert queue.running
    await queue.stop()
    assert not queue.running


async def test_stop_cancels_waiting_jobs():
    queue = SerialTaskQueue()
    gate = asyncio.Event()

    async def blocked():
        await gate.wait()

    first = asyncio.create_task(queue.submit("blocked", blocked))
    second = asyncio.create_task(queue.submit("blocked", blocked))
    await asyncio.sleep(0.01)
    await queue.stop()

    with pytest.raises(asyncio.CancelledError):
        await first
    with pytest.raises(asyncio.CancelledError):
        await second
