import asyncio

import pytest

from app.helpers.Exceptions import AttachmentBatchError
from app.helpers.Utilities import Utils


@pytest.mark.asyncio
async def test_gather_bounded_respects_limit_and_order():
    running = 0
    peak = 0

    async def job(value):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1
        return value * 2

    results = await Utils.gather_bounded((job(i) for i in range(8)), 3, "process")

    assert results == [0, 2, 4, 6, 8, 10, 12, 14]
    assert peak <= 3


@pytest.mark.asyncio
async def test_gather_bounded_waits_for_all_and_aggregates_errors():
    finished = []

    async def job(value):
        await asyncio.sleep(0.01 * value)
        if value % 2:
            raise RuntimeError(f"job {value} failed")
        finished.append(value)
        return value

    with pytest.raises(AttachmentBatchError) as exc_info:
        await Utils.gather_bounded((job(i) for i in range(5)), 2, "process")

    error = exc_info.value
    assert sorted(str(e) for e in error.errors) == ["job 1 failed", "job 3 failed"]
    assert error.completed == [0, 2, 4]
    assert sorted(finished) == [0, 2, 4]
    assert "Unable to process 2 attachment(s)" in str(error)


@pytest.mark.asyncio
async def test_gather_bounded_empty_batch():
    assert await Utils.gather_bounded([], 5, "process") == []


def test_create_response_envelope():
    response = Utils.create_response({"total": 3}, True)

    assert response.model_dump() == {"data": {"total": 3}, "success": True, "error": ""}
