import asyncio
import random

import pytest

from edutable.core.exceptions import GenerationError, GenerationTimeoutError
from edutable.services.generator import SimulatedGenerator, run_generation


class SlowGenerator:
    async def generate(self):
        await asyncio.sleep(5)


class BrokenGenerator:
    async def generate(self):
        raise RuntimeError("solver crashed")


def test_simulated_generator_stays_in_range():
    generator = SimulatedGenerator(delay_seconds=0, rng=random.Random(7))

    for _ in range(25):
        snapshot = asyncio.run(run_generation(generator, timeout_seconds=1))
        assert 0 <= snapshot.conflicts <= 2
        assert 88 <= snapshot.student_satisfaction <= 99
        assert 80 <= snapshot.faculty_balance <= 99
        assert 75 <= snapshot.room_utilization <= 94
        assert snapshot.timestamp.tzinfo is not None


def test_snapshot_converts_to_scenario_metrics():
    snapshot = asyncio.run(SimulatedGenerator(delay_seconds=0, rng=random.Random(1)).generate())

    metrics = snapshot.to_metrics()

    assert metrics.conflicts == snapshot.conflicts
    assert metrics.room_utilization == snapshot.room_utilization


def test_generation_timeout_is_reported():
    with pytest.raises(GenerationTimeoutError) as exc_info:
        asyncio.run(run_generation(SlowGenerator(), timeout_seconds=0.05))

    assert exc_info.value.status_code == 504
    assert exc_info.value.details == {"timeout_seconds": 0.05}


def test_generator_failure_is_wrapped():
    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(run_generation(BrokenGenerator(), timeout_seconds=1))

    assert exc_info.value.status_code == 502
    assert isinstance(exc_info.value.__cause__, RuntimeError)
