"""Timetable generation boundary.

Automatic slot assignment is not implemented yet. ``SimulatedGenerator`` stands
in for it and only produces a metrics snapshot; it never reads or writes the
entity store, so a failed or timed-out run leaves every record untouched.
"""
from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Protocol

from edutable.core.exceptions import AppError, GenerationError, GenerationTimeoutError
from edutable.schemas.generator import MetricsSnapshot

logger = logging.getLogger(__name__)


class TimetableGenerator(Protocol):
    async def generate(self) -> MetricsSnapshot: ...


class SimulatedGenerator:
    def __init__(self, delay_seconds: float = 2.0, rng: random.Random | None = None):
        self.delay_seconds = delay_seconds
        self._rng = rng or random.Random()

    async def generate(self) -> MetricsSnapshot:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return MetricsSnapshot(
            conflicts=self._rng.randint(0, 2),
            student_satisfaction=88 + self._rng.randint(0, 11),
            faculty_balance=80 + self._rng.randint(0, 19),
            room_utilization=75 + self._rng.randint(0, 19),
            timestamp=datetime.now(timezone.utc),
        )


async def run_generation(generator: TimetableGenerator, timeout_seconds: float) -> MetricsSnapshot:
    started = asyncio.get_running_loop().time()
    try:
        snapshot = await asyncio.wait_for(generator.generate(), timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        logger.warning("Timetable generation timed out after %.1fs", timeout_seconds)
        raise GenerationTimeoutError(timeout_seconds) from exc
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Timetable generation failed")
        raise GenerationError("Failed to generate timetable") from exc

    logger.info(
        "Timetable generation finished in %.2fs (conflicts=%d)",
        asyncio.get_running_loop().time() - started,
        snapshot.conflicts,
    )
    return snapshot
