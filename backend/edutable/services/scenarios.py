from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from edutable.core.exceptions import NotFoundError
from edutable.repositories.store import EntityStore
from edutable.schemas.dashboard import DashboardStats
from edutable.schemas.scenario import ScenarioCreate, ScenarioMetrics, ScenarioOut, ScenarioUpdate
from edutable.services.metrics import TeachingGrid, recompute_metrics
from edutable.services.validators import scheduled_hours

logger = logging.getLogger(__name__)

MAX_WEEKLY_HOURS = 168


class ScenarioService:
    """Active-scenario bookkeeping and metric refresh on top of the entity store."""

    def __init__(self, store: EntityStore, grid: TeachingGrid):
        self.store = store
        self.grid = grid

    def get_active(self) -> ScenarioOut | None:
        return self.store.scenarios.get_active()

    def activate(self, scenario_id: str) -> ScenarioOut:
        with self.store.lock:
            scenario = self.store.scenarios.activate(scenario_id)
            if scenario is None:
                raise NotFoundError("Scenario", scenario_id)
            self.sync_faculty_hours(scenario_id)
        logger.info("Activated scenario %s (%s)", scenario.id, scenario.name)
        return scenario

    def create(self, payload: ScenarioCreate) -> ScenarioOut:
        with self.store.lock:
            scenario = self.store.scenarios.create(payload.model_copy(update={"is_active": False}))
            logger.info("Created scenario %s (%s)", scenario.id, scenario.name)
            if payload.is_active:
                return self.activate(scenario.id)
        return scenario

    def update(self, scenario_id: str, payload: ScenarioUpdate) -> ScenarioOut:
        """Apply a partial update; activation goes through ``activate`` and deactivation clears faculty hours."""
        with self.store.lock:
            current = self.store.scenarios.get(scenario_id)
            if current is None:
                raise NotFoundError("Scenario", scenario_id)
            changes = payload.model_dump(exclude_unset=True)
            activate = changes.get("is_active") is True
            if activate:
                del changes["is_active"]
            scenario = self.store.scenarios.update(scenario_id, changes)
            if activate:
                return self.activate(scenario_id)
            if current.is_active and not scenario.is_active:
                self.sync_faculty_hours(None)
                logger.info("Deactivated scenario %s; no scenario is active", scenario_id)
        return scenario

    def delete(self, scenario_id: str) -> None:
        with self.store.lock:
            current = self.store.scenarios.get(scenario_id)
            if current is None or not self.store.scenarios.delete(scenario_id):
                raise NotFoundError("Scenario", scenario_id)
            if current.is_active:
                self.sync_faculty_hours(None)
        logger.info("Deleted scenario %s (%s)", scenario_id, current.name)

    def compute_metrics(self, scenario_id: str) -> ScenarioMetrics:
        return recompute_metrics(
            self.store.timetable.list_by_scenario(scenario_id),
            self.store.rooms.list_all(),
            self.store.faculty.list_all(),
            self.grid,
        )

    def recompute(self, scenario_id: str) -> ScenarioOut:
        with self.store.lock:
            if self.store.scenarios.get(scenario_id) is None:
                raise NotFoundError("Scenario", scenario_id)
            metrics = self.compute_metrics(scenario_id)
            scenario = self.store.scenarios.update(scenario_id, {"metrics": metrics})
        logger.debug("Recomputed metrics for scenario %s: %s", scenario_id, metrics.model_dump())
        return scenario

    def refresh(self, scenario_ids: Iterable[str | None], faculty_ids: Iterable[str] = ()) -> None:
        """Recompute metrics for every touched scenario and resync faculty hours if it is the active one."""
        with self.store.lock:
            for scenario_id in {item for item in scenario_ids if item is not None}:
                scenario = self.store.scenarios.get(scenario_id)
                if scenario is None:
                    continue
                self.recompute(scenario_id)
                if scenario.is_active:
                    self.sync_faculty_hours(scenario_id, faculty_ids)

    def sync_faculty_hours(self, scenario_id: str | None, faculty_ids: Iterable[str] = ()) -> None:
        """Set ``current_hours`` from the scenario's entries, rounded up to whole hours; None clears them."""
        entries = self.store.timetable.list_by_scenario(scenario_id) if scenario_id is not None else []
        targets = set(faculty_ids) or {member.id for member in self.store.faculty.list_all()}
        for faculty_id in targets:
            member = self.store.faculty.get(faculty_id)
            if member is None:
                continue
            minutes = round(scheduled_hours(faculty_id, entries) * 60)
            hours = min(math.ceil(minutes / 60), MAX_WEEKLY_HOURS)
            if hours != member.current_hours:
                self.store.faculty.update(faculty_id, {"current_hours": hours})

    def dashboard_summary(self) -> DashboardStats:
        active = self.store.scenarios.get_active()
        metrics = active.metrics if active is not None else ScenarioMetrics()
        return DashboardStats(
            total_students=self.store.students.count(),
            total_faculty=self.store.faculty.count(),
            total_rooms=self.store.rooms.count(),
            total_courses=self.store.courses.count(),
            active_scenario_id=active.id if active is not None else None,
            conflicts=metrics.conflicts,
            student_satisfaction=metrics.student_satisfaction,
            faculty_balance=metrics.faculty_balance,
            room_utilization=metrics.room_utilization,
        )
