# backend/app/services/availability_edit_session.py
"""
Optimistic commit coordination for the interactive availability editor.

An accepted edit is applied to the controller's local week immediately, then
written through the gateway. The returned `CommitResult` states both facts
separately (`applied_locally`, `confirmed`) so the caller can tell a normal
save from one that had to be rolled back. Nothing is retried.

Writes are serialised, but edits keep being applied locally while earlier
writes are still in flight, so every queued edit was built on top of the one
being written. When a write fails, all queued edits are discarded without
being written (a copy reads its source day, so writing other days is no proof
of independence) and the local week returns to the confirmed server state.
"""

import asyncio
from dataclasses import dataclass
import logging
from typing import List, Optional

from ..core.exceptions import AvailabilityPersistenceException
from ..domain.availability import WeeklyAvailability
from ..domain.edit_controller import AvailabilityEditController, EditOutcome
from ..domain.grid import GridConfig
from ..domain.violations import PersistenceFailure
from ..monitoring.prometheus_metrics import prometheus_metrics
from .availability_gateway import AvailabilityGateway

logger = logging.getLogger(__name__)

DISCARDED_REASON = "Changes not saved because an earlier change failed, please retry"


@dataclass(frozen=True)
class CommitResult:
    outcome: EditOutcome
    applied_locally: bool
    confirmed: bool
    failure: Optional[PersistenceFailure] = None

    @property
    def rolled_back(self) -> bool:
        return self.applied_locally and not self.confirmed


class _PendingWrite:
    """A locally applied edit whose write has not completed."""

    __slots__ = ("outcome", "discarded")

    def __init__(self, outcome: EditOutcome):
        self.outcome = outcome
        self.discarded = False


class AvailabilityEditSession:
    """Pairs an edit controller with a persistence gateway for one instructor."""

    def __init__(self, controller: AvailabilityEditController, gateway: AvailabilityGateway):
        self.controller = controller
        self.gateway = gateway
        self.confirmed_week: WeeklyAvailability = controller.week
        self._write_lock = asyncio.Lock()
        self._pending: List[_PendingWrite] = []

    @classmethod
    async def open(
        cls,
        gateway: AvailabilityGateway,
        instructor_id: str,
        *,
        grid: Optional[GridConfig] = None,
        read_only: bool = False,
    ) -> "AvailabilityEditSession":
        """Load the instructor's week from the gateway and start a session over it."""
        week = await gateway.load_week(instructor_id)
        controller = AvailabilityEditController(
            week, grid or GridConfig.from_settings(), read_only=read_only
        )
        return cls(controller, gateway)

    @property
    def instructor_id(self) -> str:
        return self.controller.week.instructor_id

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def refresh(self) -> WeeklyAvailability:
        """Reload from the server; edits still waiting to be written are re-applied on top."""
        week = await self.gateway.load_week(self.instructor_id)
        self.confirmed_week = week
        self._rebuild_local()
        return week

    async def release(self) -> CommitResult:
        """Finish the active drag and persist it if the controller accepted it."""
        return await self.commit(self.controller.pointer_up())

    async def commit(self, outcome: EditOutcome) -> CommitResult:
        if not outcome.committed:
            if outcome.rejected:
                prometheus_metrics.record_edit_commit(outcome.mode or "unknown", "rejected")
            return CommitResult(outcome=outcome, applied_locally=False, confirmed=False)

        mode = outcome.mode or "unknown"
        pending = _PendingWrite(outcome)
        self._pending.append(pending)

        async with self._write_lock:
            if pending.discarded:
                prometheus_metrics.record_edit_commit(mode, "rolled_back")
                return CommitResult(
                    outcome=outcome,
                    applied_locally=True,
                    confirmed=False,
                    failure=PersistenceFailure(reason=DISCARDED_REASON),
                )

            days = {day: value.blocks for day, value in outcome.changes.items()}
            try:
                if len(days) == 1:
                    ((day_of_week, blocks),) = days.items()
                    await self.gateway.replace_day(self.instructor_id, day_of_week, blocks)
                else:
                    await self.gateway.replace_days(self.instructor_id, days)
            except AvailabilityPersistenceException as exc:
                logger.error(
                    "Rolling back %s edit of days %s for instructor %s: %s",
                    mode,
                    sorted(days),
                    self.instructor_id,
                    exc.message,
                )
                self._discard_after_failure(pending)
                prometheus_metrics.record_edit_commit(mode, "rolled_back")
                return CommitResult(
                    outcome=outcome,
                    applied_locally=True,
                    confirmed=False,
                    failure=PersistenceFailure(),
                )

            self._pending.remove(pending)
            self.confirmed_week = self.confirmed_week.apply(outcome.changes)
        prometheus_metrics.record_edit_commit(mode, "confirmed")
        return CommitResult(outcome=outcome, applied_locally=True, confirmed=True)

    def _discard_after_failure(self, failed: _PendingWrite) -> None:
        self._pending.remove(failed)
        if self._pending:
            logger.info(
                "Discarded %s queued edit(s) for instructor %s after a failed write",
                len(self._pending),
                self.instructor_id,
            )
        for pending in self._pending:
            pending.discarded = True
        self._pending = []
        self._rebuild_local()

    def _rebuild_local(self) -> None:
        week = self.confirmed_week
        for pending in self._pending:
            week = week.apply(pending.outcome.changes)
        self.controller.load(week)

    # Editor commands, committed straight away

    async def delete_block(self, day_of_week: int, block_index: int) -> CommitResult:
        return await self.commit(self.controller.delete_block(day_of_week, block_index))

    async def add_default_block(self, day_of_week: int) -> CommitResult:
        return await self.commit(self.controller.add_default_block(day_of_week))

    async def set_block_bounds(
        self, day_of_week: int, block_index: int, start: str, end: str
    ) -> CommitResult:
        return await self.commit(
            self.controller.set_block_bounds(day_of_week, block_index, start, end)
        )

    async def clear_day(self, day_of_week: int) -> CommitResult:
        return await self.commit(self.controller.clear_day(day_of_week))

    async def copy_to_weekdays(self, source_day: int) -> CommitResult:
        return await self.commit(self.controller.copy_to_weekdays(source_day))

    async def copy_to_day(self, source_day: int, target_day: int) -> CommitResult:
        return await self.commit(self.controller.copy_to_day(source_day, target_day))

    async def copy_to_days(self, source_day: int, target_days: List[int]) -> CommitResult:
        return await self.commit(self.controller.copy_to_days(source_day, target_days))
