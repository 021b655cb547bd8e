"""
Direct-manipulation editing of a weekly availability grid.

`AvailabilityEditController` is a small state machine fed with abstract pointer
events ("pointer down at y in column d", "pointer moved", "pointer released").
It owns no UI lifecycle: build one per edit session over a week snapshot and a
`GridConfig`, feed it input, and read `preview` for rendering.

Only one drag can be active. Previews are recomputed from the interval captured
at pointer-down plus the total pointer displacement, so long drags never
accumulate rounding drift. Nothing is applied until `pointer_up`, which builds
the full block list for every touched day and runs it through `replace_day`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Dict, List, Optional, Union

from ..core.constants import (
    DEFAULT_BLOCK_END,
    DEFAULT_BLOCK_START,
    MAX_BLOCKS_PER_DAY,
    MIN_BLOCK_MINUTES,
)
from .availability import (
    DayAvailability,
    WeeklyAvailability,
    clear_day,
    copy_day,
    copy_to_weekdays,
    day_changes,
    is_valid_day,
    replace_day,
)
from .grid import GridConfig
from .time_interval import TimeInterval, require_time_of_day
from .validation import check_candidate, has_conflict
from .violations import InvalidArgument, InvalidFormat, TooManyBlocks, Violation

logger = logging.getLogger(__name__)


class DragMode(str, Enum):
    CREATE = "create"
    MOVE = "move"
    RESIZE_START = "resize_start"
    RESIZE_END = "resize_end"


class BlockHandle(str, Enum):
    """Part of an existing block the pointer went down on."""

    BODY = "body"
    TOP = "top"
    BOTTOM = "bottom"


_HANDLE_MODES = {
    BlockHandle.BODY: DragMode.MOVE,
    BlockHandle.TOP: DragMode.RESIZE_START,
    BlockHandle.BOTTOM: DragMode.RESIZE_END,
}


class EditorState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class OutcomeStatus(str, Enum):
    COMMITTED = "committed"
    REJECTED = "rejected"
    IGNORED = "ignored"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DragSession:
    """Everything captured at pointer-down; never changes while dragging."""

    mode: DragMode
    anchor_day: int
    block_index: Optional[int]
    initial_interval: TimeInterval
    pointer_origin_px: float


@dataclass(frozen=True)
class DragPreview:
    """Interval the UI should draw while dragging, with a live conflict flag."""

    day_of_week: int
    interval: TimeInterval
    conflict: bool = False


@dataclass(frozen=True)
class EditOutcome:
    """
    Result of a commit attempt.

    `changes` holds the new value of every day the edit touched (two days for a
    cross-day move, several for a copy). It is empty unless the status is
    COMMITTED.
    """

    status: OutcomeStatus
    mode: Optional[str] = None
    changes: Dict[int, DayAvailability] = field(default_factory=dict)
    violation: Optional[Violation] = None

    @property
    def committed(self) -> bool:
        return self.status is OutcomeStatus.COMMITTED

    @property
    def rejected(self) -> bool:
        return self.status is OutcomeStatus.REJECTED


class AvailabilityEditController:
    """State machine turning pointer input and editor commands into validated day edits."""

    def __init__(
        self,
        week: WeeklyAvailability,
        grid: Optional[GridConfig] = None,
        *,
        read_only: bool = False,
        max_blocks: int = MAX_BLOCKS_PER_DAY,
        min_minutes: int = MIN_BLOCK_MINUTES,
    ) -> None:
        self.week = week
        self.grid = grid or GridConfig()
        self.read_only = read_only
        self.max_blocks = max_blocks
        self.min_minutes = min_minutes
        self._session: Optional[DragSession] = None
        self._preview: Optional[DragPreview] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return EditorState.DRAGGING if self._session is not None else EditorState.IDLE

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def preview(self) -> Optional[DragPreview]:
        return self._preview

    def load(self, week: WeeklyAvailability) -> None:
        """Replace the working snapshot (after a server refresh or a rollback)."""
        if week.instructor_id != self.week.instructor_id:
            raise ValueError("Cannot load another instructor's week into this editor")
        self.week = week

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def pointer_down_on_grid(self, day_of_week: int, y_px: float) -> Optional[Violation]:
        """Start creating a block at the snapped pointer position."""
        refused = self._refuse_start(day_of_week)
        if refused is not None:
            return refused

        day = self.week.day(day_of_week)
        if len(day.blocks) >= self.max_blocks:
            logger.info(
                "Refused block creation on day %s: %s blocks already present",
                day_of_week,
                len(day.blocks),
            )
            return TooManyBlocks(count=len(day.blocks) + 1, limit=self.max_blocks)

        anchor = self.grid.pixel_to_minutes(y_px)
        latest_anchor = max(self.grid.start_minutes, self.grid.end_minutes - self.min_minutes)
        anchor = min(anchor, latest_anchor)
        initial = TimeInterval(anchor, anchor + self.min_minutes)

        self._begin(DragSession(DragMode.CREATE, day_of_week, None, initial, y_px))
        return None

    def pointer_down_on_block(
        self,
        day_of_week: int,
        block_index: int,
        y_px: float,
        handle: BlockHandle = BlockHandle.BODY,
    ) -> Optional[Violation]:
        """Start moving or resizing an existing block."""
        refused = self._refuse_start(day_of_week)
        if refused is not None:
            return refused

        blocks = self.week.day(day_of_week).blocks
        if not 0 <= block_index < len(blocks):
            return InvalidArgument(reason=f"No block {block_index} on day {day_of_week}")

        mode = _HANDLE_MODES[BlockHandle(handle)]
        self._begin(DragSession(mode, day_of_week, block_index, blocks[block_index], y_px))
        return None

    def pointer_move(self, y_px: float, day_of_week: Optional[int] = None) -> Optional[DragPreview]:
        """
        Recompute the preview for the current pointer position.

        `day_of_week` is the column under the pointer; it only matters for a
        move, since create and resize always stay on the anchor day.
        """
        session = self._session
        if session is None:
            return None

        interval = self._preview_interval(session, y_px)
        target_day = session.anchor_day
        if (
            session.mode is DragMode.MOVE
            and day_of_week is not None
            and is_valid_day(day_of_week)
        ):
            target_day = day_of_week

        self._preview = self._make_preview(session, target_day, interval)
        return self._preview

    def pointer_up(self) -> EditOutcome:
        """End the drag and try to commit the previewed interval."""
        session, preview = self._session, self._preview
        self._session = None
        self._preview = None
        if session is None or preview is None:
            return EditOutcome(status=OutcomeStatus.IGNORED)

        target_day = preview.day_of_week
        candidate = preview.interval
        cross_day = session.mode is DragMode.MOVE and target_day != session.anchor_day

        if (
            not cross_day
            and session.mode is not DragMode.CREATE
            and candidate == session.initial_interval
        ):
            return EditOutcome(status=OutcomeStatus.IGNORED, mode=session.mode.value)

        target_blocks = self.week.day(target_day).blocks
        exclude = None if cross_day else session.block_index
        violation = check_candidate(
            target_blocks, candidate, exclude_index=exclude, min_minutes=self.min_minutes
        )
        if violation is not None:
            return self._reject(session.mode.value, violation)

        proposals: Dict[int, List[TimeInterval]] = {}
        if cross_day:
            source_blocks = list(self.week.day(session.anchor_day).blocks)
            del source_blocks[session.block_index]
            proposals[session.anchor_day] = source_blocks
            proposals[target_day] = list(target_blocks) + [candidate]
        else:
            blocks = list(target_blocks)
            if session.block_index is None:
                blocks.append(candidate)
            else:
                blocks[session.block_index] = candidate
            proposals[target_day] = blocks

        return self._commit(session.mode.value, proposals)

    def cancel(self) -> EditOutcome:
        """Abandon any drag in progress without committing."""
        session = self._session
        self._session = None
        self._preview = None
        return EditOutcome(
            status=OutcomeStatus.CANCELLED,
            mode=session.mode.value if session is not None else None,
        )

    # ------------------------------------------------------------------
    # Editor commands
    # ------------------------------------------------------------------

    def delete_block(self, day_of_week: int, block_index: int) -> EditOutcome:
        refused = self._refuse_command("delete", day_of_week)
        if refused is not None:
            return refused
        blocks = list(self.week.day(day_of_week).blocks)
        if not 0 <= block_index < len(blocks):
            return self._reject(
                "delete", InvalidArgument(reason=f"No block {block_index} on day {day_of_week}")
            )
        del blocks[block_index]
        return self._commit("delete", {day_of_week: blocks})

    def add_default_block(self, day_of_week: int) -> EditOutcome:
        """Append the standard 09:00-17:00 block, as the list editor's add button does."""
        refused = self._refuse_command("add", day_of_week)
        if refused is not None:
            return refused
        default = TimeInterval(
            require_time_of_day(DEFAULT_BLOCK_START), require_time_of_day(DEFAULT_BLOCK_END)
        )
        blocks = list(self.week.day(day_of_week).blocks) + [default]
        return self._commit("add", {day_of_week: blocks})

    def set_block_bounds(
        self, day_of_week: int, block_index: int, start: str, end: str
    ) -> EditOutcome:
        """Set one block's start and end from `HH:MM` strings (select-based editing)."""
        refused = self._refuse_command("set_bounds", day_of_week)
        if refused is not None:
            return refused
        blocks = list(self.week.day(day_of_week).blocks)
        if not 0 <= block_index < len(blocks):
            return self._reject(
                "set_bounds",
                InvalidArgument(reason=f"No block {block_index} on day {day_of_week}"),
            )
        interval: Union[TimeInterval, InvalidFormat] = TimeInterval.from_strings(start, end)
        if isinstance(interval, InvalidFormat):
            return self._reject("set_bounds", interval)
        blocks[block_index] = interval
        return self._commit("set_bounds", {day_of_week: blocks})

    def clear_day(self, day_of_week: int) -> EditOutcome:
        refused = self._refuse_command("clear", day_of_week)
        if refused is not None:
            return refused
        cleared = clear_day(self.week.day(day_of_week))
        return self._apply("clear", {day_of_week: cleared})

    def copy_to_weekdays(self, source_day: int) -> EditOutcome:
        refused = self._refuse_command("copy", source_day)
        if refused is not None:
            return refused
        result = copy_to_weekdays(self.week.day(source_day))
        if isinstance(result, Violation):
            return self._reject("copy", result)
        return self._apply("copy", result)

    def copy_to_day(self, source_day: int, target_day: int) -> EditOutcome:
        return self.copy_to_days(source_day, [target_day])

    def copy_to_days(self, source_day: int, target_days: List[int]) -> EditOutcome:
        refused = self._refuse_command("copy", source_day)
        if refused is not None:
            return refused
        result = copy_day(self.week.day(source_day), target_days)
        if isinstance(result, Violation):
            return self._reject("copy", result)
        return self._apply("copy", result)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refuse_start(self, day_of_week: int) -> Optional[Violation]:
        if self.read_only:
            return InvalidArgument(reason="Availability is read-only in this session")
        if self._session is not None:
            logger.debug("Ignoring pointer down while a drag is already active")
            return InvalidArgument(reason="A drag is already in progress")
        if not is_valid_day(day_of_week):
            return InvalidArgument(reason=f"Invalid day of week: {day_of_week}")
        return None

    def _refuse_command(self, mode: str, day_of_week: int) -> Optional[EditOutcome]:
        violation = self._refuse_start(day_of_week)
        if violation is None:
            return None
        return self._reject(mode, violation)

    def _begin(self, session: DragSession) -> None:
        self._session = session
        self._preview = self._make_preview(
            session, session.anchor_day, session.initial_interval
        )

    def _make_preview(
        self, session: DragSession, day_of_week: int, interval: TimeInterval
    ) -> DragPreview:
        same_day = day_of_week == session.anchor_day
        exclude = session.block_index if same_day else None
        conflict = has_conflict(
            self.week.day(day_of_week).blocks,
            interval,
            exclude_index=exclude,
            min_minutes=self.min_minutes,
        )
        return DragPreview(day_of_week=day_of_week, interval=interval, conflict=conflict)

    def _preview_interval(self, session: DragSession, y_px: float) -> TimeInterval:
        grid = self.grid
        initial = session.initial_interval
        minimum = self.min_minutes

        if session.mode is DragMode.MOVE:
            delta = grid.snap_delta(y_px - session.pointer_origin_px)
            if delta == 0:
                return initial
            return grid.clamp_shift(initial.shifted(delta))

        current = grid.pixel_to_minutes(y_px)

        if session.mode is DragMode.CREATE:
            anchor = initial.start
            if current >= anchor:
                end = min(grid.end_minutes, max(current, anchor + minimum))
                return TimeInterval(anchor, end)
            start = max(grid.start_minutes, min(current, anchor - minimum))
            return TimeInterval(start, anchor)

        if session.mode is DragMode.RESIZE_START:
            start = max(grid.start_minutes, min(current, initial.end - minimum))
            return TimeInterval(start, initial.end)

        end = min(grid.end_minutes, max(current, initial.start + minimum))
        return TimeInterval(initial.start, end)

    def _commit(self, mode: str, proposals: Dict[int, List[TimeInterval]]) -> EditOutcome:
        changes: Dict[int, DayAvailability] = {}
        for day_of_week, blocks in sorted(proposals.items()):
            result = replace_day(
                self.week.day(day_of_week),
                blocks,
                max_blocks=self.max_blocks,
                min_minutes=self.min_minutes,
            )
            if isinstance(result, Violation):
                return self._reject(mode, result)
            changes[day_of_week] = result
        return self._apply(mode, changes)

    def _apply(self, mode: str, changes: Dict[int, DayAvailability]) -> EditOutcome:
        updated = self.week.apply(changes)
        if not day_changes(self.week, updated):
            return EditOutcome(status=OutcomeStatus.IGNORED, mode=mode)
        self.week = updated
        return EditOutcome(status=OutcomeStatus.COMMITTED, mode=mode, changes=changes)

    def _reject(self, mode: str, violation: Violation) -> EditOutcome:
        logger.info("Rejected %s edit: %s (%s)", mode, violation.code, violation.message)
        return EditOutcome(status=OutcomeStatus.REJECTED, mode=mode, violation=violation)
