"""Pure checks for a day's block list.

`validate_block_set` is the full-day gate used by every write; `check_candidate`
tests one proposed interval against the other blocks of a day and backs both
the drag preview conflict flag and the commit step of the edit controller.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import MAX_BLOCKS_PER_DAY, MIN_BLOCK_MINUTES
from .time_interval import TimeInterval, overlaps
from .violations import BlockTooShort, InvalidRange, Overlap, TooManyBlocks, Violation


def validate_block_set(
    blocks: Sequence[TimeInterval],
    *,
    max_blocks: int = MAX_BLOCKS_PER_DAY,
    min_minutes: int = MIN_BLOCK_MINUTES,
) -> Optional[Violation]:
    """
    Check a complete block list for one day.

    Checks run in a fixed order so the reported violation is deterministic:
    block count, then each block's range, then each block's duration, then
    every pair for overlap (all pairs, not just neighbours after sorting).

    Returns:
        None when the list is acceptable, otherwise the first violation found.
    """
    if len(blocks) > max_blocks:
        return TooManyBlocks(count=len(blocks), limit=max_blocks)

    for index, block in enumerate(blocks):
        if block.end <= block.start:
            return InvalidRange(index=index)
        if block.duration_minutes < min_minutes:
            return BlockTooShort(index=index, minutes=block.duration_minutes, minimum=min_minutes)

    for i in range(len(blocks)):
        for j in range(i + 1, len(blocks)):
            if overlaps(blocks[i], blocks[j]):
                return Overlap(index_a=i, index_b=j)

    return None


def check_candidate(
    blocks: Sequence[TimeInterval],
    candidate: TimeInterval,
    *,
    exclude_index: Optional[int] = None,
    min_minutes: int = MIN_BLOCK_MINUTES,
) -> Optional[Violation]:
    """
    Check one proposed interval against every other block of a day.

    `exclude_index` names the block being edited so it is not compared with
    itself. Violation indexes refer to positions in `blocks`; a new block is
    reported at position `len(blocks)`.
    """
    position = exclude_index if exclude_index is not None else len(blocks)

    if candidate.end <= candidate.start:
        return InvalidRange(index=position)
    if candidate.duration_minutes < min_minutes:
        return BlockTooShort(index=position, minutes=candidate.duration_minutes, minimum=min_minutes)

    for index, block in enumerate(blocks):
        if index == exclude_index:
            continue
        if overlaps(candidate, block):
            return Overlap(index_a=position, index_b=index)
    return None


def has_conflict(
    blocks: Sequence[TimeInterval],
    candidate: TimeInterval,
    *,
    exclude_index: Optional[int] = None,
    min_minutes: int = MIN_BLOCK_MINUTES,
) -> bool:
    return (
        check_candidate(blocks, candidate, exclude_index=exclude_index, min_minutes=min_minutes)
        is not None
    )
