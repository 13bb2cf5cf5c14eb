"""
Greedy auto-fill of open roster slots from the signup pool.

Generic rosters are filled sequentially in pool order. Role-based rosters run
five passes, each over whatever the previous passes left in the pool:

0. preferred roles: rigid participants (fewer preferred roles) first, each
   trying their roles in tank -> healer -> dps priority
1. exact character-role match for tank, healer, dps
2. flex overflow in pool order
3. backfill of still-empty tank, healer, dps slots regardless of role
4. bench overflow

The result is a heuristic, not an optimal matching. Given identical inputs it
always produces identical output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict

from roster.logic.enums import COMBAT_ROLES, RosterRole, role_label, role_priority
from roster.logic.occupancy import find_next_empty_position
from roster.logic.state import Participant  # noqa: TC001

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from roster.logic.state import RosterState
    from roster.logic.topology import SlotTopology

logger = structlog.get_logger()


class SummaryEntry(BaseModel):
    """Number of participants auto-filled into one role."""

    model_config = ConfigDict(frozen=True)

    label: str
    count: int


class AutoFillResult(BaseModel):
    """Outcome of an auto-fill computation. Nothing is applied until committed."""

    model_config = ConfigDict(frozen=True)

    new_pool: tuple[Participant, ...]
    new_assignments: tuple[Participant, ...]
    summary: tuple[SummaryEntry, ...]
    total_filled: int

    @property
    def summary_text(self) -> str:
        return format_summary(self.summary)


def format_summary(summary: Sequence[SummaryEntry]) -> str:
    """Render a summary as e.g. "3 → Tank, 2 → Flex"."""
    return ", ".join(f"{entry.count} → {entry.label}" for entry in summary)


class _FillSession:
    """Scratch lists for a single compute_auto_fill call."""

    def __init__(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        get_slot_count: Callable[[RosterRole], int],
    ) -> None:
        self.remaining: list[Participant] = list(pool)
        self.placed: list[Participant] = list(assignments)
        self._get_slot_count = get_slot_count
        self._counts: dict[str, int] = {}

    def next_position(self, role: RosterRole) -> int | None:
        return find_next_empty_position(self.placed, role, self._get_slot_count)

    def place(self, participant: Participant, role: RosterRole, position: int, *, is_override: bool) -> None:
        self.remaining = [p for p in self.remaining if p.signup_id != participant.signup_id]
        self.placed.append(participant.placed_at(role, position, is_override=is_override))
        label = role_label(role)
        self._counts[label] = self._counts.get(label, 0) + 1

    def pour(self, role: RosterRole, *, is_override: bool) -> None:
        """Fill role from the head of the pool until the role is full or the pool is empty."""
        position = self.next_position(role)
        while position is not None and self.remaining:
            self.place(self.remaining[0], role, position, is_override=is_override)
            position = self.next_position(role)

    def match(self, role: RosterRole) -> None:
        """Fill role with pool participants whose character role is role."""
        for participant in [p for p in self.remaining if p.character_role == role]:
            position = self.next_position(role)
            if position is None:
                break
            self.place(participant, role, position, is_override=False)

    def prefer(self) -> None:
        with_prefs = sorted(
            (p for p in self.remaining if p.preferred_roles),
            key=lambda p: len(p.preferred_roles),
        )
        for participant in with_prefs:
            for role in sorted(participant.preferred_roles, key=role_priority):
                position = self.next_position(role)
                if position is not None:
                    self.place(participant, role, position, is_override=participant.overrides(role))
                    break

    def summary(self) -> tuple[SummaryEntry, ...]:
        return tuple(SummaryEntry(label=label, count=count) for label, count in self._counts.items())


def compute_auto_fill(
    pool: Sequence[Participant],
    assignments: Sequence[Participant],
    role_slots: Sequence[RosterRole],
    get_slot_count: Callable[[RosterRole], int],
    is_generic: bool,  # noqa: FBT001
) -> AutoFillResult:
    """
    Place as many pool participants as possible into open slots.

    Args:
        pool: Unassigned participants, in the order they should be considered
        assignments: Participants already holding slots; never displaced
        role_slots: Active roles in display order (used by generic mode)
        get_slot_count: Capacity lookup per role (0 disables a role)
        is_generic: Fill sequentially without role matching

    Returns:
        AutoFillResult with the new pool, the existing assignments followed by
        the new ones, a per-role summary, and the number of participants placed

    """
    session = _FillSession(pool, assignments, get_slot_count)

    if is_generic:
        for role in role_slots:
            session.pour(role, is_override=False)
    else:
        session.prefer()
        for role in COMBAT_ROLES:
            session.match(role)
        if get_slot_count(RosterRole.FLEX) > 0:
            session.pour(RosterRole.FLEX, is_override=True)
        for role in COMBAT_ROLES:
            session.pour(role, is_override=True)
        if get_slot_count(RosterRole.BENCH) > 0:
            session.pour(RosterRole.BENCH, is_override=True)

    total_filled = len(pool) - len(session.remaining)
    logger.debug("auto-fill computed", total_filled=total_filled, unplaced=len(session.remaining))
    return AutoFillResult(
        new_pool=tuple(session.remaining),
        new_assignments=tuple(session.placed),
        summary=session.summary(),
        total_filled=total_filled,
    )


def auto_fill_for(state: RosterState, topology: SlotTopology) -> AutoFillResult:
    """Run compute_auto_fill against a roster state and its topology."""
    return compute_auto_fill(
        state.pool,
        state.assignments,
        topology.role_slots,
        topology.capacity,
        topology.is_generic,
    )
