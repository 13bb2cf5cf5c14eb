"""
Read-only slot views for rendering a roster.

These are plain data for a front end: one section per active role with its
heading and fill count, and one view per slot with its occupant, the
current-viewer highlight and whether a viewer may join it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from roster.logic.enums import ROLE_DISPLAY, RosterRole
from roster.logic.occupancy import occupant_at
from roster.logic.state import Participant  # noqa: TC001

if TYPE_CHECKING:
    from collections.abc import Sequence

    from roster.logic.topology import SlotTopology


class SlotView(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: RosterRole
    position: int
    label: str
    color: str
    occupant: Participant | None = None
    is_current_user: bool = False
    is_joinable: bool = False
    is_join_pending: bool = False


class RosterSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: RosterRole
    heading: str
    emoji: str
    filled: int
    capacity: int
    slots: tuple[SlotView, ...]


def section_heading(role: RosterRole, topology: SlotTopology) -> str:
    if topology.is_generic and role == RosterRole.PLAYER:
        return "Players"
    return ROLE_DISPLAY[role].label


def build_sections(
    assignments: Sequence[Participant],
    topology: SlotTopology,
    *,
    current_user_id: int | None = None,
    can_join: bool = False,
    pending_join: tuple[RosterRole, int] | None = None,
) -> tuple[RosterSection, ...]:
    """Build one section per active role, skipping roles with no slots."""
    sections = []
    for role in topology.role_slots:
        capacity = topology.capacity(role)
        if capacity == 0:
            continue
        display = ROLE_DISPLAY[role]
        slots = []
        for position in range(1, capacity + 1):
            occupant = occupant_at(assignments, role, position)
            slots.append(
                SlotView(
                    role=role,
                    position=position,
                    label=display.label,
                    color=display.color,
                    occupant=occupant,
                    is_current_user=(
                        occupant is not None and current_user_id is not None and occupant.user_id == current_user_id
                    ),
                    is_joinable=can_join and occupant is None,
                    is_join_pending=can_join and occupant is None and pending_join == (role, position),
                ),
            )
        sections.append(
            RosterSection(
                role=role,
                heading=section_heading(role, topology),
                emoji=display.emoji,
                filled=sum(1 for slot in slots if slot.occupant is not None),
                capacity=capacity,
                slots=tuple(slots),
            ),
        )
    return tuple(sections)
