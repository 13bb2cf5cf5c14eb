"""
Occupancy queries over an assignment list.

Everything here is recomputed by a linear scan on every call. Rosters hold
tens of entries, so no index is maintained between calls. Lower positions are
always preferred, which keeps fill patterns reproducible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from roster.logic.enums import ROLE_DISPLAY, RosterRole

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from roster.logic.state import Participant
    from roster.logic.topology import SlotTopology


def occupant_at(assignments: Sequence[Participant], role: RosterRole, position: int) -> Participant | None:
    return next((a for a in assignments if a.slot == role and a.position == position), None)


def find_next_empty_position(
    assignments: Sequence[Participant],
    role: RosterRole,
    get_slot_count: Callable[[RosterRole], int],
) -> int | None:
    """Return the lowest unoccupied position for role, or None if the role is full."""
    occupied = {a.position for a in assignments if a.slot == role}
    for position in range(1, get_slot_count(role) + 1):
        if position not in occupied:
            return position
    return None


def open_slot_count(assignments: Sequence[Participant], topology: SlotTopology) -> int:
    """Number of empty slots across the whole topology."""
    return sum(1 for role, position in topology.slots() if occupant_at(assignments, role, position) is None)


def all_slots_filled(assignments: Sequence[Participant], topology: SlotTopology) -> bool:
    return open_slot_count(assignments, topology) == 0


class SlotOption(BaseModel):
    """One entry of the browse-all slot picker."""

    model_config = ConfigDict(frozen=True)

    role: RosterRole
    position: int
    label: str
    color: str
    occupant_name: str | None = None
    is_match: bool = False

    @property
    def is_locked(self) -> bool:
        return self.occupant_name is not None


def slot_picker(
    assignments: Sequence[Participant],
    topology: SlotTopology,
    selected: Participant | None = None,
) -> tuple[SlotOption, ...]:
    """
    List every slot of the topology for the browse-all picker.

    Occupied slots carry the occupant's name and are locked. When a participant
    is selected, empty slots matching their character role are flagged.
    """
    options = []
    for role, position in topology.slots():
        occupant = occupant_at(assignments, role, position)
        display = ROLE_DISPLAY[role]
        options.append(
            SlotOption(
                role=role,
                position=position,
                label=display.label,
                color=display.color,
                occupant_name=occupant.display_name if occupant is not None else None,
                is_match=occupant is None and selected is not None and selected.character_role == role,
            ),
        )
    return tuple(options)
