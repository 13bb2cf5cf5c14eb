"""
Pure manual roster transitions.

Each transition takes the current RosterState (plus the topology where a
destination slot is involved) and returns a TransitionResult. A reference to
something that is not in the snapshot, such as an unknown signup id, a
participant in the wrong list, or a slot outside the topology, is stale input:
the transition returns the input state object itself with no message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import structlog

from roster.logic import messages
from roster.logic.state import RosterState

if TYPE_CHECKING:
    from roster.logic.auto_fill import AutoFillResult
    from roster.logic.enums import RosterRole
    from roster.logic.topology import SlotTopology

logger = structlog.get_logger()


class TransitionResult(NamedTuple):
    """
    Result of a roster transition.

    When nothing changed, state is the input instance and message is None.
    """

    state: RosterState
    message: str | None = None

    @property
    def changed(self) -> bool:
        return self.message is not None


def _ignored(state: RosterState, action: str, **context: object) -> TransitionResult:
    logger.debug("ignoring stale roster action", action=action, **context)
    return TransitionResult(state)


def assign(
    state: RosterState,
    topology: SlotTopology,
    signup_id: int,
    role: RosterRole,
    position: int,
) -> TransitionResult:
    """
    Move a pool participant into (role, position).

    A participant already in the slot is displaced to the end of the pool.
    """
    participant = state.find_in_pool(signup_id)
    if participant is None or not topology.has_slot(role, position):
        return _ignored(state, "assign", signup_id=signup_id, role=role, position=position)

    moving = [participant.placed_at(role, position)]
    occupant = state.occupant_at(role, position)
    if occupant is not None:
        moving.insert(0, occupant.unplaced())
    new_state = state.with_moved(*moving)
    return TransitionResult(new_state, messages.assigned(participant.display_name, role, position))


def assign_to_slot_from_browse_all(
    state: RosterState,
    topology: SlotTopology,
    signup_id: int,
    role: RosterRole,
    position: int,
) -> TransitionResult:
    """
    Assign a participant picked from the browse-all list to a chosen slot.

    The picker only offers empty slots, but the operation behaves exactly like
    assign if the slot turns out to be occupied.
    """
    return assign(state, topology, signup_id, role, position)


def remove_to_pool(state: RosterState, signup_id: int) -> TransitionResult:
    """Move an assigned participant back to the end of the pool."""
    participant = state.find_assigned(signup_id)
    if participant is None:
        return _ignored(state, "remove", signup_id=signup_id)
    new_state = state.with_moved(participant.unplaced())
    return TransitionResult(new_state, messages.removed(participant.display_name))


def reassign_or_swap(
    state: RosterState,
    topology: SlotTopology,
    signup_id: int,
    role: RosterRole,
    position: int,
) -> TransitionResult:
    """
    Move an assigned participant to another slot, swapping with its occupant.

    Both participants keep their place in the assignment list. The pool is
    never touched.
    """
    participant = state.find_assigned(signup_id)
    if participant is None or not topology.has_slot(role, position):
        return _ignored(state, "reassign", signup_id=signup_id, role=role, position=position)
    if participant.slot == role and participant.position == position:
        return _ignored(state, "reassign", signup_id=signup_id, role=role, position=position)

    occupant = state.occupant_at(role, position)
    moved = participant.placed_at(role, position)
    if occupant is None:
        new_state = state.with_replaced(moved)
        return TransitionResult(new_state, messages.moved(participant.display_name, role, position))

    old_role, old_position = participant.slot, participant.position
    displaced = occupant.placed_at(old_role, old_position)
    new_state = state.with_replaced(moved, displaced)
    return TransitionResult(new_state, messages.swapped(participant.display_name, occupant.display_name))


def clear_all(state: RosterState) -> TransitionResult:
    """Move every assigned participant back to the pool, in assignment order."""
    assigned = state.assignments
    if not assigned:
        return _ignored(state, "clear")
    new_state = state.with_moved(*(participant.unplaced() for participant in assigned))
    return TransitionResult(new_state, messages.cleared(len(assigned)))


def apply_auto_fill(state: RosterState, result: AutoFillResult) -> TransitionResult:
    """Commit a computed auto-fill preview. A preview that placed nobody is a no-op."""
    if result.total_filled == 0:
        return _ignored(state, "auto_fill")
    new_state = RosterState.from_lists(result.new_pool, result.new_assignments)
    return TransitionResult(new_state, messages.auto_filled(result.total_filled))
