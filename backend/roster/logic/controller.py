"""
Callback-driven roster assignment controller.

The controller owns no roster data. Every call receives the caller's current
(pool, assignments) snapshot, runs a pure transition, and on change hands the
complete new pair to the roster-change callback together with a status message
for the notification sink. The only state kept between calls belongs to the
confirmation gates: the pending auto-fill preview, the armed clear-all click
and the armed join-slot click.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from roster.logic import messages, transitions
from roster.logic.candidates import Candidates, list_candidates
from roster.logic.gates import Armed, AutoFillPreviewGate, DoubleClickGate, MonotonicClock
from roster.logic.occupancy import SlotOption, all_slots_filled, slot_picker
from roster.logic.settings import RosterSettings
from roster.logic.state import RosterState
from roster.logic.views import RosterSection, SlotView, build_sections

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from roster.logic.auto_fill import AutoFillResult
    from roster.logic.enums import RosterRole
    from roster.logic.gates import Clock
    from roster.logic.state import Participant
    from roster.logic.topology import SlotTopology
    from roster.logic.transitions import TransitionResult

    type RosterChangeCallback = Callable[[tuple[Participant, ...], tuple[Participant, ...]], None]
    type NotifySink = Callable[[str], None]
    type SelfAssignHook = Callable[[RosterRole, int], None]

logger = structlog.get_logger()


def _discard_message(_message: str) -> None:
    pass


class RosterController:
    """
    Apply manual and bulk roster actions for one roster editor.

    Args:
        topology: Slot topology of the roster being edited
        on_roster_change: Receives the full (pool, assignments) pair after every change
        notify: Receives a human-readable message after every change
        on_self_assign: Hook letting a viewer who is not signed up claim a slot
        settings: Confirmation window lengths
        clock: Time source for the confirmation windows

    """

    def __init__(
        self,
        topology: SlotTopology,
        on_roster_change: RosterChangeCallback,
        *,
        notify: NotifySink | None = None,
        on_self_assign: SelfAssignHook | None = None,
        settings: RosterSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._topology = topology
        self._on_roster_change = on_roster_change
        self._notify = notify or _discard_message
        self._on_self_assign = on_self_assign
        self._settings = settings or RosterSettings()
        clock = clock or MonotonicClock()
        self._clear_gate = DoubleClickGate(self._settings.clear_confirm_seconds, clock)
        self._join_gate = DoubleClickGate(self._settings.join_confirm_seconds, clock)
        self._preview_gate = AutoFillPreviewGate()

    @property
    def topology(self) -> SlotTopology:
        return self._topology

    def set_topology(self, topology: SlotTopology) -> None:
        """Switch to a new topology. A held auto-fill preview is discarded."""
        if topology != self._topology:
            self._preview_gate.cancel()
            self._join_gate.reset()
        self._topology = topology

    def _commit(self, result: TransitionResult) -> bool:
        if not result.changed:
            return False
        pool, assignments = result.state.as_lists()
        logger.debug("roster updated", message=result.message, pool=len(pool), assigned=len(assignments))
        self._on_roster_change(pool, assignments)
        self._notify(result.message)
        return True

    # --- Manual actions ---

    def assign(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        signup_id: int,
        role: RosterRole,
        position: int,
    ) -> bool:
        """Assign a pool participant to a slot, displacing any occupant to the pool."""
        state = RosterState.from_lists(pool, assignments)
        return self._commit(transitions.assign(state, self._topology, signup_id, role, position))

    def assign_to_slot_from_browse_all(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        signup_id: int,
        role: RosterRole,
        position: int,
    ) -> bool:
        state = RosterState.from_lists(pool, assignments)
        return self._commit(
            transitions.assign_to_slot_from_browse_all(state, self._topology, signup_id, role, position),
        )

    def remove_to_pool(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        signup_id: int,
    ) -> bool:
        state = RosterState.from_lists(pool, assignments)
        return self._commit(transitions.remove_to_pool(state, signup_id))

    def reassign_or_swap(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        signup_id: int,
        role: RosterRole,
        position: int,
    ) -> bool:
        """Move an assigned participant to another slot, swapping if it is occupied."""
        state = RosterState.from_lists(pool, assignments)
        return self._commit(transitions.reassign_or_swap(state, self._topology, signup_id, role, position))

    def self_assign(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        role: RosterRole,
        position: int,
    ) -> bool:
        """
        Hand an empty slot to the self-assign hook.

        Creating the signup is the hook's job; the roster itself does not change
        here. Returns whether the hook was invoked.
        """
        if self._on_self_assign is None or not self._topology.has_slot(role, position):
            return False
        state = RosterState.from_lists(pool, assignments)
        if state.occupant_at(role, position) is not None:
            return False
        logger.debug("delegating self-assign", role=role, position=position)
        self._on_self_assign(role, position)
        return True

    def join_slot(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        role: RosterRole,
        position: int,
    ) -> bool:
        """
        Two-click join of an empty slot by a viewer who is not signed up.

        The first click arms the slot; a second click on the same slot within
        the window runs self_assign. Returns True when the hook was invoked.
        """
        if self._on_self_assign is None or not self._topology.has_slot(role, position):
            return False
        state = RosterState.from_lists(pool, assignments)
        if state.occupant_at(role, position) is not None:
            return False
        if not self._join_gate.press((role, position)):
            return False
        return self.self_assign(pool, assignments, role, position)

    # --- Auto-fill (preview, then confirm) ---

    def can_auto_fill(self, pool: Sequence[Participant], assignments: Sequence[Participant]) -> bool:
        return bool(pool) and not all_slots_filled(assignments, self._topology)

    @property
    def pending_auto_fill(self) -> AutoFillResult | None:
        return self._preview_gate.pending

    def request_auto_fill(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
    ) -> AutoFillResult | None:
        """
        Compute and hold an auto-fill preview without applying it.

        Returns None when auto-fill is disabled or would place nobody; the
        latter also sends a notice to the notification sink.
        """
        if not self.can_auto_fill(pool, assignments):
            self._preview_gate.cancel()
            return None
        state = RosterState.from_lists(pool, assignments)
        result = self._preview_gate.open(state, self._topology)
        if result is None:
            self._notify(messages.NOTHING_TO_AUTO_FILL)
        return result

    def confirm_auto_fill(self, pool: Sequence[Participant], assignments: Sequence[Participant]) -> bool:
        """Apply the held preview if the snapshot has not moved on since it was computed."""
        state = RosterState.from_lists(pool, assignments)
        if self._preview_gate.is_stale(state, self._topology):
            self._preview_gate.cancel()
            self._notify(messages.AUTO_FILL_PREVIEW_STALE)
            return False
        result = self._preview_gate.confirm(state, self._topology)
        if result is None:
            return False
        committed = self._commit(transitions.apply_auto_fill(state, result))
        if committed:
            logger.info("auto-fill applied", total_filled=result.total_filled, summary=result.summary_text)
        return committed

    def cancel_auto_fill(self) -> None:
        self._preview_gate.cancel()

    # --- Clear all (two clicks) ---

    def can_clear_all(self, assignments: Sequence[Participant]) -> bool:
        return bool(assignments)

    @property
    def clear_pending(self) -> bool:
        return self._clear_gate.is_armed

    def clear_all(self, pool: Sequence[Participant], assignments: Sequence[Participant]) -> bool:
        """
        First call arms the gate; a second call within the window clears the roster.

        Returns True only when the roster was actually cleared.
        """
        if not self.can_clear_all(assignments):
            self._clear_gate.reset()
            return False
        if not self._clear_gate.press():
            return False
        state = RosterState.from_lists(pool, assignments)
        committed = self._commit(transitions.clear_all(state))
        if committed:
            logger.info("roster cleared", moved=len(assignments))
        return committed

    # --- Read-only views ---

    def sections(
        self,
        assignments: Sequence[Participant],
        current_user_id: int | None = None,
    ) -> tuple[RosterSection, ...]:
        join_state = self._join_gate.state
        pending_join = join_state.target if isinstance(join_state, Armed) else None
        return build_sections(
            assignments,
            self._topology,
            current_user_id=current_user_id,
            can_join=self._on_self_assign is not None,
            pending_join=pending_join,
        )

    def slot_views(
        self,
        assignments: Sequence[Participant],
        current_user_id: int | None = None,
    ) -> tuple[SlotView, ...]:
        """Every slot of the topology in display order, flattened across sections."""
        return tuple(slot for section in self.sections(assignments, current_user_id) for slot in section.slots)

    def slot_picker(
        self,
        pool: Sequence[Participant],
        assignments: Sequence[Participant],
        signup_id: int | None = None,
    ) -> tuple[SlotOption, ...]:
        selected = RosterState.from_lists(pool, assignments).find_in_pool(signup_id) if signup_id is not None else None
        return slot_picker(assignments, self._topology, selected)

    def candidates(
        self,
        pool: Sequence[Participant],
        role: RosterRole | None = None,
        search: str = "",
    ) -> Candidates:
        return list_candidates(pool, role, search)
