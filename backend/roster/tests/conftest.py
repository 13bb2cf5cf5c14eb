from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from roster.logic.controller import RosterController
from roster.logic.enums import RosterRole
from roster.logic.state import Participant, RosterState
from roster.logic.topology import SlotTopology
from roster.tests.mocks import FakeClock, RecordingSink

if TYPE_CHECKING:
    from collections.abc import Sequence


# ============================================================================
# Roster Builder Helpers
# ============================================================================


def create_participant(
    signup_id: int,
    name: str | None = None,
    *,
    role: RosterRole | None = None,
    preferred: Sequence[RosterRole] = (),
    user_id: int | None = None,
) -> Participant:
    """Create a pool Participant with sensible defaults for testing."""
    return Participant(
        signup_id=signup_id,
        user_id=user_id if user_id is not None else signup_id + 100,
        display_name=name if name is not None else f"Player{signup_id}",
        character_role=role,
        preferred_roles=tuple(preferred),
    )


def create_assigned(
    signup_id: int,
    slot: RosterRole,
    position: int,
    name: str | None = None,
    *,
    role: RosterRole | None = None,
    user_id: int | None = None,
) -> Participant:
    """Create a Participant already holding (slot, position); override derived from role."""
    return create_participant(signup_id, name, role=role, user_id=user_id).placed_at(slot, position)


def create_state(
    pool: Sequence[Participant] = (),
    assignments: Sequence[Participant] = (),
) -> RosterState:
    return RosterState.from_lists(pool, assignments)


ROLE_BASED = SlotTopology(tank=2, healer=4, dps=14, flex=5)
GENERIC = SlotTopology(player=4)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(sink, clock):
    return RosterController(
        ROLE_BASED,
        sink.on_roster_change,
        notify=sink.notify,
        on_self_assign=sink.on_self_assign,
        clock=clock,
    )
