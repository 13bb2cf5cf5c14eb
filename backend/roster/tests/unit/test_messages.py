import pytest

from roster.logic import messages
from roster.logic.enums import RosterRole


@pytest.mark.parametrize(
    ("role", "position", "expected"),
    [
        (RosterRole.TANK, 1, "Tank 1"),
        (RosterRole.DPS, 12, "DPS 12"),
        (RosterRole.FLEX, 3, "Flex 3"),
        (RosterRole.PLAYER, 2, "Player 2"),
        (RosterRole.BENCH, 1, "Bench 1"),
    ],
)
def test_slot_name(role, position, expected):
    assert messages.slot_name(role, position) == expected


def test_transition_messages():
    assert messages.assigned("Aria", RosterRole.HEALER, 2) == "Aria assigned to Healer 2"
    assert messages.moved("Aria", RosterRole.DPS, 4) == "Aria moved to DPS 4"
    assert messages.removed("Aria") == "Aria moved to unassigned"
    assert messages.swapped("Aria", "Bram") == "Swapped Aria and Bram"


def test_counts_are_pluralised():
    assert messages.auto_filled(1) == "Auto-filled 1 player"
    assert messages.auto_filled(5) == "Auto-filled 5 players"
    assert messages.cleared(1) == "Roster cleared — 1 player moved to pool"
    assert messages.cleared(3) == "Roster cleared — 3 players moved to pool"
