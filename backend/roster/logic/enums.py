"""
String enum definitions for roster roles and their display metadata.
"""

from enum import Enum
from typing import NamedTuple


class RosterRole(str, Enum):
    """Role a roster slot belongs to."""

    TANK = "tank"
    HEALER = "healer"
    DPS = "dps"
    FLEX = "flex"
    PLAYER = "player"  # generic, undifferentiated slot
    BENCH = "bench"


class RoleDisplay(NamedTuple):
    label: str
    color: str
    emoji: str
    priority: int  # lower is tried first when placing by preferred role


ROLE_DISPLAY: dict[RosterRole, RoleDisplay] = {
    RosterRole.TANK: RoleDisplay("Tank", "bg-blue-600", "🛡", 0),
    RosterRole.HEALER: RoleDisplay("Healer", "bg-green-600", "💚", 1),
    RosterRole.DPS: RoleDisplay("DPS", "bg-red-600", "⚔", 2),
    RosterRole.FLEX: RoleDisplay("Flex", "bg-purple-600", "🔄", 99),
    RosterRole.PLAYER: RoleDisplay("Player", "bg-indigo-600", "🎮", 99),
    RosterRole.BENCH: RoleDisplay("Bench", "bg-slate-600", "🪑", 99),
}

if set(ROLE_DISPLAY) != set(RosterRole):  # pragma: no cover
    raise RuntimeError(f"ROLE_DISPLAY is missing roles: {set(RosterRole) - set(ROLE_DISPLAY)}")

# Combat roles in criticality order; used by the exact-match and backfill passes.
COMBAT_ROLES: tuple[RosterRole, ...] = (RosterRole.TANK, RosterRole.HEALER, RosterRole.DPS)

ROLE_BASED_ROLES: tuple[RosterRole, ...] = (*COMBAT_ROLES, RosterRole.FLEX)


def role_label(role: RosterRole) -> str:
    return ROLE_DISPLAY[role].label


def role_priority(role: RosterRole) -> int:
    return ROLE_DISPLAY[role].priority
