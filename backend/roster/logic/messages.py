"""Human-readable outcome text for roster transitions."""

from roster.logic.enums import RosterRole, role_label


def slot_name(role: RosterRole, position: int) -> str:
    return f"{role_label(role)} {position}"


def assigned(name: str, role: RosterRole, position: int) -> str:
    return f"{name} assigned to {slot_name(role, position)}"


def moved(name: str, role: RosterRole, position: int) -> str:
    return f"{name} moved to {slot_name(role, position)}"


def removed(name: str) -> str:
    return f"{name} moved to unassigned"


def swapped(name_a: str, name_b: str) -> str:
    return f"Swapped {name_a} and {name_b}"


def _players(count: int) -> str:
    return f"{count} player" if count == 1 else f"{count} players"


def auto_filled(count: int) -> str:
    return f"Auto-filled {_players(count)}"


def cleared(count: int) -> str:
    return f"Roster cleared — {_players(count)} moved to pool"


NOTHING_TO_AUTO_FILL = "No open slots to fill from the pool"
AUTO_FILL_PREVIEW_STALE = "Roster changed since the preview, auto-fill discarded"
CONFIRM_CLEAR = "Click again to clear"
CONFIRM_JOIN = "Join?"
