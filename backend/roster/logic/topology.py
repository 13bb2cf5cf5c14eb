"""
Slot topology: which roles a roster offers and how many slots each has.

A topology is either role-based (tank/healer/dps/flex) or generic (a single
undifferentiated "player" role). Either shape may carry bench slots on top.
Capacities left unset fall back to the defaults of the active shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from roster.logic.enums import ROLE_BASED_ROLES, RosterRole

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_CAPACITY: dict[RosterRole, int] = {
    RosterRole.TANK: 2,
    RosterRole.HEALER: 4,
    RosterRole.DPS: 14,
    RosterRole.FLEX: 5,
    RosterRole.PLAYER: 4,
    RosterRole.BENCH: 0,
}


class SlotTopology(BaseModel):
    """
    Per-role capacity configuration for one roster.

    Each field is the capacity of that role, or None to use the default.
    Negative capacities are rejected at construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tank: NonNegativeInt | None = None
    healer: NonNegativeInt | None = None
    dps: NonNegativeInt | None = None
    flex: NonNegativeInt | None = None
    player: NonNegativeInt | None = None
    bench: NonNegativeInt | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[RosterRole | str, int] | None) -> SlotTopology:
        """Build a topology from a role -> capacity mapping (keys may be role strings)."""
        if not mapping:
            return cls()
        return cls(**{RosterRole(role).value: count for role, count in mapping.items()})

    def _configured(self, role: RosterRole) -> int | None:
        return getattr(self, role.value)

    @property
    def is_generic(self) -> bool:
        """True when only generic player slots are configured."""
        has_player_slots = (self.player or 0) > 0
        has_role_slots = any((self._configured(role) or 0) > 0 for role in ROLE_BASED_ROLES)
        return has_player_slots and not has_role_slots

    @property
    def role_slots(self) -> tuple[RosterRole, ...]:
        """Active roles in display order."""
        roles = (RosterRole.PLAYER,) if self.is_generic else ROLE_BASED_ROLES
        if (self.bench or 0) > 0:
            roles = (*roles, RosterRole.BENCH)
        return roles

    def capacity(self, role: RosterRole) -> int:
        """Number of slots for role, or 0 if the role is not part of this topology."""
        if role not in self.role_slots:
            return 0
        configured = self._configured(role)
        return configured if configured is not None else DEFAULT_CAPACITY[role]

    def has_slot(self, role: RosterRole, position: int) -> bool:
        return 1 <= position <= self.capacity(role)

    def slots(self) -> tuple[tuple[RosterRole, int], ...]:
        """Every (role, position) pair, roles in display order and positions ascending."""
        return tuple(
            (role, position) for role in self.role_slots for position in range(1, self.capacity(role) + 1)
        )

    @property
    def total_slots(self) -> int:
        return sum(self.capacity(role) for role in self.role_slots)
