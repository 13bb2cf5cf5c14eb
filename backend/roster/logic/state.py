"""
Immutable roster state models.

A roster is stored as one ordered sequence of participants keyed by signup id.
Each participant carries a tagged placement (unassigned or assigned to a slot),
and the pool and assignment lists are derived views over that sequence. Moving
a participant between the two views re-appends it, so it shows up last in its
new view, exactly as appending to the list pair would.

All models are frozen. Updates go through model_copy or a fresh constructor
and never mutate an existing instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roster.logic.enums import RosterRole  # noqa: TC001
from roster.logic.exceptions import RosterIntegrityError

if TYPE_CHECKING:
    from collections.abc import Iterable


class Unassigned(BaseModel):
    """Placement of a participant waiting in the pool."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unassigned"] = "unassigned"


class Assigned(BaseModel):
    """Placement of a participant bound to a (role, position) slot."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["assigned"] = "assigned"
    role: RosterRole
    position: int = Field(ge=1)


Placement = Annotated[Unassigned | Assigned, Field(discriminator="kind")]

UNASSIGNED = Unassigned()


class Participant(BaseModel):
    """A signed-up person eligible for roster placement."""

    model_config = ConfigDict(frozen=True)

    signup_id: int
    user_id: int | None = None
    display_name: str
    character_role: RosterRole | None = None
    preferred_roles: tuple[RosterRole, ...] = ()
    placement: Placement = UNASSIGNED
    is_override: bool = False

    @property
    def is_assigned(self) -> bool:
        return isinstance(self.placement, Assigned)

    @property
    def slot(self) -> RosterRole | None:
        """Role of the occupied slot, None while in the pool."""
        return self.placement.role if isinstance(self.placement, Assigned) else None

    @property
    def position(self) -> int:
        """Position of the occupied slot, 0 while in the pool."""
        return self.placement.position if isinstance(self.placement, Assigned) else 0

    def overrides(self, role: RosterRole) -> bool:
        """Whether placing this participant in role counts as an override."""
        return self.character_role != role

    def placed_at(self, role: RosterRole, position: int, *, is_override: bool | None = None) -> Participant:
        """
        Return a copy bound to (role, position).

        The override flag is recomputed against role unless given explicitly.
        """
        if is_override is None:
            is_override = self.overrides(role)
        return self.model_copy(
            update={"placement": Assigned(role=role, position=position), "is_override": is_override},
        )

    def unplaced(self) -> Participant:
        """Return a copy returned to the pool."""
        return self.model_copy(update={"placement": UNASSIGNED, "is_override": False})


class RosterState(BaseModel):
    """
    Single indexed store of every participant in a roster-building session.

    Invariants (checked at construction):
    - signup ids are unique
    - no two assigned participants share a (role, position) slot
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[Participant, ...] = ()

    @model_validator(mode="after")
    def _check_partition(self) -> Self:
        seen_ids: set[int] = set()
        seen_slots: set[tuple[RosterRole, int]] = set()
        for entry in self.entries:
            if entry.signup_id in seen_ids:
                raise RosterIntegrityError(f"Duplicate signup id {entry.signup_id} in roster")
            seen_ids.add(entry.signup_id)
            if isinstance(entry.placement, Assigned):
                slot = (entry.placement.role, entry.placement.position)
                if slot in seen_slots:
                    raise RosterIntegrityError(f"Slot {slot[0].value} {slot[1]} is assigned more than once")
                seen_slots.add(slot)
        return self

    @classmethod
    def from_lists(cls, pool: Iterable[Participant], assignments: Iterable[Participant]) -> RosterState:
        """
        Build a store from the caller-facing (pool, assignments) pair.

        Pool entries are normalised to the unassigned placement. Assignment
        entries must carry a slot.
        """
        entries = [participant.unplaced() if participant.is_assigned else participant for participant in pool]
        for participant in assignments:
            if not participant.is_assigned:
                raise RosterIntegrityError(f"Assignment for signup id {participant.signup_id} has no slot")
            entries.append(participant)
        return cls(entries=tuple(entries))

    @property
    def pool(self) -> tuple[Participant, ...]:
        return tuple(entry for entry in self.entries if not entry.is_assigned)

    @property
    def assignments(self) -> tuple[Participant, ...]:
        return tuple(entry for entry in self.entries if entry.is_assigned)

    def as_lists(self) -> tuple[tuple[Participant, ...], tuple[Participant, ...]]:
        """Return the (pool, assignments) pair."""
        return self.pool, self.assignments

    def get(self, signup_id: int) -> Participant | None:
        return next((entry for entry in self.entries if entry.signup_id == signup_id), None)

    def find_in_pool(self, signup_id: int) -> Participant | None:
        participant = self.get(signup_id)
        return participant if participant is not None and not participant.is_assigned else None

    def find_assigned(self, signup_id: int) -> Participant | None:
        participant = self.get(signup_id)
        return participant if participant is not None and participant.is_assigned else None

    def occupant_at(self, role: RosterRole, position: int) -> Participant | None:
        return next(
            (entry for entry in self.entries if entry.slot == role and entry.position == position),
            None,
        )

    def with_moved(self, *participants: Participant) -> RosterState:
        """
        Return a new state where each participant is removed and re-appended.

        Used when a participant changes view (pool <-> assignments), so it ends
        up last in the view it moves into.
        """
        moved_ids = {participant.signup_id for participant in participants}
        kept = tuple(entry for entry in self.entries if entry.signup_id not in moved_ids)
        return RosterState(entries=(*kept, *participants))

    def with_replaced(self, *participants: Participant) -> RosterState:
        """Return a new state where each participant is updated in place."""
        by_id = {participant.signup_id: participant for participant in participants}
        return RosterState(entries=tuple(by_id.get(entry.signup_id, entry) for entry in self.entries))
