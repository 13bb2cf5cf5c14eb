from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from roster.logic.enums import RosterRole
from roster.logic.state import Participant, RosterState
from roster.logic.topology import SlotTopology

MAX_ROSTER_ENTRIES = 500


class RosterSnapshot(BaseModel):
    """A caller-owned roster snapshot: both lists plus the role -> capacity map."""

    model_config = ConfigDict(extra="forbid")

    pool: list[Participant] = Field(default_factory=list, max_length=MAX_ROSTER_ENTRIES)
    assignments: list[Participant] = Field(default_factory=list, max_length=MAX_ROSTER_ENTRIES)
    slots: dict[RosterRole, NonNegativeInt] | None = None

    def to_state(self) -> RosterState:
        return RosterState.from_lists(self.pool, self.assignments)

    def to_topology(self) -> SlotTopology:
        return SlotTopology.from_mapping(self.slots)


class AssignAction(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["assign"]
    signup_id: int
    role: RosterRole
    position: int


class RemoveAction(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["remove"]
    signup_id: int


class MoveAction(BaseModel):
    """Reassign an assigned participant; swaps when the destination is occupied."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["move"]
    signup_id: int
    role: RosterRole
    position: int


class ClearAction(BaseModel):
    """Clear the roster. The two-click confirmation is the client's job."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["clear"]


RosterAction = Annotated[AssignAction | RemoveAction | MoveAction | ClearAction, Field(discriminator="type")]


class ActionRequest(RosterSnapshot):
    action: RosterAction
