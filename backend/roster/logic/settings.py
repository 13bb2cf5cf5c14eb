"""Engine-level settings for roster confirmation gates."""

from pydantic import BaseModel, ConfigDict, Field

CLEAR_CONFIRM_SECONDS = 3.0
JOIN_CONFIRM_SECONDS = 3.0


class RosterSettings(BaseModel):
    """
    Timeouts for the two-click confirmation gates.

    Defaults match the three second window of the web roster builder.
    """

    model_config = ConfigDict(frozen=True)

    clear_confirm_seconds: float = Field(default=CLEAR_CONFIRM_SECONDS, gt=0)
    join_confirm_seconds: float = Field(default=JOIN_CONFIRM_SECONDS, gt=0)
