"""Candidate lists for the assignment picker."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Sequence

    from roster.logic.enums import RosterRole
    from roster.logic.state import Participant


class Candidates(NamedTuple):
    """Pool participants split by whether their character role fits the targeted slot."""

    matching: tuple[Participant, ...]
    other: tuple[Participant, ...]


def list_candidates(
    pool: Sequence[Participant],
    role: RosterRole | None = None,
    search: str = "",
) -> Candidates:
    """
    Filter the pool by display name and split it by role fit.

    Without a targeted role (browse-all mode) every candidate lands in other.
    Both groups keep pool order.
    """
    needle = search.strip().lower()
    filtered = [p for p in pool if needle in p.display_name.lower()] if needle else list(pool)
    if role is None:
        return Candidates((), tuple(filtered))
    return Candidates(
        matching=tuple(p for p in filtered if p.character_role == role),
        other=tuple(p for p in filtered if p.character_role != role),
    )
