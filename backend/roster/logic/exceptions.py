"""Typed domain exceptions for roster snapshots.

Stale references (unknown signup ids, slots outside the topology) are not
errors: transitions ignore them and return the input unchanged. Exceptions are
reserved for snapshots that can never be valid, so they surface at the boundary
where the snapshot is built rather than deep inside a transition.
"""


class RosterError(Exception):
    """Base exception for roster domain errors."""


class RosterIntegrityError(RosterError):
    """Snapshot breaks the pool/assignments partition.

    Raised when a signup id appears more than once, or when two assigned
    participants claim the same (role, position) slot.
    """
