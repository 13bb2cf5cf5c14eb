"""
Two-step confirmation gates for destructive roster actions.

DoubleClickGate is a small explicit state machine, Idle -> Armed(expires_at)
-> Idle. A press while armed and not yet expired confirms. Expiry is resolved
lazily against an injectable clock, so no timer task is needed and tests can
advance time without sleeping.

AutoFillPreviewGate holds a computed auto-fill preview together with the
snapshot it was computed from. Confirming against any other snapshot discards
the preview instead of applying it.
"""

from __future__ import annotations

import time
from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Protocol

import structlog

from roster.logic.auto_fill import auto_fill_for

if TYPE_CHECKING:
    from roster.logic.auto_fill import AutoFillResult
    from roster.logic.state import RosterState
    from roster.logic.topology import SlotTopology

logger = structlog.get_logger()


class Clock(Protocol):
    def now(self) -> float:
        """Current time in seconds. Only differences between readings matter."""
        ...


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Armed:
    expires_at: float
    target: Hashable | None = None


type GateState = Idle | Armed

IDLE = Idle()


class DoubleClickGate:
    """
    Require a second press within window_seconds of the first.

    An optional target distinguishes what is being confirmed (e.g. one slot
    among many): a press on a different target re-arms on that target instead
    of confirming.
    """

    def __init__(self, window_seconds: float, clock: Clock | None = None) -> None:
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")
        self._window_seconds = window_seconds
        self._clock = clock or MonotonicClock()
        self._state: GateState = IDLE

    @property
    def state(self) -> GateState:
        if isinstance(self._state, Armed) and self._clock.now() >= self._state.expires_at:
            self._state = IDLE
        return self._state

    @property
    def is_armed(self) -> bool:
        return isinstance(self.state, Armed)

    def is_armed_for(self, target: Hashable | None) -> bool:
        state = self.state
        return isinstance(state, Armed) and state.target == target

    def press(self, target: Hashable | None = None) -> bool:
        """Register a press. Returns True when this press confirms the action."""
        if self.is_armed_for(target):
            self._state = IDLE
            return True
        self._state = Armed(expires_at=self._clock.now() + self._window_seconds, target=target)
        return False

    def reset(self) -> None:
        self._state = IDLE


class PendingPreview(NamedTuple):
    state: RosterState
    topology: SlotTopology
    result: AutoFillResult


class AutoFillPreviewGate:
    """Hold an auto-fill preview until it is confirmed or cancelled."""

    def __init__(self) -> None:
        self._pending: PendingPreview | None = None

    @property
    def pending(self) -> AutoFillResult | None:
        return self._pending.result if self._pending is not None else None

    def open(self, state: RosterState, topology: SlotTopology) -> AutoFillResult | None:
        """
        Compute and hold a preview for the given snapshot.

        Returns None (and holds nothing) when the preview would place nobody.
        """
        result = auto_fill_for(state, topology)
        if result.total_filled == 0:
            self._pending = None
            return None
        self._pending = PendingPreview(state, topology, result)
        return result

    def is_stale(self, state: RosterState, topology: SlotTopology) -> bool:
        pending = self._pending
        return pending is not None and (pending.state != state or pending.topology != topology)

    def discard_if_stale(self, state: RosterState, topology: SlotTopology) -> bool:
        """Drop the held preview if the snapshot moved on. Returns True if one was dropped."""
        if self.is_stale(state, topology):
            logger.debug("discarding stale auto-fill preview")
            self._pending = None
            return True
        return False

    def confirm(self, state: RosterState, topology: SlotTopology) -> AutoFillResult | None:
        """Release the held preview if it still matches the snapshot; the gate is cleared either way."""
        if self.discard_if_stale(state, topology):
            return None
        pending, self._pending = self._pending, None
        return pending.result if pending is not None else None

    def cancel(self) -> None:
        self._pending = None
