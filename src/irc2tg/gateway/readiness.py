"""Readiness state machine: NOT_READY -> READY, one way."""

from __future__ import annotations

from enum import Enum


class ReadinessState(str, Enum):
    NOT_READY = "not_ready"
    READY = "ready"


class Readiness:
    """Gate for forwarding. Starts NOT_READY; activate() moves to READY exactly once."""

    def __init__(self) -> None:
        self._state = ReadinessState.NOT_READY

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is ReadinessState.READY

    def activate(self) -> bool:
        """Transition to READY. Returns True on the transition, False if already READY."""
        if self._state is ReadinessState.READY:
            return False
        self._state = ReadinessState.READY
        return True
