"""Interfaces and base class for user-defined actors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


class StateManager(ABC):
    """Per-actor state cache backed by a state store."""

    @abstractmethod
    def add(self, state_name: str, value: Any) -> None:
        """Add a new state; fail if it already exists."""

    @abstractmethod
    def get(self, state_name: str) -> Any:
        """Return the value of a state."""

    @abstractmethod
    def set(self, state_name: str, value: Any) -> None:
        """Create or replace a state."""

    @abstractmethod
    def remove(self, state_name: str) -> None:
        """Mark a state for removal."""

    @abstractmethod
    def contains(self, state_name: str) -> bool:
        """Tell whether a state exists."""

    @abstractmethod
    def save(self) -> None:
        """Write pending changes to the state store."""

    @abstractmethod
    def flush(self) -> None:
        """Mark cached changes as written."""


@runtime_checkable
class ReminderCallee(Protocol):
    """An actor that can receive reminders."""

    def reminder_call(self, reminder_name: str, state: bytes | None, due_time: str, period: str) -> None:
        """Handle a fired reminder."""


class ActorServer(ABC):
    """Base class for actor implementations; subclasses define actor_type()."""

    _actor_id: str = ""
    _id_assigned: bool = False
    _state_manager: StateManager | None = None

    @abstractmethod
    def actor_type(self) -> str:
        """Name of the actor type this class implements."""

    @property
    def id(self) -> str:
        return self._actor_id

    def set_id(self, actor_id: str) -> None:
        """Assign the actor id; only the first call has any effect."""
        if self._id_assigned:
            return
        self._actor_id = actor_id
        self._id_assigned = True

    def set_state_manager(self, state_manager: StateManager) -> None:
        self._state_manager = state_manager

    @property
    def state_manager(self) -> StateManager | None:
        return self._state_manager

    def save_state(self) -> None:
        """Persist the cached state, if a state manager is attached."""
        if self._state_manager is not None:
            self._state_manager.save()