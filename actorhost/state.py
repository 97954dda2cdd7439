"""Actor state tracking and persistence through the sidecar client."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Protocol

from actorhost.actor import StateManager
from actorhost.codec import DEFAULT_SERIALIZER_TYPE, Codec, get_actor_codec


class ChangeKind(str, Enum):
    """Pending change of a cached state; ADD and UPDATE share one operation."""

    NONE = ""
    ADD = "upsert"
    UPDATE = "upsert"
    REMOVE = "delete"


@dataclass
class ChangeMetadata:
    kind: ChangeKind
    value: Any


@dataclass
class ActorStateChange:
    state_name: str
    value: Any
    change_kind: ChangeKind


@dataclass
class ActorStateOperation:
    operation_type: str
    key: str
    value: bytes | None


class ActorStateClient(Protocol):
    """The part of the sidecar client that actor state needs."""

    def get_actor_state(self, actor_type: str, actor_id: str, key_name: str) -> bytes | None:
        """Return the stored bytes of a state, empty or None if absent."""

    def save_state_transactionally(
        self, actor_type: str, actor_id: str, operations: list[ActorStateOperation]
    ) -> None:
        """Apply the operations atomically."""


class StateAsyncProvider:
    """Reads and writes actor state through the sidecar client."""

    def __init__(self, client: ActorStateClient | None, serializer: Codec | None = None) -> None:
        self.client = client
        self.serializer = serializer if serializer is not None else get_actor_codec(DEFAULT_SERIALIZER_TYPE)

    def contains(self, actor_type: str, actor_id: str, state_name: str) -> bool:
        data = self.client.get_actor_state(actor_type, actor_id, state_name)
        return bool(data)

    def load(self, actor_type: str, actor_id: str, state_name: str) -> Any:
        data = self.client.get_actor_state(actor_type, actor_id, state_name)
        if not data:
            raise LookupError(
                f"get actor state result empty, with actorType: {actor_type}, "
                f"actorID: {actor_id}, stateName {state_name}"
            )
        try:
            return self.serializer.unmarshal(data)
        except ValueError as exc:
            raise ValueError(f"unmarshal state data error = {exc}") from exc

    def apply(self, actor_type: str, actor_id: str, changes: Iterable[ActorStateChange | None] | None) -> None:
        """Send every real change to the store in one transaction."""
        operations: list[ActorStateOperation] = []
        # The last upserted payload carries over to following operations.
        value: bytes | None = None
        for change in changes or ():
            if change is None or not change.change_kind.value:
                continue
            if change.change_kind is ChangeKind.ADD:
                value = self.serializer.marshal(change.value)
            operations.append(ActorStateOperation(change.change_kind.value, change.state_name, value))
        if not operations:
            return
        self.client.save_state_transactionally(actor_type, actor_id, operations)


class ActorStateManager(StateManager):
    """Caches an actor's state changes until they are saved."""

    def __init__(self, actor_type_name: str, actor_id: str, provider: StateAsyncProvider) -> None:
        self.actor_type_name = actor_type_name
        self.actor_id = actor_id
        self._provider = provider
        self._tracker: dict[str, ChangeMetadata] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _check_name(state_name: str) -> None:
        if not state_name:
            raise ValueError("state name can't be empty")

    def _tracked(self, state_name: str) -> ChangeMetadata | None:
        with self._lock:
            return self._tracker.get(state_name)

    def _track(self, state_name: str, kind: ChangeKind, value: Any) -> None:
        with self._lock:
            self._tracker[state_name] = ChangeMetadata(kind, value)

    def add(self, state_name: str, value: Any) -> None:
        self._check_name(state_name)
        exists = self._provider.contains(self.actor_type_name, self.actor_id, state_name)
        metadata = self._tracked(state_name)
        if metadata is not None:
            if metadata.kind is ChangeKind.REMOVE:
                self._track(state_name, ChangeKind.UPDATE, value)
                return
            raise ValueError(f"duplicate cached state: {state_name}")
        if exists:
            raise ValueError(f"duplicate state: {state_name}")
        self._track(state_name, ChangeKind.ADD, value)

    def get(self, state_name: str) -> Any:
        self._check_name(state_name)
        metadata = self._tracked(state_name)
        if metadata is not None:
            if metadata.kind is ChangeKind.REMOVE:
                raise LookupError(f"state is marked for removal: {state_name}")
            return metadata.value
        value = self._provider.load(self.actor_type_name, self.actor_id, state_name)
        self._track(state_name, ChangeKind.NONE, value)
        return value

    def set(self, state_name: str, value: Any) -> None:
        self._check_name(state_name)
        metadata = self._tracked(state_name)
        if metadata is None:
            self._track(state_name, ChangeKind.ADD, value)
            return
        kind = metadata.kind
        if kind in (ChangeKind.NONE, ChangeKind.REMOVE):
            kind = ChangeKind.UPDATE
        self._track(state_name, kind, value)

    def remove(self, state_name: str) -> None:
        self._check_name(state_name)
        metadata = self._tracked(state_name)
        if metadata is not None:
            if metadata.kind is ChangeKind.REMOVE:
                return
            if metadata.kind is ChangeKind.ADD:
                with self._lock:
                    self._tracker.pop(state_name, None)
                return
            self._track(state_name, ChangeKind.REMOVE, None)
            return
        if self._provider.contains(self.actor_type_name, self.actor_id, state_name):
            self._track(state_name, ChangeKind.REMOVE, None)

    def contains(self, state_name: str) -> bool:
        self._check_name(state_name)
        metadata = self._tracked(state_name)
        if metadata is not None:
            return metadata.kind is not ChangeKind.REMOVE
        return self._provider.contains(self.actor_type_name, self.actor_id, state_name)

    def save(self) -> None:
        with self._lock:
            changes = [
                ActorStateChange(name, metadata.value, metadata.kind) for name, metadata in self._tracker.items()
            ]
        self._provider.apply(self.actor_type_name, self.actor_id, changes)
        self.flush()

    def flush(self) -> None:
        with self._lock:
            self._tracker = {
                name: ChangeMetadata(ChangeKind.NONE, metadata.value)
                for name, metadata in self._tracker.items()
                if metadata.kind is not ChangeKind.REMOVE
            }