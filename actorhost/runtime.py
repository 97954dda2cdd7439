"""The actor runtime: registry of actor types and entry point for sidecar calls."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from actorhost.api import ActorRuntimeConfig
from actorhost.config import Option, get_config_from_options
from actorhost.errors import ActorError, ActorErrorCode
from actorhost.manager import ActorFactory, ActorManager
from actorhost.state import ActorStateClient

logger = logging.getLogger(__name__)

ManagerFactory = Callable[[str], ActorManager]


class ActorRuntime:
    """Routes invocations to the manager of each registered actor type."""

    def __init__(
        self,
        state_client: ActorStateClient | None = None,
        manager_factory: ManagerFactory | None = None,
    ) -> None:
        self.config = ActorRuntimeConfig()
        self._state_client = state_client
        self._manager_factory = manager_factory or self._default_manager
        self._managers: dict[str, ActorManager] = {}
        self._lock = threading.Lock()

    def _default_manager(self, serializer_type: str) -> ActorManager:
        return ActorManager(serializer_type, self._state_client)

    def register_actor_factory(self, factory: ActorFactory, *args: Option) -> None:
        """Register an actor factory, creating a manager for its type if there is none."""
        config = get_config_from_options(*args)
        actor_type = factory().actor_type()
        with self._lock:
            self.config.registered_actor_types.append(actor_type)
            manager = self._managers.get(actor_type)
            if manager is None:
                try:
                    manager = self._manager_factory(config.serializer_type)
                except ActorError as exc:
                    logger.warning("cannot create manager for actor type %s: %s", actor_type, exc)
                    return
                self._managers[actor_type] = manager
        manager.register_actor_impl_factory(factory)

    def get_json_serialized_config(self) -> bytes:
        return self.config.to_json()

    def _manager(self, actor_type_name: str) -> ActorManager:
        with self._lock:
            manager = self._managers.get(actor_type_name)
        if manager is None:
            raise ActorError(ActorErrorCode.ERR_ACTOR_TYPE_NOT_FOUND, f"no actor type {actor_type_name}")
        return manager

    def invoke_actor_method(
        self, actor_type_name: str, actor_id: str, actor_method: str, payload: bytes | None
    ) -> bytes | None:
        return self._manager(actor_type_name).invoke_method(actor_id, actor_method, payload)

    def deactivate(self, actor_type_name: str, actor_id: str) -> None:
        self._manager(actor_type_name).deactivate_actor(actor_id)

    def invoke_reminder(self, actor_type_name: str, actor_id: str, reminder_name: str, params: bytes | str) -> None:
        self._manager(actor_type_name).invoke_reminder(actor_id, reminder_name, params)

    def invoke_timer(self, actor_type_name: str, actor_id: str, timer_name: str, params: bytes | str) -> None:
        self._manager(actor_type_name).invoke_timer(actor_id, timer_name, params)


_instance: ActorRuntime | None = None
_instance_lock = threading.Lock()


def get_actor_runtime_instance() -> ActorRuntime:
    """Return the process-wide runtime, creating it on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = ActorRuntime()
        return _instance