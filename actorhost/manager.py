"""Hosting of actor instances of one type: activation, method dispatch, reminders and timers."""

from __future__ import annotations

import logging
import threading
import types
from dataclasses import dataclass
from typing import Any, Callable

from actorhost.actor import ActorServer, ReminderCallee
from actorhost.api import ActorReminderParams, ActorTimerParam
from actorhost.codec import Codec, get_actor_codec
from actorhost.errors import ActorError, ActorErrorCode
from actorhost.state import ActorStateClient, ActorStateManager, StateAsyncProvider

logger = logging.getLogger(__name__)

ActorFactory = Callable[[], ActorServer]

# Names that belong to the hosting machinery rather than to the actor's callable API.
_RESERVED_NAMES = frozenset(name for name in dir(ActorServer) if not name.startswith("_")) | {"reminder_call"}

_CO_VARARGS = 0x04
_MISSING = object()


@dataclass
class MethodType:
    """Description of an actor method that can be invoked remotely."""

    name: str
    function: Callable[..., Any]
    takes_arg: bool
    has_reply: bool


def _static_lookup(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        namespace = vars(klass)
        if name in namespace:
            return namespace[name]
    return None


def _describe(name: str, method: Callable[..., Any]) -> MethodType:
    if isinstance(method, types.MethodType):
        function, skipped = method.__func__, 1
    elif isinstance(method, types.FunctionType):
        function, skipped = method, 0
    else:
        raise TypeError("not a plain function")
    if not isinstance(function, types.FunctionType):
        raise TypeError("not a plain function")

    code = function.__code__
    positional_count = max(0, code.co_argcount - skipped)
    default_count = len(function.__defaults__ or ())
    required = max(0, code.co_argcount - default_count - skipped)
    has_varargs = bool(code.co_flags & _CO_VARARGS)

    keyword_only = code.co_varnames[code.co_argcount:code.co_argcount + code.co_kwonlyargcount]
    keyword_defaults = function.__kwdefaults__ or {}
    for keyword in keyword_only:
        if keyword not in keyword_defaults:
            raise TypeError(f"required keyword-only argument {keyword!r}")

    if required > 1:
        raise TypeError("method takes more than one argument")

    annotation = function.__annotations__.get("return", _MISSING)
    has_reply = annotation not in (None, "None", type(None))
    return MethodType(
        name=name,
        function=method,
        takes_arg=positional_count > 0 or has_varargs,
        has_reply=has_reply,
    )


def suitable_methods(actor: ActorServer) -> dict[str, MethodType]:
    """Collect the public methods of an actor that can be invoked by name."""
    methods: dict[str, MethodType] = {}
    actor_class = type(actor)
    for name in dir(actor_class):
        if name.startswith("_") or name in _RESERVED_NAMES:
            continue
        if isinstance(_static_lookup(actor_class, name), property):
            continue
        method = getattr(actor, name)
        if not callable(method):
            continue
        try:
            methods[name] = _describe(name, method)
        except TypeError as exc:
            logger.warning("method %s is illegal, err = %s, just skip it", name, exc)
    return methods


class ActorContainer:
    """One activated actor instance together with its invocable methods."""

    def __init__(
        self,
        actor_id: str,
        impl: ActorServer,
        serializer: Codec,
        state_client: ActorStateClient | None = None,
    ) -> None:
        impl.set_id(actor_id)
        impl.set_state_manager(
            ActorStateManager(impl.actor_type(), actor_id, StateAsyncProvider(state_client))
        )
        try:
            impl.save_state()
        except Exception as exc:
            raise ActorError(ActorErrorCode.ERR_SAVE_STATE_FAILED, f"save state failed: {exc}") from exc

        type_name = type(impl).__name__
        if not type_name[:1].isupper():
            logger.warning("failed to get method map from registered provider: type %s is not exported", type_name)
            raise ActorError(ActorErrorCode.ERR_ACTOR_SERVER_INVALID, f"type {type_name} is not exported")

        self.actor = impl
        self.serializer = serializer
        self.method_types = suitable_methods(impl)

    def invoke(self, method_name: str, param: bytes | None) -> Any:
        """Call a method by name, decoding its argument from param, and return its result."""
        try:
            method = self.method_types[method_name]
        except KeyError:
            raise ActorError(
                ActorErrorCode.ERR_ACTOR_METHOD_NO_FOUND, f"no actor method named {method_name}"
            ) from None

        args = []
        if method.takes_arg:
            try:
                args.append(self.serializer.unmarshal(param if param is not None else b""))
            except (ValueError, TypeError) as exc:
                raise ActorError(
                    ActorErrorCode.ERR_ACTOR_METHOD_SERIALIZE_FAILED, f"cannot decode argument: {exc}"
                ) from exc

        try:
            return method.function(*args)
        except Exception as exc:
            raise ActorError(
                ActorErrorCode.ERR_ACTOR_INVOKE_FAILED, f"method {method_name} failed: {exc}"
            ) from exc


class ActorManager:
    """Manages the active instances of one actor type."""

    def __init__(self, serializer_type: str, state_client: ActorStateClient | None = None) -> None:
        try:
            self.serializer = get_actor_codec(serializer_type)
        except LookupError as exc:
            raise ActorError(ActorErrorCode.ERR_ACTOR_SERIALIZE_NO_FOUND, str(exc)) from exc
        self.state_client = state_client
        self.factory: ActorFactory | None = None
        self._active: dict[str, ActorContainer] = {}
        self._lock = threading.Lock()

    def register_actor_impl_factory(self, factory: ActorFactory) -> None:
        self.factory = factory

    def _require_factory(self) -> ActorFactory:
        if self.factory is None:
            raise ActorError(ActorErrorCode.ERR_ACTOR_FACTORY_NOT_SET)
        return self.factory

    def _container(self, actor_id: str) -> ActorContainer:
        factory = self._require_factory()
        with self._lock:
            container = self._active.get(actor_id)
            if container is None:
                container = ActorContainer(actor_id, factory(), self.serializer, self.state_client)
                self._active[actor_id] = container
            return container

    def invoke_method(self, actor_id: str, method_name: str, request: bytes | None) -> bytes | None:
        """Invoke a method on an actor, activating it if needed, and return the encoded reply."""
        self._require_factory()
        container = self._container(actor_id)
        reply = container.invoke(method_name, request)
        if not container.method_types[method_name].has_reply:
            return None
        try:
            data = self.serializer.marshal(reply)
        except (ValueError, TypeError) as exc:
            raise ActorError(
                ActorErrorCode.ERR_ACTOR_METHOD_SERIALIZE_FAILED, f"cannot encode reply: {exc}"
            ) from exc
        try:
            container.actor.save_state()
        except Exception as exc:
            raise ActorError(ActorErrorCode.ERR_SAVE_STATE_FAILED, f"save state failed: {exc}") from exc
        return data

    def deactivate_actor(self, actor_id: str) -> None:
        with self._lock:
            if self._active.pop(actor_id, None) is None:
                raise ActorError(ActorErrorCode.ERR_ACTOR_ID_NOT_FOUND, f"no active actor {actor_id}")

    def invoke_reminder(self, actor_id: str, reminder_name: str, params: bytes | str) -> None:
        self._require_factory()
        try:
            reminder = ActorReminderParams.from_json(params)
        except ValueError as exc:
            logger.warning("failed to unmarshal reminder param, err: %s", exc)
            raise ActorError(ActorErrorCode.ERR_REMINDERS_PARAMS_INVALID, str(exc)) from exc
        container = self._container(actor_id)
        target = container.actor
        if not isinstance(target, ReminderCallee):
            raise ActorError(ActorErrorCode.ERR_REMINDER_FUNC_UNDEFINED)
        target.reminder_call(reminder_name, reminder.data, reminder.due_time, reminder.period)

    def invoke_timer(self, actor_id: str, timer_name: str, params: bytes | str) -> None:
        self._require_factory()
        try:
            timer = ActorTimerParam.from_json(params)
        except ValueError as exc:
            logger.warning("failed to unmarshal timer param, err: %s", exc)
            raise ActorError(ActorErrorCode.ERR_TIMER_PARAMS_INVALID, str(exc)) from exc
        container = self._container(actor_id)
        try:
            container.invoke(timer.callback, timer.data)
        except ActorError as exc:
            if exc.code is not ActorErrorCode.ERR_ACTOR_INVOKE_FAILED:
                raise
            logger.warning("timer %s callback %s failed: %s", timer_name, timer.callback, exc)