"""Wire payloads exchanged with the actor sidecar."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any


def _load_object(data: bytes | str) -> dict[str, Any]:
    try:
        obj = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"invalid JSON payload: {exc}") from exc
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def _lookup(obj: dict[str, Any], key: str) -> Any:
    if key in obj:
        return obj[key]
    folded = key.casefold()
    return next((value for name, value in obj.items() if name.casefold() == folded), None)


def _string(obj: dict[str, Any], key: str) -> str:
    value = _lookup(obj, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _bytes(obj: dict[str, Any], key: str) -> bytes | None:
    value = _lookup(obj, key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"field {key!r} is not valid base64: {exc}") from exc


def _encode_bytes(data: bytes | None) -> str | None:
    return None if data is None else base64.b64encode(data).decode("ascii")


def _dump(obj: dict[str, Any]) -> bytes:
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


@dataclass
class ActorReminderParams:
    """Parameters delivered with a reminder call."""

    data: bytes | None = None
    due_time: str = ""
    period: str = ""
    ttl: str = ""

    @classmethod
    def from_json(cls, data: bytes | str) -> ActorReminderParams:
        obj = _load_object(data)
        return cls(
            data=_bytes(obj, "data"),
            due_time=_string(obj, "dueTime"),
            period=_string(obj, "period"),
            ttl=_string(obj, "ttl"),
        )

    def to_json(self) -> bytes:
        return _dump(
            {
                "data": _encode_bytes(self.data),
                "dueTime": self.due_time,
                "period": self.period,
                "ttl": self.ttl,
            }
        )


@dataclass
class ActorTimerParam:
    """Parameters delivered with a timer call."""

    callback: str = ""
    data: bytes | None = None
    due_time: str = ""
    period: str = ""
    ttl: str = ""

    @classmethod
    def from_json(cls, data: bytes | str) -> ActorTimerParam:
        obj = _load_object(data)
        return cls(
            callback=_string(obj, "callback"),
            data=_bytes(obj, "data"),
            due_time=_string(obj, "dueTime"),
            period=_string(obj, "period"),
            ttl=_string(obj, "ttl"),
        )

    def to_json(self) -> bytes:
        return _dump(
            {
                "callback": self.callback,
                "data": _encode_bytes(self.data),
                "dueTime": self.due_time,
                "period": self.period,
                "ttl": self.ttl,
            }
        )


@dataclass
class ActorRuntimeConfig:
    """Configuration the host reports to the sidecar."""

    registered_actor_types: list[str] = field(default_factory=list)
    actor_idle_timeout: str = ""
    actor_scan_interval: str = ""
    drain_ongoing_call_timeout: str = ""
    drain_rebalanced_actors: bool = False

    def to_json(self) -> bytes:
        return _dump(
            {
                "entities": list(self.registered_actor_types),
                "actorIdleTimeout": self.actor_idle_timeout,
                "actorScanInterval": self.actor_scan_interval,
                "drainOngoingCallTimeout": self.drain_ongoing_call_timeout,
                "drainRebalancedActors": self.drain_rebalanced_actors,
            }
        )