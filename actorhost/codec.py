"""Serializers used for actor payloads and state, with a name registry."""

from __future__ import annotations

import base64
import json
from abc import ABC, abstractmethod
from typing import Any, Callable

import yaml

DEFAULT_SERIALIZER_TYPE = "json"
YAML_SERIALIZER_TYPE = "yaml"


class Codec(ABC):
    """Turns values into bytes and back."""

    @abstractmethod
    def marshal(self, value: Any) -> bytes:
        """Serialize a value; raise ValueError if it cannot be encoded."""

    @abstractmethod
    def unmarshal(self, data: bytes) -> Any:
        """Deserialize bytes; raise ValueError if they are malformed."""


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


class JSONCodec(Codec):
    """JSON codec; bytes are encoded as base64 strings."""

    def marshal(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"json marshal failed: {exc}") from exc
        return text.encode("utf-8")

    def unmarshal(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"json unmarshal failed: {exc}") from exc


class YamlCodec(Codec):
    """YAML codec."""

    def marshal(self, value: Any) -> bytes:
        try:
            text = yaml.safe_dump(value, allow_unicode=True, sort_keys=False)
        except yaml.YAMLError as exc:
            raise ValueError(f"yaml marshal failed: {exc}") from exc
        return text.encode("utf-8")

    def unmarshal(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise ValueError(f"yaml unmarshal failed: {exc}") from exc


_codec_factories: dict[str, Callable[[], Codec]] = {}


def set_actor_codec(name: str, factory: Callable[[], Codec]) -> None:
    """Register a codec factory under a name, replacing any earlier one."""
    _codec_factories[name] = factory


def get_actor_codec(name: str) -> Codec:
    """Create a codec by its registered name."""
    try:
        factory = _codec_factories[name]
    except KeyError:
        raise LookupError(f"no actor codec implement named {name}") from None
    return factory()


set_actor_codec(DEFAULT_SERIALIZER_TYPE, JSONCodec)
set_actor_codec(YAML_SERIALIZER_TYPE, YamlCodec)