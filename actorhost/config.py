"""Actor registration options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from actorhost.codec import DEFAULT_SERIALIZER_TYPE


@dataclass
class ActorConfig:
    """Settings applied when an actor type is registered."""

    serializer_type: str = DEFAULT_SERIALIZER_TYPE


Option = Callable[[ActorConfig], None]


def with_serializer_name(serializer_type: str) -> Option:
    """Option that selects the serializer by name."""

    def apply(config: ActorConfig) -> None:
        config.serializer_type = serializer_type

    return apply


def get_config_from_options(*args: Option) -> ActorConfig:
    """Build a config from defaults and the given options, applied in order."""
    config = ActorConfig()
    for option in args:
        option(config)
    return config