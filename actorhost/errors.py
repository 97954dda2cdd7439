"""Error codes reported by the actor host."""

from __future__ import annotations

from enum import IntEnum


class ActorErrorCode(IntEnum):
    """Outcome codes of actor operations."""

    SUCCESS = 0
    ERR_ACTOR_TYPE_NOT_FOUND = 1
    ERR_REMINDERS_PARAMS_INVALID = 2
    ERR_ACTOR_METHOD_NO_FOUND = 3
    ERR_ACTOR_INVOKE_FAILED = 4
    ERR_REMINDER_FUNC_UNDEFINED = 5
    ERR_ACTOR_METHOD_SERIALIZE_FAILED = 6
    ERR_ACTOR_SERIALIZE_NO_FOUND = 7
    ERR_ACTOR_ID_NOT_FOUND = 8
    ERR_ACTOR_FACTORY_NOT_SET = 9
    ERR_TIMER_PARAMS_INVALID = 10
    ERR_SAVE_STATE_FAILED = 11
    ERR_ACTOR_SERVER_INVALID = 12


class ActorError(Exception):
    """Raised when an actor operation fails; carries an ActorErrorCode."""

    def __init__(self, code: ActorErrorCode | int, message: str | None = None) -> None:
        code = ActorErrorCode(code)
        if code is ActorErrorCode.SUCCESS:
            raise ValueError("an ActorError cannot carry the SUCCESS code")
        self.code = code
        self.message = message or code.name.lower().replace("_", " ")
        super().__init__(f"{code.name}: {self.message}")