# actorhost

`actorhost` hosts virtual actors inside a Python process. It keeps track of
the actor types you register, creates actor instances on demand, dispatches
method calls, reminders and timers to them, and tracks actor state changes so
they can be written to a state store in a single transaction.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Defining an actor

An actor is a subclass of `actorhost.actor.ActorServer` that implements
`actor_type()` and adds public methods. The class name must start with an
upper-case letter, otherwise activation fails with
`ERR_ACTOR_SERVER_INVALID`.

A public method can be invoked by name when it needs at most one positional
argument and has no required keyword-only arguments. Properties and the
names of the base class (`actor_type`, `id`, `set_id`, `set_state_manager`,
`state_manager`, `save_state`) and `reminder_call` are never invoked this way.
The request payload is decoded with the actor type's codec and passed as the
single argument. A method whose return annotation is `None` produces no
reply; any other method's return value is encoded with the codec.

```python
from actorhost.actor import ActorServer


class CounterActor(ActorServer):
    def actor_type(self):
        return "counter"

    def increment(self, amount: int) -> int:
        self.state_manager.set("count", amount)
        return amount

    def reminder_call(self, reminder_name, state, due_time, period):
        print("reminder", reminder_name, state, due_time, period)
```

An actor receives reminders if it defines
`reminder_call(reminder_name, state, due_time, period)` (the
`ReminderCallee` protocol); otherwise a reminder fails with
`ERR_REMINDER_FUNC_UNDEFINED`.

## Hosting actors

Actor state goes through a state client you supply: any object with
`get_actor_state(actor_type, actor_id, key_name)` and
`save_state_transactionally(actor_type, actor_id, operations)` (the
`actorhost.state.ActorStateClient` protocol). A small in-memory one:

```python
class MemoryStore:
    def __init__(self):
        self.data = {}

    def get_actor_state(self, actor_type, actor_id, key_name):
        return self.data.get((actor_type, actor_id, key_name))

    def save_state_transactionally(self, actor_type, actor_id, operations):
        for op in operations:
            key = (actor_type, actor_id, op.key)
            if op.operation_type == "upsert":
                self.data[key] = op.value
            else:
                self.data.pop(key, None)
```

```python
from actorhost.api import ActorReminderParams, ActorTimerParam
from actorhost.config import with_serializer_name
from actorhost.runtime import ActorRuntime

runtime = ActorRuntime(state_client=MemoryStore())
runtime.register_actor_factory(CounterActor)                          # JSON (default)
# runtime.register_actor_factory(OtherActor, with_serializer_name("yaml"))

print(runtime.get_json_serialized_config())
# b'{"entities":["counter"],"actorIdleTimeout":"",...}'

reply = runtime.invoke_actor_method("counter", "actor-1", "increment", b"5")  # b"5"

reminder = ActorReminderParams(data=b"hello", due_time="5s", period="6s").to_json()
runtime.invoke_reminder("counter", "actor-1", "daily", reminder)

timer = ActorTimerParam(callback="increment", data=b"7", due_time="5s", period="6s").to_json()
runtime.invoke_timer("counter", "actor-1", "tick", timer)

runtime.deactivate("counter", "actor-1")
```

`get_actor_runtime_instance()` returns a process-wide `ActorRuntime`
created without a state client.

A factory is any callable returning an `ActorServer`; registering calls it
once to learn the actor type, which is then appended to the reported
configuration. Registering the same type again replaces the factory of its
existing manager. If the named serializer is unknown, the registration is
logged and no manager is created.

Each invocation activates the actor on first use: the id is set, an
`ActorStateManager` is attached and its state saved. After a method that
returns a reply, the actor's state is saved again. A timer invokes the method
named by `callback` with the timer's `data` as payload; if the method itself
raises, the failure is logged rather than raised.

## Errors

Failures raise `actorhost.errors.ActorError`, whose `code` is an
`ActorErrorCode` member, for example `ERR_ACTOR_TYPE_NOT_FOUND`,
`ERR_ACTOR_METHOD_NO_FOUND`, `ERR_ACTOR_FACTORY_NOT_SET`,
`ERR_ACTOR_METHOD_SERIALIZE_FAILED`, `ERR_ACTOR_INVOKE_FAILED`,
`ERR_REMINDERS_PARAMS_INVALID`, `ERR_TIMER_PARAMS_INVALID`,
`ERR_ACTOR_ID_NOT_FOUND` or `ERR_SAVE_STATE_FAILED`.

## Reminder, timer and runtime payloads

`ActorReminderParams` (`data`, `dueTime`, `period`, `ttl`) and
`ActorTimerParam` (also `callback`) read and write the JSON bodies of
reminders and timers with `from_json` and `to_json`; `data` is carried as a
base64 string. Field names are matched case-insensitively when reading.
`ActorRuntimeConfig.to_json()` writes `entities`, `actorIdleTimeout`,
`actorScanInterval`, `drainOngoingCallTimeout` and `drainRebalancedActors`.

## Codecs

`actorhost.codec.get_actor_codec(name)` returns a fresh codec registered
under `name`, or raises `LookupError`. `json` (`JSONCodec`, with bytes
written as base64) and `yaml` (`YamlCodec`) are registered by default.
Register your own with `set_actor_codec(name, factory)`, where the factory
returns a `Codec` with `marshal(value) -> bytes` and `unmarshal(data)`;
both raise `ValueError` on bad input.

Options for a registration are built with
`actorhost.config.get_config_from_options(*options)`; the one option is
`with_serializer_name(name)`.

## Actor state

Each active actor's `state_manager` is an `ActorStateManager` offering `add`,
`get`, `set`, `remove` and `contains`. Changes stay in memory until `save()`,
which sends them through a `StateAsyncProvider` as one transaction of
`ActorStateOperation` records (`upsert` or `delete`), then `flush()` marks the
cache clean. Values are stored with the JSON codec. Reads of states not in
the cache go to the state client.

## What this package does not do

It contains no client for a sidecar and no HTTP or gRPC server: nothing here
receives calls over the network or talks to a state store on its own. You
route incoming calls to `ActorRuntime` yourself and supply the state client.