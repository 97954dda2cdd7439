import json

import pytest

from actorhost.api import ActorReminderParams, ActorRuntimeConfig, ActorTimerParam


def test_reminder_round_trip():
    params = ActorReminderParams(data=b"hello", due_time="5s", period="6s", ttl="1m")
    assert ActorReminderParams.from_json(params.to_json()) == params


def test_reminder_data_is_base64_on_the_wire():
    params = ActorReminderParams(data=b"hello", due_time="5s", period="6s")
    decoded = json.loads(params.to_json())
    assert decoded["data"] == "aGVsbG8="
    assert decoded["dueTime"] == "5s"
    assert decoded["period"] == "6s"


def test_reminder_rejects_non_object():
    with pytest.raises(ValueError):
        ActorReminderParams.from_json(b'"hello"')


def test_reminder_rejects_bad_base64():
    with pytest.raises(ValueError):
        ActorReminderParams.from_json(b'{"data": "***"}')


def test_reminder_missing_fields_take_defaults():
    params = ActorReminderParams.from_json(b'{"period": "6s"}')
    assert params == ActorReminderParams(period="6s")


def test_timer_round_trip():
    param = ActorTimerParam(callback="Invoke", data=b'"hello"', due_time="5s", period="6s")
    assert ActorTimerParam.from_json(param.to_json()) == param


def test_timer_keys_on_the_wire():
    decoded = json.loads(ActorTimerParam(callback="Invoke").to_json())
    assert set(decoded) == {"callback", "data", "dueTime", "period", "ttl"}
    assert decoded["callback"] == "Invoke"
    assert decoded["data"] is None


def test_timer_field_names_match_case_insensitively():
    param = ActorTimerParam.from_json('{"CallBack": "Invoke", "DUETIME": "5s"}')
    assert param.callback == "Invoke"
    assert param.due_time == "5s"


def test_timer_rejects_wrong_field_type():
    with pytest.raises(ValueError):
        ActorTimerParam.from_json(b'{"callback": 3}')


def test_timer_rejects_invalid_json():
    with pytest.raises(ValueError):
        ActorTimerParam.from_json(b"{not json")


def test_runtime_config_serialisation():
    config = ActorRuntimeConfig(registered_actor_types=["testActorType"], drain_rebalanced_actors=True)
    decoded = json.loads(config.to_json())
    assert decoded["entities"] == ["testActorType"]
    assert decoded["drainRebalancedActors"] is True
    assert set(decoded) == {
        "entities",
        "actorIdleTimeout",
        "actorScanInterval",
        "drainOngoingCallTimeout",
        "drainRebalancedActors",
    }