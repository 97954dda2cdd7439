import pytest

from actorhost.errors import ActorError, ActorErrorCode


def test_codes_keep_their_numbers():
    assert ActorErrorCode(0) is ActorErrorCode.SUCCESS
    assert ActorErrorCode(7) is ActorErrorCode.ERR_ACTOR_SERIALIZE_NO_FOUND
    assert ActorErrorCode(11) is ActorErrorCode.ERR_SAVE_STATE_FAILED


def test_codes_are_unique_and_contiguous():
    names = [ActorErrorCode(number).name for number in range(13)]
    assert names[1] == "ERR_ACTOR_TYPE_NOT_FOUND"
    assert names[12] == "ERR_ACTOR_SERVER_INVALID"
    assert len(set(names)) == 13


def test_error_carries_code():
    err = ActorError(ActorErrorCode.ERR_ACTOR_ID_NOT_FOUND)
    assert err.code is ActorErrorCode.ERR_ACTOR_ID_NOT_FOUND
    assert "ERR_ACTOR_ID_NOT_FOUND" in str(err)


def test_error_accepts_plain_int():
    err = ActorError(9, "factory missing")
    assert err.code is ActorErrorCode.ERR_ACTOR_FACTORY_NOT_SET
    assert err.message == "factory missing"


def test_success_is_not_an_error():
    with pytest.raises(ValueError):
        ActorError(ActorErrorCode.SUCCESS)


def test_unknown_code_rejected():
    with pytest.raises(ValueError):
        ActorError(200)