import pytest

from actorhost.actor import ActorServer, ReminderCallee, StateManager


class _CountingStateManager(StateManager):
    def __init__(self):
        self.saves = 0

    def add(self, state_name, value):
        pass

    def get(self, state_name):
        return None

    def set(self, state_name, value):
        pass

    def remove(self, state_name):
        pass

    def contains(self, state_name):
        return False

    def save(self):
        self.saves += 1

    def flush(self):
        pass


class _FailingStateManager(_CountingStateManager):
    def save(self):
        raise RuntimeError("store down")


class _Actor(ActorServer):
    def actor_type(self):
        return "testActorType"


class _RemindedActor(_Actor):
    def __init__(self):
        self.calls = []

    def reminder_call(self, reminder_name, state, due_time, period):
        self.calls.append((reminder_name, state, due_time, period))


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        ActorServer()


def test_id_is_set_only_once():
    actor = _Actor()
    assert actor.id == ""
    ActorServer.set_id(actor, "mockActorID")
    ActorServer.set_id(actor, "other")
    assert actor.id == "mockActorID"


def test_ids_are_per_instance():
    first, second = _Actor(), _Actor()
    ActorServer.set_id(first, "a")
    ActorServer.set_id(second, "b")
    assert (first.id, second.id) == ("a", "b")


def test_save_state_delegates_to_manager():
    actor = _Actor()
    manager = _CountingStateManager()
    ActorServer.set_state_manager(actor, manager)
    ActorServer.save_state(actor)
    ActorServer.save_state(actor)
    assert actor.state_manager is manager
    assert manager.saves == 2


def test_save_state_without_manager_does_nothing():
    actor = _Actor()
    ActorServer.save_state(actor)
    assert actor.state_manager is None


def test_save_state_propagates_failure():
    actor = _Actor()
    ActorServer.set_state_manager(actor, _FailingStateManager())
    with pytest.raises(RuntimeError):
        ActorServer.save_state(actor)


def test_reminder_callee_detection():
    reminded = _RemindedActor()
    assert isinstance(reminded, ReminderCallee)
    assert not isinstance(_Actor(), ReminderCallee)
    ActorServer.set_id(reminded, "reminded")
    assert reminded.id == "reminded"
    reminded.reminder_call("r", b"hello", "5s", "6s")
    assert reminded.calls == [("r", b"hello", "5s", "6s")]