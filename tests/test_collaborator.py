import pytest

from sabi import commands, util
from sabi.commands import SabiState
from sabi.collaborator import Collaborator, CommandBus
from . import RecordingCollaborator

class TextOnly(RecordingCollaborator):
    handles = (commands.CharacterSay,)

def test_routing():
    bus = CommandBus()
    everything = RecordingCollaborator()
    text_only = TextOnly()
    bus.subscribe(everything)
    bus.subscribe(text_only)

    bus.emit(commands.CharacterSay("alice", "hi"))
    bus.emit(commands.InfoText("quiet"))

    assert everything.commands == [commands.CharacterSay("alice", "hi"), commands.InfoText("quiet")]
    assert text_only.commands == [commands.CharacterSay("alice", "hi")]

def test_change_requests_queue():
    bus = CommandBus()
    bus.emit(commands.SceneChange("b"))
    bus.emit(commands.CharacterSay("alice", "hi"))
    bus.emit(commands.ActChange("act2"))

    assert bus.take_changes() == [commands.SceneChange("b"), commands.ActChange("act2")]
    assert bus.take_changes() == []

def test_readiness_and_state():
    bus = CommandBus()
    a = RecordingCollaborator()
    b = RecordingCollaborator()
    bus.subscribe(a)
    bus.subscribe(b)

    assert bus.all_ready()
    b.ready = False
    assert not bus.all_ready()

    bus.state_changed(SabiState.RUNNING)
    assert a.states == [SabiState.RUNNING]
    assert b.states == [SabiState.RUNNING]

def test_subscribe_twice():
    bus = CommandBus()
    collaborator = Collaborator()
    bus.subscribe(collaborator)
    with pytest.raises(ValueError):
        bus.subscribe(collaborator)

def test_fullname():
    assert util.fullname(CommandBus) == "sabi.collaborator.CommandBus"
    assert util.fullname(CommandBus()) == "sabi.collaborator.CommandBus"
