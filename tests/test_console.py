import io

from sabi.collaborator import CommandBus
from sabi.console import ConsoleCollaborator, play
from sabi.interpreter import Interpreter
from sabi.loader import ScriptId
from . import single_act

def test_play_auto(library):
    out = io.StringIO()
    bus = CommandBus()
    console = ConsoleCollaborator(out)
    bus.subscribe(console)
    interpreter = Interpreter(library, bus, log_sink=lambda line: None)

    play(interpreter, console, ScriptId("chapter1", "act1"))

    lines = out.getvalue().splitlines()
    assert "alice: Hello" in lines
    assert "A breeze." in lines
    assert "carol: Hi." in lines
    assert lines[-1] == "[ end ]"
    assert console.finished

def test_play_interactive(library, monkeypatch):
    out = io.StringIO()
    bus = CommandBus()
    console = ConsoleCollaborator(out, auto_release=False)
    bus.subscribe(console)
    interpreter = Interpreter(library, bus, log_sink=lambda line: None)

    # advance, advance, go back, show history, quit
    inputs = iter(["", "", "b", "h", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    play(interpreter, console, ScriptId("chapter1", "act1"), interactive=True)

    output = out.getvalue()
    # back from the info text to the line before it, then the transcript
    assert output.count("alice: How are you?") == 3
    assert "Act: act1\nScene: intro\nalice: Hello\nalice: How are you?\n" in output
    assert not console.finished

def test_play_player_name():
    out = io.StringIO()
    bus = CommandBus()
    console = ConsoleCollaborator(out)
    bus.subscribe(console)
    library = single_act('scene a\n"[_PLAYERNAME_]": "Hello?"')
    interpreter = Interpreter(library, bus, player_name="Sam")

    play(interpreter, console, ScriptId("chapter1", "act1"))

    assert out.getvalue().splitlines() == ["Sam: Hello?", "[ end ]"]
