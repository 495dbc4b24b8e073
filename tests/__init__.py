import logging
from typing import Optional, TypeVar

from sabi import commands, util
from sabi.commands import SabiState
from sabi.collaborator import Collaborator
from sabi.interpreter import Interpreter
from sabi.loader import ScriptId, ScriptLibrary

INTRO = """
scene intro
[background change "park"]
alice:happy: "Hello", "How are you?"
narrator: "A breeze."
bob: "Fine" + " thanks", 2 + 3
log "visited", 1 + 1
[scene "outro"]

// second scene
scene outro
[character alice moves right]
alice: "Bye."
[act "act2"]
"""

ACT2 = """
scene start
narrator: "Later."
carol: "Hi."
"""

def library_from(scripts:dict[ScriptId, str]) -> ScriptLibrary:
    library = ScriptLibrary()
    for script_id, source in scripts.items():
        library.load_source(source, script_id)
    return library

def single_act(source:str) -> ScriptLibrary:
    return library_from({ScriptId("chapter1", "act1"): source})

T = TypeVar("T", bound=commands.Command)

class RecordingCollaborator(Collaborator):
    """ Subscribes to every command and keeps them for inspection. """

    handles = (
        commands.CharacterSay,
        commands.InfoText,
        commands.BackgroundChange,
        commands.UiChange,
        commands.SceneChange,
        commands.ActChange,
        commands.ActorChange,
        commands.AudioChange,
        commands.ScriptEnd,
    )

    def __init__(self, auto_release:bool=False) -> None:
        super().__init__()
        self.logger = logging.getLogger(util.fullname(self))
        self.auto_release = auto_release
        self.ready = True
        self.commands:list[commands.Command] = []
        self.states:list[SabiState] = []

    def is_ready(self) -> bool:
        return self.ready

    def state_changed(self, state:SabiState) -> None:
        self.states.append(state)

    def handle(self, command:commands.Command) -> None:
        self.logger.debug(f'got {command}')
        self.commands.append(command)
        if self.auto_release:
            self.interpreter.release()

    def of_type(self, command_type:type[T]) -> list[T]:
        return [c for c in self.commands if isinstance(c, command_type)]

    def clear(self) -> None:
        self.commands.clear()

def advance(interpreter:Interpreter, max_ticks:int=100) -> None:
    """ releases the current block and ticks until the next one (or the end) """
    interpreter.release()
    for _ in range(max_ticks):
        interpreter.tick()
        if interpreter.state == SabiState.IDLE:
            return
        if interpreter.run is not None and interpreter.run.blocking:
            return
    raise AssertionError(f'still running after {max_ticks} ticks')

def run_to_end(interpreter:Interpreter, max_ticks:int=1000) -> None:
    for _ in range(max_ticks):
        interpreter.tick()
        if interpreter.state == SabiState.IDLE:
            return
    raise AssertionError(f'still running after {max_ticks} ticks')
