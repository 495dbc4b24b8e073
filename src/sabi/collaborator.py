""" Boundary between the interpreter and whatever presents the story

Collaborators are the UI, audio, background and actor controllers. They
subscribe to command types on the CommandBus, and report back through the
interpreter (e.g. `release()` once an animation or a line of text is done).

bus.subscribe(TextBox())
interpreter = Interpreter(library, bus)
bus.subscribe(Jukebox())
interpreter.start(ScriptId("chapter1", "act1"))
"""

from __future__ import annotations

import collections
import logging
from typing import TYPE_CHECKING, Optional, Union
from collections.abc import Collection

from sabi import util
from sabi.commands import Command, SceneChange, ActChange, SabiState

if TYPE_CHECKING:
    from sabi.interpreter import Interpreter

ChangeRequest = Union[SceneChange, ActChange]


class Collaborator:
    handles:Collection[type[Command]] = ()

    def __init__(self) -> None:
        self.interpreter:Interpreter = None # type: ignore[assignment]

    def initialize(self, interpreter:Interpreter) -> None:
        self.interpreter = interpreter

    def is_ready(self) -> bool:
        """ whether this collaborator can take commands yet

        a run doesn't start until every subscribed collaborator is ready. """
        return True

    def state_changed(self, state:SabiState) -> None:
        pass

    def handle(self, command:Command) -> None:
        pass


class CommandBus:
    """ Routes commands to subscribed collaborators, synchronously.

    Scene and act change requests are also queued so the interpreter can
    apply them after the current step. """

    def __init__(self) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.collaborators:list[Collaborator] = []
        self.subscriptions:dict[type[Command], list[Collaborator]] = collections.defaultdict(list)
        self.pending_changes:collections.deque[ChangeRequest] = collections.deque()
        self.interpreter:Optional[Interpreter] = None

    def subscribe(self, collaborator:Collaborator) -> None:
        if collaborator in self.collaborators:
            raise ValueError(f'{util.fullname(collaborator)} already subscribed')
        self.collaborators.append(collaborator)
        for command_type in collaborator.handles:
            self.subscriptions[command_type].append(collaborator)
        if self.interpreter is not None:
            collaborator.initialize(self.interpreter)

    def initialize(self, interpreter:Interpreter) -> None:
        self.interpreter = interpreter
        for collaborator in self.collaborators:
            collaborator.initialize(interpreter)

    def all_ready(self) -> bool:
        return all(c.is_ready() for c in self.collaborators)

    def state_changed(self, state:SabiState) -> None:
        for collaborator in self.collaborators:
            collaborator.state_changed(state)

    def emit(self, command:Command) -> None:
        if isinstance(command, (SceneChange, ActChange)):
            self.pending_changes.append(command)

        subscribers = self.subscriptions.get(type(command), [])
        self.logger.debug(f'emitting {command} to {len(subscribers)} collaborators')
        for collaborator in subscribers:
            collaborator.handle(command)

    def take_changes(self) -> list[ChangeRequest]:
        changes = list(self.pending_changes)
        self.pending_changes.clear()
        return changes

    def clear(self) -> None:
        self.pending_changes.clear()
