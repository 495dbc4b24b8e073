""" Commands emitted to collaborators

Commands only carry evaluated primitives and operation values, never
expressions, so a collaborator never needs to know about the AST.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from sabi import operations


class SabiState(enum.Enum):
    IDLE = enum.auto()
    WAITING_FOR_COLLABORATORS = enum.auto()
    RUNNING = enum.auto()


class Command:
    pass


@dataclass(frozen=True)
class CharacterSay(Command):
    name: str
    text: str


@dataclass(frozen=True)
class InfoText(Command):
    text: str


@dataclass(frozen=True)
class BackgroundChange(Command):
    operation: operations.BackgroundOperation


@dataclass(frozen=True)
class UiChange(Command):
    target: operations.UiChangeTarget
    value: str
    image_mode: Optional[operations.UiImageMode] = None


@dataclass(frozen=True)
class SceneChange(Command):
    scene_id: str


@dataclass(frozen=True)
class ActChange(Command):
    act_id: str


@dataclass(frozen=True)
class ActorChange(Command):
    actor_type: operations.ActorType
    name: str
    operation: operations.ActorOperation

    @property
    def is_blocking(self) -> bool:
        return operations.is_blocking(self.operation)


@dataclass(frozen=True)
class AudioChange(Command):
    command: operations.AudioCommand
    category: str
    track: Optional[str]
    volume: float


@dataclass(frozen=True)
class ScriptEnd(Command):
    pass
