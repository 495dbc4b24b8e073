""" Domain AST for sabi scripts

An Act owns its Scenes by id. Scenes hold an ordered list of Statements.
Statements come in three kinds (text items, stage commands and code) and the
kind tag is what rewind uses to skip around the statement list.
"""

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Any

from sabi import operations
from sabi.errors import DuplicateSceneError
from sabi.compiler.expr import Expr


# speaker replaced by the player's name when a line is shown
PLAYER_NAME = "[_PLAYERNAME_]"


class StatementKind(enum.IntEnum):
    TEXT_ITEM = 1
    STAGE = 2
    CODE = 3


@dataclass(frozen=True)
class Statement:
    kind: ClassVar[StatementKind]


# text items

@dataclass(frozen=True)
class TextItem(Statement):
    kind: ClassVar[StatementKind] = StatementKind.TEXT_ITEM


@dataclass(frozen=True)
class Dialogue(TextItem):
    character: str
    text: Expr


@dataclass(frozen=True)
class InfoText(TextItem):
    text: Expr


# stage commands

@dataclass(frozen=True)
class StageCommand(Statement):
    kind: ClassVar[StatementKind] = StatementKind.STAGE


@dataclass(frozen=True)
class BackgroundChange(StageCommand):
    operation: operations.BackgroundOperation


@dataclass(frozen=True)
class UiChange(StageCommand):
    target: operations.UiChangeTarget
    operand: Expr
    image_mode: Optional[operations.UiImageMode] = None


@dataclass(frozen=True)
class SceneChange(StageCommand):
    scene: Expr


@dataclass(frozen=True)
class ActChange(StageCommand):
    act: Expr


@dataclass(frozen=True)
class CharacterChange(StageCommand):
    character: str
    operation: operations.ActorOperation


@dataclass(frozen=True)
class AnimationChange(StageCommand):
    animation: str
    operation: operations.ActorOperation


@dataclass(frozen=True)
class AudioChange(StageCommand):
    command: operations.AudioCommand
    category: str
    track: Optional[str]
    volume: float


# code

@dataclass(frozen=True)
class CodeStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.CODE


@dataclass(frozen=True)
class Log(CodeStatement):
    exprs: tuple[Expr, ...]


class Scene:
    def __init__(self, name:str, statements:Optional[list[Statement]]=None) -> None:
        self.name = name
        self.statements:list[Statement] = statements if statements is not None else []

    def __eq__(self, other:Any) -> bool:
        if not isinstance(other, Scene):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f'Scene({self.name!r}, {len(self.statements)} statements)'


@dataclass
class Act:
    name: str = ""
    entrypoint: str = ""
    scenes: dict[str, Scene] = field(default_factory=dict)

    def add_scene(self, scene:Scene) -> None:
        """ adds scene, the first scene added becomes the entrypoint """
        if scene.name in self.scenes:
            raise DuplicateSceneError(scene.name)
        self.scenes[scene.name] = scene
        if not self.entrypoint:
            self.entrypoint = scene.name

    def get_scene(self, scene_id:str) -> Optional[Scene]:
        return self.scenes.get(scene_id)
