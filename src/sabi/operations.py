""" Operand vocabularies for stage commands

These are the enumerated tags carried by stage commands (and by the commands
dispatched to collaborators). Script words map onto them through
`from_script`, which raises ValueError naming the bad word.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union


class ScriptEnum(enum.Enum):
    """ Enum whose values are the words used for it in scripts. """

    @classmethod
    def aliases(cls) -> dict[str, "ScriptEnum"]:
        return {}

    @classmethod
    def from_script(cls, word:str) -> "ScriptEnum":
        aliases = cls.aliases()
        if word in aliases:
            return aliases[word]
        try:
            return cls(word)
        except ValueError as e:
            raise ValueError(f'unknown {cls.__name__} "{word}", expected one of {[x.value for x in cls]}') from e


class CharacterPosition(ScriptEnum):
    CENTER = "center"
    FAR_LEFT = "far_left"
    FAR_RIGHT = "far_right"
    LEFT = "left"
    RIGHT = "right"
    INVISIBLE_LEFT = "invisible_left"
    INVISIBLE_RIGHT = "invisible_right"


class AnimationPosition(ScriptEnum):
    CENTER = "center"
    TOP_LEFT = "top_left"
    TOP = "top"
    TOP_RIGHT = "top_right"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom_right"


ActorPosition = Union[CharacterPosition, AnimationPosition]


class CharacterDirection(ScriptEnum):
    LEFT = "left"
    RIGHT = "right"


class ActorType(enum.Enum):
    CHARACTER = enum.auto()
    ANIMATION = enum.auto()


@dataclass(frozen=True)
class SpawnInfo:
    emotion: Optional[str] = None
    position: Optional[ActorPosition] = None
    direction: CharacterDirection = CharacterDirection.RIGHT
    fading: bool = False
    scale: Optional[float] = None


@dataclass(frozen=True)
class Spawn:
    info: SpawnInfo


@dataclass(frozen=True)
class EmotionChange:
    emotion: str


@dataclass(frozen=True)
class Despawn:
    fading: bool


@dataclass(frozen=True)
class Look:
    direction: CharacterDirection


@dataclass(frozen=True)
class Move:
    position: ActorPosition


ActorOperation = Union[Spawn, EmotionChange, Despawn, Look, Move]


def is_blocking(operation:ActorOperation) -> bool:
    """ whether an actor operation pauses the script until it finishes

    fading in or out and moving are animated, everything else is instant.
    """
    if isinstance(operation, Spawn):
        return operation.info.fading
    elif isinstance(operation, Despawn):
        return operation.fading
    elif isinstance(operation, Move):
        return True
    return False


class BackgroundDirection(ScriptEnum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def aliases(cls) -> dict[str, ScriptEnum]:
        return {
            "N": cls.NORTH, "North": cls.NORTH,
            "S": cls.SOUTH, "South": cls.SOUTH,
            "E": cls.EAST, "East": cls.EAST,
            "W": cls.WEST, "West": cls.WEST,
        }


@dataclass(frozen=True)
class ChangeTo:
    sprite: str


@dataclass(frozen=True)
class DissolveTo:
    sprite: Optional[str]


@dataclass(frozen=True)
class SlideTo:
    direction: BackgroundDirection


BackgroundOperation = Union[ChangeTo, DissolveTo, SlideTo]


class UiChangeTarget(ScriptEnum):
    TEXT_BOX_BACKGROUND = "textbox"
    NAME_BOX_BACKGROUND = "namebox"
    FONT = "font"
    UI_SOUNDS = "sounds"
    TYPING_SOUND = "typing"

    @property
    def takes_image_mode(self) -> bool:
        return self in (UiChangeTarget.TEXT_BOX_BACKGROUND, UiChangeTarget.NAME_BOX_BACKGROUND)


class UiImageMode(ScriptEnum):
    AUTO = "auto"
    SLICED = "sliced"


class AudioCommand(ScriptEnum):
    START = "start"
    STOP = "stop"
    PAUSE = "pause"
    UNPAUSE = "unpause"
