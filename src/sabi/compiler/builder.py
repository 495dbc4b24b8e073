""" Parse tree to Act

Walks the lark parse tree produced by sabi.compiler.parser and builds the
domain AST. Each stage command sub-rule maps onto exactly one StageCommand
variant; identifiers that don't name a known position, direction, target,
etc. fail with a BuildError naming the rule they appeared in.
"""

import re
import logging
from typing import Optional, Union, Callable, Iterable, TypeVar

from lark import Tree, Token

from sabi import operations, config
from sabi.errors import BuildError, DuplicateSceneError, EmptyActError
from sabi.compiler import ast, parser
from sabi.compiler.expr import Expr, Number, String, Add

logger = logging.getLogger(__name__)

RE_ESCAPE = re.compile(r'\\(.)')
ESCAPES = {"n": "\n", "t": "\t"}

def unquote(token:Token) -> str:
    """ strips the quotes off a STRING token and resolves escapes """
    inner = str(token)[1:-1]
    return RE_ESCAPE.sub(lambda m: ESCAPES.get(m.group(1), m.group(1)), inner)

def _location(tree:Tree) -> str:
    if getattr(tree.meta, "empty", True):
        return ""
    return f' at line {tree.meta.line}, column {tree.meta.column}'

T = TypeVar("T", bound=operations.ScriptEnum)

def _script_word(enum_type:type[T], word:Token, rule:str) -> T:
    try:
        return enum_type.from_script(str(word)) # type: ignore[return-value]
    except ValueError as e:
        raise BuildError(f'{rule}: {e}') from e

def build_expression(tree:Union[Tree, Token]) -> Expr:
    if not isinstance(tree, Tree):
        raise BuildError(f'expected an expression, found token {tree!r}')

    if tree.data == "number":
        try:
            return Number(float(tree.children[0]))
        except ValueError as e:
            raise BuildError(f'failed to parse number "{tree.children[0]}"') from e
    elif tree.data == "string":
        return String(unquote(tree.children[0]))
    elif tree.data == "add":
        lhs, rhs = tree.children
        return Add(build_expression(lhs), build_expression(rhs))
    else:
        raise BuildError(f'unexpected primary expression rule {tree.data}')

# stage commands

def build_background_change(command:Tree) -> ast.StageCommand:
    operation:operations.BackgroundOperation
    if command.data == "background_change_to":
        operation = operations.ChangeTo(unquote(command.children[0]))
    elif command.data == "background_dissolve":
        target = command.children[0]
        operation = operations.DissolveTo(unquote(target) if target is not None else None)
    elif command.data == "background_slide":
        operation = operations.SlideTo(_script_word(operations.BackgroundDirection, command.children[0], "background_slide"))
    else:
        raise BuildError(f'invalid background action {command.data}')
    return ast.BackgroundChange(operation)

def build_gui_change(command:Tree) -> ast.StageCommand:
    target_name, operand, image_mode_name = command.children
    target = _script_word(operations.UiChangeTarget, target_name, "gui_change")
    image_mode:Optional[operations.UiImageMode] = None
    if image_mode_name is not None:
        if not target.takes_image_mode:
            raise BuildError(f'gui_change: {target.value} does not take an image mode, got "{image_mode_name}"')
        image_mode = _script_word(operations.UiImageMode, image_mode_name, "image_mode")
    elif target.takes_image_mode:
        image_mode = operations.UiImageMode.AUTO

    try:
        operand_expr = build_expression(operand)
    except BuildError as e:
        raise BuildError(f'failed to build {target.value} expression for gui change') from e

    return ast.UiChange(target, operand_expr, image_mode)

def build_spawn(action:Tree, actor_type:operations.ActorType) -> operations.Spawn:
    emotion:Optional[str] = None
    position:Optional[operations.ActorPosition] = None
    direction = operations.CharacterDirection.RIGHT
    scale:Optional[float] = None

    for option in action.children:
        value = option.children[0]
        if option.data == "spawn_emotion":
            if actor_type != operations.ActorType.CHARACTER:
                raise BuildError(f'{option.data}: animations have no emotions, got "{value}"')
            emotion = str(value)
        elif option.data == "spawn_position":
            if actor_type == operations.ActorType.CHARACTER:
                position = _script_word(operations.CharacterPosition, value, "character_position")
            else:
                position = _script_word(operations.AnimationPosition, value, "animation_position")
        elif option.data == "spawn_direction":
            direction = _script_word(operations.CharacterDirection, value, "actor_direction")
        elif option.data == "spawn_scale":
            if actor_type != operations.ActorType.ANIMATION:
                raise BuildError(f'{option.data}: only animations can be scaled, got "{value}"')
            scale = float(value)
        else:
            raise BuildError(f'unexpected spawn option {option.data}')

    return operations.Spawn(operations.SpawnInfo(
        emotion=emotion,
        position=position,
        direction=direction,
        fading=action.data == "fade_in",
        scale=scale,
    ))

def build_actor_operation(action:Tree, actor_type:operations.ActorType) -> operations.ActorOperation:
    if action.data in ("appears", "fade_in"):
        return build_spawn(action, actor_type)
    elif action.data in ("disappears", "fade_out"):
        return operations.Despawn(action.data == "fade_out")
    elif action.data == "moves":
        if actor_type == operations.ActorType.CHARACTER:
            return operations.Move(_script_word(operations.CharacterPosition, action.children[0], "character_position"))
        else:
            return operations.Move(_script_word(operations.AnimationPosition, action.children[0], "animation_position"))
    elif action.data == "looks" and actor_type == operations.ActorType.CHARACTER:
        return operations.Look(_script_word(operations.CharacterDirection, action.children[0], "actor_direction"))
    elif action.data == "feels" and actor_type == operations.ActorType.CHARACTER:
        return operations.EmotionChange(str(action.children[0]))
    else:
        raise BuildError(f'unexpected {actor_type.name.lower()} action {action.data}')

def build_character_change(command:Tree) -> ast.StageCommand:
    character, action = command.children
    return ast.CharacterChange(str(character), build_actor_operation(action, operations.ActorType.CHARACTER))

def build_animation_change(command:Tree) -> ast.StageCommand:
    animation, action = command.children
    if animation.type == "STRING":
        animation_name = unquote(animation).strip()
    else:
        animation_name = str(animation)
    return ast.AnimationChange(animation_name, build_actor_operation(action, operations.ActorType.ANIMATION))

def build_scene_change(command:Tree) -> ast.StageCommand:
    try:
        return ast.SceneChange(build_expression(command.children[0]))
    except BuildError as e:
        raise BuildError("failed to build expression for scene change") from e

def build_act_change(command:Tree) -> ast.StageCommand:
    try:
        return ast.ActChange(build_expression(command.children[0]))
    except BuildError as e:
        raise BuildError("failed to build expression for act change") from e

def build_audio_change(command:Tree) -> ast.StageCommand:
    command_name, category, track, volume = command.children
    audio_command = _script_word(operations.AudioCommand, command_name, "audio_command")
    if audio_command == operations.AudioCommand.START and track is None:
        raise BuildError('audio_change: "start" needs a track to play')

    return ast.AudioChange(
        audio_command,
        str(category),
        unquote(track) if track is not None else None,
        float(volume) if volume is not None else float(config.Settings.audio.default_volume),
    )

STAGE_BUILDERS:dict[str, Callable[[Tree], ast.StageCommand]] = {
    "background_change_to": build_background_change,
    "background_dissolve": build_background_change,
    "background_slide": build_background_change,
    "gui_change": build_gui_change,
    "scene_change": build_scene_change,
    "act_change": build_act_change,
    "character_change": build_character_change,
    "animation_change": build_animation_change,
    "audio_change": build_audio_change,
}

def build_stage_command(tree:Tree) -> ast.StageCommand:
    if tree.data != "stage_command":
        raise BuildError(f'expected stage_command rule, found {tree.data}')

    command = tree.children[0]
    if command.data not in STAGE_BUILDERS:
        raise BuildError(f'unexpected rule in stage command: {command.data}')
    return STAGE_BUILDERS[command.data](command)

# code and text items

def build_log(tree:Tree) -> ast.Statement:
    exprs = []
    for expr_tree in tree.children:
        try:
            exprs.append(build_expression(expr_tree))
        except BuildError as e:
            raise BuildError("failed to build expression for log statement") from e
    return ast.Log(tuple(exprs))

def build_infotext(tree:Tree) -> ast.Statement:
    try:
        return ast.InfoText(build_expression(tree.children[0]))
    except BuildError as e:
        raise BuildError("failed to build expression for infotext") from e

def build_dialogue(tree:Tree) -> list[ast.Statement]:
    """ one dialogue line can expand into several statements

    an emotion tag becomes a leading EmotionChange, then each comma separated
    item becomes its own Dialogue (or stage command, in place). """

    character_token, emotion, *items = tree.children
    if character_token.type == "STRING":
        character = unquote(character_token)
    else:
        character = str(character_token)

    statements:list[ast.Statement] = []
    if emotion is not None:
        statements.append(ast.CharacterChange(character, operations.EmotionChange(str(emotion))))

    for item in items:
        if isinstance(item, Tree) and item.data == "stage_command":
            statements.append(build_stage_command(item))
        else:
            try:
                statements.append(ast.Dialogue(character, build_expression(item)))
            except BuildError as e:
                raise BuildError(f'failed to build expression for {character}\'s dialogue text') from e

    return statements

STATEMENT_BUILDERS:dict[str, Callable[[Tree], Iterable[ast.Statement]]] = {
    "dialogue": build_dialogue,
    "infotext": lambda t: [build_infotext(t)],
    "stage_command": lambda t: [build_stage_command(t)],
    "log": lambda t: [build_log(t)],
}

def build_scene(tree:Tree) -> ast.Scene:
    scene_id, *statement_trees = tree.children
    scene = ast.Scene(str(scene_id))
    for statement_tree in statement_trees:
        if statement_tree.data not in STATEMENT_BUILDERS:
            raise BuildError(f'unexpected rule in scene {scene.name}: {statement_tree.data}')
        try:
            scene.statements.extend(STATEMENT_BUILDERS[statement_tree.data](statement_tree))
        except BuildError as e:
            raise BuildError(f'...while building {statement_tree.data}{_location(statement_tree)} in scene \'{scene.name}\'') from e
    return scene

def build_act(tree:Tree, name:str="") -> ast.Act:
    """
    Builds an Act out of a parse tree.

    Parameters
    ----------
    tree : lark.Tree
        parse tree as returned by sabi.compiler.parser.parse
    name : str
        name to give the act, usually the act part of its script id

    Returns
    -------
    out : ast.Act
        the act, its entrypoint is the first scene in the tree

    Raises
    ------
    DuplicateSceneError
        if two scenes share a name
    EmptyActError
        if there are no scenes
    BuildError
        if any statement can't be built
    """

    scenes:list[ast.Scene] = []
    for scene_tree in tree.children:
        if not isinstance(scene_tree, Tree) or scene_tree.data != "scene":
            raise BuildError(f'unexpected rule when building scenes: {scene_tree!r}')
        scenes.append(build_scene(scene_tree))

    if not scenes:
        raise EmptyActError()

    # validate everything before building the act so a failure leaves nothing
    # half built
    seen:set[str] = set()
    for scene in scenes:
        if scene.name in seen:
            raise DuplicateSceneError(scene.name)
        seen.add(scene.name)

    act = ast.Act(name=name)
    for scene in scenes:
        act.add_scene(scene)

    logger.debug(f'built act "{name}" with {len(act.scenes)} scenes, entrypoint {act.entrypoint}')
    return act

def compile_act(source:str, name:str="") -> ast.Act:
    """ parse and build in one go """
    return build_act(parser.parse(source), name)
