""" Steps through a compiled act one statement per tick

The interpreter owns the run lifecycle (IDLE -> WAITING_FOR_COLLABORATORS ->
RUNNING -> IDLE). While running, each tick performs at most one execution
step and then applies any scene or act changes that step requested.

Pacing is cooperative: dialogue, shown info text and animated actor changes
set `blocking` and nothing advances until a collaborator calls `release()`.
"""

import logging
from typing import Optional, Callable

from sabi import util, config, operations, commands
from sabi.commands import SabiState
from sabi.errors import SabiError, DispatchError, NotFoundError, ScriptStateError
from sabi.compiler import ast, expr
from sabi.state import RunState
from sabi.history import speaker_name
from sabi.loader import ScriptId, ScriptLibrary
from sabi.collaborator import CommandBus

script_logger = logging.getLogger("sabi.script")


class Interpreter:
    def __init__(
        self,
        library:ScriptLibrary,
        bus:Optional[CommandBus]=None,
        log_sink:Optional[Callable[[str], None]]=None,
        player_name:Optional[str]=None,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.library = library
        self.bus = bus if bus is not None else CommandBus()
        self.log_sink = log_sink
        # falls back to player.name in the config when a run begins
        self.player_name = player_name

        self.state = SabiState.IDLE
        self.script_id:Optional[ScriptId] = None
        self.run:Optional[RunState] = None

        self.bus.initialize(self)

    @property
    def is_running(self) -> bool:
        return self.state == SabiState.RUNNING

    def _set_state(self, state:SabiState) -> None:
        self.logger.info(f'{self.state.name} -> {state.name}')
        self.state = state
        self.bus.state_changed(state)

    # lifecycle

    def start(self, script_id:ScriptId) -> None:
        """ request a run of script_id

        the run begins on a later tick, once every collaborator is ready. """

        if self.state != SabiState.IDLE:
            raise ScriptStateError(f'cannot start {script_id} while {self.state.name}')

        # fail now rather than after the collaborators are ready
        self.library.get(script_id)

        self.script_id = script_id
        self.bus.clear()
        self._set_state(SabiState.WAITING_FOR_COLLABORATORS)

    def _begin_run(self) -> None:
        assert self.script_id is not None
        act = self.library.get(self.script_id)
        scene = act.get_scene(act.entrypoint)
        if scene is None:
            raise NotFoundError("scene", act.entrypoint, f'entrypoint scene \'{act.entrypoint}\' not found in act \'{act.name}\'')

        player_name = self.player_name if self.player_name is not None else config.Settings.player.name
        self.run = RunState(act, scene, player_name)
        self.run.history.push_descriptor(config.Settings.history.act_descriptor.format(name=act.name))
        self.run.history.push_descriptor(config.Settings.history.scene_descriptor.format(name=act.entrypoint))
        self._set_state(SabiState.RUNNING)

    def _end_run(self) -> None:
        self.logger.info(f'finished {self.script_id}')
        self.run = None
        self.bus.clear()
        self._set_state(SabiState.IDLE)
        self.bus.emit(commands.ScriptEnd())

    def tick(self) -> None:
        if self.state == SabiState.WAITING_FOR_COLLABORATORS:
            if self.bus.all_ready():
                self._begin_run()
        elif self.state == SabiState.RUNNING:
            self.step()
            self.react()

    # collaborator facing

    def release(self) -> None:
        if self.run is not None:
            self.run.blocking = False

    def block(self) -> None:
        if self.run is not None:
            self.run.blocking = True

    def rewind(self) -> None:
        if self.run is None:
            raise ScriptStateError("no script is running")
        self.run.set_rewind()

    def history_summary(self) -> str:
        if self.run is None:
            return ""
        return self.run.history_summary()

    # execution

    def step(self) -> None:
        """ performs one execution step, does nothing while blocking """

        run = self.run
        if run is None:
            raise ScriptStateError("no script is running")
        if run.blocking:
            return

        statement:Optional[ast.Statement]
        if run.rewinding > 0:
            self.logger.debug(f'rewinding {run.rewinding}')
            run.rewinding -= 1
            statement = run.statements.prev()
            if statement is None:
                # at the start of the scene, stay on the line being shown
                self.logger.debug("rewind reached the start of the scene")
                run.rewinding = 0
                run.blocking = True
                return
            elif isinstance(statement, ast.StageCommand):
                statement = run.statements.find_previous()
            elif not isinstance(statement, ast.TextItem):
                # nothing to replay for code, the cursor still moved back
                statement = None

            if statement is None:
                return
            run.history.pop()
        else:
            statement = run.statements.next()
            if statement is None:
                self._end_run()
                return
            run.history.push_statement(statement)

        try:
            self.dispatch(statement)
        except SabiError as e:
            raise DispatchError(f'...while invoking {type(statement).__name__} statement') from e

    def _evaluate(self, expression:expr.Expr, what:str) -> str:
        try:
            return expr.evaluate_into_string(expression)
        except SabiError as e:
            raise DispatchError(f'...while evaluating {what} expression') from e

    def dispatch(self, statement:ast.Statement) -> None:
        """ translates one statement into commands for the collaborators

        blocking is set before the command goes out so a collaborator can
        release synchronously from its handler. """

        run = self.run
        assert run is not None

        if isinstance(statement, ast.Dialogue):
            text = self._evaluate(statement.text, "Dialogue")
            name = speaker_name(statement.character, run.player_name)
            self.logger.info(f'invoking Dialogue::Say for {name}')
            run.blocking = True
            self.bus.emit(commands.CharacterSay(name, text))
        elif isinstance(statement, ast.InfoText):
            text = self._evaluate(statement.text, "InfoText")
            self.logger.info("invoking InfoText")
            # showing info text while rewinding would block on a line the
            # player is trying to get past
            if run.rewinding == 0:
                run.blocking = True
                self.bus.emit(commands.InfoText(text))
        elif isinstance(statement, ast.StageCommand):
            self._dispatch_stage(statement)
        elif isinstance(statement, ast.Log):
            strings = [self._evaluate(e, "Log") for e in statement.exprs]
            line = f'{config.Settings.log.prefix} {config.Settings.log.separator.join(strings)}'
            if self.log_sink is not None:
                self.log_sink(line)
            else:
                script_logger.info(line)
        else:
            raise DispatchError(f'unknown statement {statement!r}')

    def _dispatch_stage(self, statement:ast.StageCommand) -> None:
        run = self.run
        assert run is not None
        command:commands.Command

        if isinstance(statement, ast.BackgroundChange):
            command = commands.BackgroundChange(statement.operation)
        elif isinstance(statement, ast.UiChange):
            value = self._evaluate(statement.operand, "UiChange")
            command = commands.UiChange(statement.target, value, statement.image_mode)
        elif isinstance(statement, ast.SceneChange):
            command = commands.SceneChange(self._evaluate(statement.scene, "SceneChange"))
        elif isinstance(statement, ast.ActChange):
            command = commands.ActChange(self._evaluate(statement.act, "ActChange"))
        elif isinstance(statement, ast.CharacterChange):
            command = commands.ActorChange(operations.ActorType.CHARACTER, statement.character, statement.operation)
        elif isinstance(statement, ast.AnimationChange):
            command = commands.ActorChange(operations.ActorType.ANIMATION, statement.animation, statement.operation)
        elif isinstance(statement, ast.AudioChange):
            if statement.category not in config.Settings.audio.categories:
                raise DispatchError(f'unknown audio category "{statement.category}", expected one of {config.Settings.audio.categories}')
            command = commands.AudioChange(statement.command, statement.category, statement.track, statement.volume)
        else:
            raise DispatchError(f'unknown stage command {statement!r}')

        self.logger.info(f'invoking StageCommand::{type(statement).__name__} {command}')
        if isinstance(command, commands.ActorChange) and command.is_blocking:
            run.blocking = True
        self.bus.emit(command)

    def react(self) -> None:
        """ applies scene and act changes requested during the last step """

        for change in self.bus.take_changes():
            run = self.run
            if run is None:
                self.logger.debug(f'dropping {change}, no script running')
                continue

            if isinstance(change, commands.SceneChange):
                scene = run.act.get_scene(change.scene_id)
                if scene is None:
                    raise NotFoundError("scene", change.scene_id, f'scene \'{change.scene_id}\' not found in act \'{run.act.name}\'')
                run.enter_scene(scene)
                self.logger.info(f'scene changed to {change.scene_id}')
            else:
                assert self.script_id is not None
                script_id = ScriptId(self.script_id.chapter, change.act_id)
                act = self.library.get(script_id)
                scene = act.get_scene(act.entrypoint)
                if scene is None:
                    raise NotFoundError("scene", act.entrypoint, f'entrypoint scene \'{act.entrypoint}\' not found in act \'{act.name}\'')
                self.script_id = script_id
                run.enter_act(act, scene)
                self.logger.info(f'act changed to {change.act_id}')
