""" Per-run state of a script session """

import logging

from sabi import util, config
from sabi.compiler import ast
from sabi.cursor import Cursor
from sabi.history import History


class RunState:
    """ Everything that changes while a script runs.

    Created when a run starts and dropped when it ends. The cursor is always
    over the statements of `scene`, a scene or act change swaps both. """

    def __init__(self, act:ast.Act, scene:ast.Scene, player_name:str="") -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.act = act
        self.scene = scene
        self.statements:Cursor[ast.Statement] = Cursor(scene.statements)
        self.blocking = False
        self.rewinding = 0
        self.history = History()
        self.player_name = player_name

    def enter_scene(self, scene:ast.Scene) -> None:
        self.scene = scene
        self.statements = Cursor(scene.statements)
        self.history.push_descriptor(config.Settings.history.scene_descriptor.format(name=scene.name))
        self.blocking = False

    def enter_act(self, act:ast.Act, scene:ast.Scene) -> None:
        self.act = act
        self.scene = scene
        self.statements = Cursor(scene.statements)
        self.history.push_descriptor(config.Settings.history.act_descriptor.format(name=act.name))
        self.blocking = False

    def set_rewind(self) -> None:
        """ arrange to step back to the previous line of dialogue

        the last history entry is the line currently shown, so the search
        skips it. rewinding counts how many entries lie after the target
        dialogue, each rewind step consumes one. """

        idx = self.history.last_dialogue_index(len(self.history) - 1)
        if idx is None:
            self.logger.debug("no previous dialogue to rewind to")
            return

        self.rewinding = len(self.history) - (idx + 1)
        self.blocking = False
        self.logger.debug(f'rewinding {self.rewinding} entries to history item {idx}')

    def history_summary(self) -> str:
        return self.history.summary(self.player_name)
