""" Headless host that plays a script in the terminal

Prints every command the interpreter emits. By default it releases blocking
as soon as a line is printed so the whole act plays through. With
--interactive it waits on each line: Enter advances, "b" rewinds to the
previous line of dialogue, "h" prints the transcript and "q" quits.
"""

import sys
import logging
import argparse
import contextlib
from typing import TextIO

from sabi import util, config, commands
from sabi.collaborator import Collaborator, CommandBus
from sabi.interpreter import Interpreter
from sabi.loader import ScriptId, ScriptLibrary


class ConsoleCollaborator(Collaborator):
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

    def __init__(self, out:TextIO, auto_release:bool=True) -> None:
        super().__init__()
        self.out = out
        self.auto_release = auto_release
        self.finished = False

    def state_changed(self, state:commands.SabiState) -> None:
        if state == commands.SabiState.RUNNING:
            self.finished = False

    def handle(self, command:commands.Command) -> None:
        if isinstance(command, commands.CharacterSay):
            print(f'{command.name}: {command.text}', file=self.out)
        elif isinstance(command, commands.InfoText):
            print(command.text, file=self.out)
        elif isinstance(command, commands.ScriptEnd):
            print("[ end ]", file=self.out)
            self.finished = True
        else:
            print(f'[ {command} ]', file=self.out)

        if self.auto_release:
            self.interpreter.release()


def play(interpreter:Interpreter, console:ConsoleCollaborator, script_id:ScriptId, interactive:bool=False) -> None:
    interpreter.start(script_id)
    while not console.finished:
        interpreter.tick()
        run = interpreter.run
        if not interactive or run is None or not run.blocking:
            continue

        choice = input("> ").strip().lower()
        if choice == "b":
            interpreter.rewind()
        elif choice == "h":
            print(interpreter.history_summary(), file=console.out)
        elif choice == "q":
            break
        else:
            interpreter.release()


def main() -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)
    logger = logging.getLogger(__name__)

    with contextlib.ExitStack() as context_stack:
        parser = argparse.ArgumentParser(description="plays a sabi script in the terminal")
        parser.add_argument("chapter", type=str,
                help="chapter the act belongs to")
        parser.add_argument("act", type=str,
                help="act to start")
        parser.add_argument("-r", "--root", type=str, default=None,
                help="directory holding <chapter>/<act> scripts. default from config scripts.root")
        parser.add_argument("-c", "--config", type=argparse.FileType("r"), default=None,
                help="toml file overriding the built-in config")
        parser.add_argument("-p", "--player", type=str, default=None,
                help="name shown for the player's lines. default from config player.name")
        parser.add_argument("-i", "--interactive", action="store_true",
                help="wait for input on every line")
        parser.add_argument("-v", "--verbose", action="store_true",
                help="log interpreter activity")
        parser.add_argument("--pdb", action="store_true")

        args = parser.parse_args()

        if args.pdb:
            context_stack.enter_context(util.PDBManager())

        if args.verbose:
            logging.getLogger().setLevel(logging.INFO)
        else:
            # Log statements in scripts still show up
            logging.getLogger("sabi.script").setLevel(logging.INFO)

        if args.config:
            config.load_config(args.config)
            args.config.close()

        library = ScriptLibrary.from_directory(args.root)
        logger.info(f'loaded {len(library)} scripts')

        bus = CommandBus()
        console = ConsoleCollaborator(sys.stdout, auto_release=not args.interactive)
        bus.subscribe(console)
        interpreter = Interpreter(library, bus, player_name=args.player)

        play(interpreter, console, ScriptId(args.chapter, args.act), interactive=args.interactive)


if __name__ == "__main__":
    main()
