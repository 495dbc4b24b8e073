""" Compiled scripts addressed by chapter and act

Scripts live on disk as <root>/<chapter>/<act><extension>, one act per file.
"""

import os
import logging
import pathlib
from dataclasses import dataclass
from typing import Optional, Union, Iterator

from sabi import config
from sabi.errors import BuildError, NotFoundError, ParseError
from sabi.compiler import ast, builder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptId:
    chapter: str
    act: str

    def __str__(self) -> str:
        return f'{self.chapter}/{self.act}'


class ScriptLibrary:
    def __init__(self) -> None:
        self.acts:dict[ScriptId, ast.Act] = {}

    def __len__(self) -> int:
        return len(self.acts)

    def __contains__(self, script_id:ScriptId) -> bool:
        return script_id in self.acts

    def __iter__(self) -> Iterator[ScriptId]:
        return iter(self.acts)

    def add(self, script_id:ScriptId, act:ast.Act) -> None:
        if script_id in self.acts:
            raise ValueError(f'script {script_id} already loaded')
        self.acts[script_id] = act

    def load_source(self, source:str, script_id:ScriptId) -> ast.Act:
        act = builder.compile_act(source, script_id.act)
        self.add(script_id, act)
        return act

    def load_file(self, path:Union[str, os.PathLike], script_id:ScriptId) -> ast.Act:
        """ compiles the script at path and files it under script_id

        the act is named after the act part of script_id. parse and build
        errors are re-raised with the offending path. """

        try:
            with open(path, "rt", encoding="utf-8") as f:
                source = f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f'failed to read {path}: {e}') from e
        try:
            act = self.load_source(source, script_id)
        except ParseError as e:
            raise ParseError(
                f'failed to parse {path}: {e}',
                line=e.line, column=e.column, token=e.token, expected=e.expected,
            ) from e
        except BuildError as e:
            raise BuildError(f'failed to build {path}') from e

        logger.info(f'loaded {script_id} from {path} with {len(act.scenes)} scenes')
        return act

    def get(self, script_id:ScriptId) -> ast.Act:
        try:
            return self.acts[script_id]
        except KeyError as e:
            raise NotFoundError("script", str(script_id)) from e

    @staticmethod
    def from_directory(root:Optional[Union[str, os.PathLike]]=None, extension:Optional[str]=None) -> "ScriptLibrary":
        """
        Compiles every script under root.

        Parameters
        ----------
        root : path
            directory holding one subdirectory per chapter, defaults to
            config scripts.root
        extension : str
            script file extension, defaults to config scripts.extension

        Returns
        -------
        out : ScriptLibrary
            one act per script file, keyed by ScriptId(chapter, act)

        Raises
        ------
        ValueError
            if a script sits outside a chapter directory or deeper than one
            level below root
        ParseError, BuildError
            if any script fails to compile
        """

        if root is None:
            root = config.Settings.scripts.root
        if extension is None:
            extension = config.Settings.scripts.extension

        root_path = pathlib.Path(root)
        if not root_path.is_dir():
            raise NotFoundError("script directory", str(root_path))

        library = ScriptLibrary()
        for path in sorted(root_path.rglob(f'*{extension}')):
            relative = path.relative_to(root_path)
            if len(relative.parts) != 2:
                raise ValueError(f'script {path} should be at <root>/<chapter>/<act>{extension}')
            script_id = ScriptId(relative.parts[0], path.name[:-len(extension)])
            library.load_file(path, script_id)

        logger.info(f'loaded {len(library)} scripts from {root_path}')
        return library
