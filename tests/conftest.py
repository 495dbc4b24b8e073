from typing import Generator

import pytest

from sabi import config
from sabi.collaborator import CommandBus
from sabi.interpreter import Interpreter
from sabi.loader import ScriptId, ScriptLibrary
from . import RecordingCollaborator, library_from, INTRO, ACT2

@pytest.fixture
def settings() -> Generator[None, None, None]:
    """ lets a test change config.Settings, restoring the defaults after """
    yield
    config.load_config()

@pytest.fixture
def library() -> ScriptLibrary:
    return library_from({
        ScriptId("chapter1", "act1"): INTRO,
        ScriptId("chapter1", "act2"): ACT2,
    })

@pytest.fixture
def recorder() -> RecordingCollaborator:
    return RecordingCollaborator()

@pytest.fixture
def log_lines() -> list[str]:
    return []

@pytest.fixture
def interpreter(library:ScriptLibrary, recorder:RecordingCollaborator, log_lines:list[str]) -> Interpreter:
    bus = CommandBus()
    bus.subscribe(recorder)
    return Interpreter(library, bus, log_sink=log_lines.append)
