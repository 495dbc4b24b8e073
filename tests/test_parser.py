""" Tests for the script grammar and parser """

import pytest

from sabi.errors import ParseError
from sabi.compiler import parser

def test_parse_scenes():
    tree = parser.parse("""
        # a comment
        scene intro
        alice: "Hi" // trailing comment
        narrator: "Quiet."
        scene outro
        log "done"
    """)
    assert tree.data == "start"
    assert [t.data for t in tree.children] == ["scene", "scene"]
    intro, outro = tree.children
    assert str(intro.children[0]) == "intro"
    assert [t.data for t in intro.children[1:]] == ["dialogue", "infotext"]
    assert [t.data for t in outro.children[1:]] == ["log"]

def test_parse_positions():
    tree = parser.parse('scene a\n\n  alice: "x"\n')
    dialogue = tree.children[0].children[1]
    assert dialogue.meta.line == 3
    assert dialogue.meta.column == 3

def test_parse_empty():
    tree = parser.parse("# nothing here\n")
    assert tree.children == []

def test_parse_stage_commands():
    tree = parser.parse("""
        scene a
        [background dissolve]
        [gui textbox "panel" sliced]
        [character alice fade in as happy at left looking right]
        [animation "sparkles" appears scale 0.5]
        [audio start music "theme.ogg" 0.8]
    """)
    commands = [t.children[0].data for t in tree.children[0].children[1:]]
    assert commands == [
        "background_dissolve",
        "gui_change",
        "character_change",
        "animation_change",
        "audio_change",
    ]

def test_parse_error_unexpected_token():
    with pytest.raises(ParseError) as excinfo:
        parser.parse('scene a\nalice "x"\n')
    assert excinfo.value.line == 2
    assert excinfo.value.token == '"x"'
    assert excinfo.value.expected

def test_parse_error_end_of_script():
    with pytest.raises(ParseError) as excinfo:
        parser.parse('scene a\nalice:')
    assert excinfo.value.token == ""
    assert "end of script" in str(excinfo.value)

def test_parse_error_bad_character():
    with pytest.raises(ParseError) as excinfo:
        parser.parse('scene a\n@')
    assert excinfo.value.line == 2
    assert excinfo.value.token == "@"

def test_parse_error_missing_scene():
    with pytest.raises(ParseError):
        parser.parse('alice: "no scene yet"')

@pytest.mark.parametrize("line", [
    'log: "x"',
    'scene: "x"',
    'narrator:happy: "x"',
])
def test_reserved_speaker(line):
    with pytest.raises(ParseError):
        parser.parse(f'scene a\n{line}\n')
