""" Tests for run state, rewind and history """

from sabi import operations
from sabi.state import RunState
from sabi.history import History, Descriptor, StatementEntry
from sabi.compiler import ast
from sabi.compiler.expr import String, Add, Number

def dialogue(text:str, character:str="alice") -> ast.Dialogue:
    return ast.Dialogue(character, String(text))

def make_state() -> RunState:
    act = ast.Act(name="act1")
    act.add_scene(ast.Scene("a", [dialogue("1"), dialogue("2")]))
    act.add_scene(ast.Scene("b", [dialogue("3")]))
    return RunState(act, act.scenes["a"])

def test_set_rewind_depth():
    state = make_state()
    state.history.push_descriptor("Act: act1")
    state.history.push_statement(dialogue("1"))
    state.history.push_statement(ast.BackgroundChange(operations.ChangeTo("x")))
    state.history.push_statement(dialogue("2"))
    state.blocking = True

    state.set_rewind()

    assert state.rewinding == 2
    assert state.blocking is False

def test_set_rewind_skips_current_line():
    state = make_state()
    state.history.push_descriptor("Act: act1")
    state.history.push_statement(dialogue("1"))
    state.blocking = True

    # only the line on screen, nothing earlier to go back to
    state.set_rewind()

    assert state.rewinding == 0
    assert state.blocking is True

def test_set_rewind_ignores_info_text():
    state = make_state()
    state.history.push_statement(dialogue("1"))
    state.history.push_statement(ast.InfoText(String("i")))
    state.history.push_statement(ast.InfoText(String("j")))

    state.set_rewind()

    assert state.rewinding == 2

def test_enter_scene():
    state = make_state()
    state.statements.next()
    state.blocking = True

    state.enter_scene(state.act.scenes["b"])

    assert state.scene.name == "b"
    assert state.statements.pos == -1
    assert state.statements.next() == dialogue("3")
    assert state.blocking is False
    assert list(state.history) == [Descriptor("Scene: b")]

def test_enter_act():
    state = make_state()
    other = ast.Act(name="act2")
    other.add_scene(ast.Scene("start", [dialogue("x")]))
    state.blocking = True

    state.enter_act(other, other.scenes["start"])

    assert state.act is other
    assert state.scene.name == "start"
    assert state.statements.pos == -1
    assert state.blocking is False
    assert list(state.history) == [Descriptor("Act: act2")]

def test_history_pop():
    history = History()
    assert history.pop() is None
    history.push_descriptor("a")
    assert history.pop() == Descriptor("a")
    assert len(history) == 0

def test_history_summary():
    history = History()
    history.push_descriptor("Act: act1")
    history.push_descriptor("Scene: intro")
    history.push_statement(dialogue("Hello"))
    history.push_statement(ast.BackgroundChange(operations.ChangeTo("park")))
    history.push_statement(ast.InfoText(Add(String("it's "), Number(3.))))
    history.push_statement(ast.Log((String("hidden"),)))
    history.push_statement(dialogue("Hi", "bob"))

    assert history.summary() == "Act: act1\nScene: intro\nalice: Hello\nit's 3\nbob: Hi\n"
    assert isinstance(history[2], StatementEntry)

def test_set_rewind_stops_at_descriptor():
    state = make_state()
    state.history.push_descriptor("Scene: a")
    state.history.push_statement(dialogue("1"))
    state.history.push_descriptor("Scene: b")
    state.history.push_statement(dialogue("3"))
    state.blocking = True

    state.set_rewind()

    assert state.rewinding == 0
    assert state.blocking is True
    assert state.history.last_dialogue_index(2) == 1

def test_history_summary_player_name():
    history = History()
    history.push_statement(ast.Dialogue(ast.PLAYER_NAME, String("Me.")))
    history.push_statement(dialogue("You."))

    assert history.summary("Sam") == "Sam: Me.\nalice: You.\n"

    act = ast.Act(name="act1")
    act.add_scene(ast.Scene("a", [dialogue("1")]))
    state = RunState(act, act.scenes["a"], player_name="Robin")
    state.history.push_statement(ast.Dialogue(ast.PLAYER_NAME, String("Me.")))
    assert state.history_summary() == "Robin: Me.\n"
