""" Record of what a run has shown so far

Every statement the interpreter steps onto is pushed here, along with
descriptors marking act and scene boundaries. Rewind walks back over it and
the transcript is rendered from it.
"""

from dataclasses import dataclass
from typing import Optional, Union, Iterator

from sabi.compiler import ast, expr


@dataclass(frozen=True)
class StatementEntry:
    statement: ast.Statement


@dataclass(frozen=True)
class Descriptor:
    text: str


HistoryItem = Union[StatementEntry, Descriptor]


class History:
    def __init__(self) -> None:
        self.items:list[HistoryItem] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(self.items)

    def __getitem__(self, idx:int) -> HistoryItem:
        return self.items[idx]

    def push(self, item:HistoryItem) -> None:
        self.items.append(item)

    def push_statement(self, statement:ast.Statement) -> None:
        self.items.append(StatementEntry(statement))

    def push_descriptor(self, text:str) -> None:
        self.items.append(Descriptor(text))

    def pop(self) -> Optional[HistoryItem]:
        if not self.items:
            return None
        return self.items.pop()

    def last_dialogue_index(self, end:int) -> Optional[int]:
        """ index of the most recent Dialogue entry strictly before end

        the search stops at a descriptor, it never reaches back past the
        start of the current scene or act. """
        for idx in range(min(end, len(self.items)) - 1, -1, -1):
            item = self.items[idx]
            if isinstance(item, Descriptor):
                return None
            if isinstance(item, StatementEntry) and isinstance(item.statement, ast.Dialogue):
                return idx
        return None

    def summary(self, player_name:str="") -> str:
        """ renders the transcript, one line per shown text item or descriptor

        stage commands and code leave no trace in the transcript. lines
        spoken by the player placeholder are credited to player_name. """

        lines = []
        for item in self.items:
            if isinstance(item, Descriptor):
                lines.append(f'{item.text}\n')
            elif isinstance(item.statement, ast.Dialogue):
                lines.append(f'{speaker_name(item.statement.character, player_name)}: {expr.evaluate_into_string(item.statement.text)}\n')
            elif isinstance(item.statement, ast.InfoText):
                lines.append(f'{expr.evaluate_into_string(item.statement.text)}\n')
        return "".join(lines)


def speaker_name(character:str, player_name:str) -> str:
    if character == ast.PLAYER_NAME:
        return player_name
    return character
