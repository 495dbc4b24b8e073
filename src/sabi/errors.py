""" Error taxonomy for sabi

Every failure surfaced by the compiler or the interpreter derives from
SabiError. Context is added layer by layer with `raise ... from ...` so the
chain reads from the outermost operation ("while invoking Stage statement")
down to the root cause. """

from typing import Optional, Collection


class SabiError(Exception):
    pass


class ParseError(SabiError):
    """ Script source does not conform to the grammar. """

    def __init__(
        self,
        message:str,
        line:Optional[int]=None,
        column:Optional[int]=None,
        token:Optional[str]=None,
        expected:Collection[str]=(),
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.token = token
        self.expected = frozenset(expected)


class BuildError(SabiError, ValueError):
    """ Parse tree is well formed but can't be turned into an Act. """


class DuplicateSceneError(BuildError):
    def __init__(self, scene_id:str) -> None:
        super().__init__(f'Duplicate scene ID \'{scene_id}\'')
        self.scene_id = scene_id


class EmptyActError(BuildError):
    def __init__(self) -> None:
        super().__init__("No scenes found in act")


class EvaluationError(SabiError):
    """ An expression could not be reduced to a literal.

    Not raised by the current expression set, Add is total over numbers and
    strings. """


class DispatchError(SabiError):
    """ A statement failed while being invoked. """


class NotFoundError(DispatchError):
    def __init__(self, kind:str, identifier:str, message:Optional[str]=None) -> None:
        super().__init__(message or f'{kind} \'{identifier}\' not found')
        self.kind = kind
        self.identifier = identifier


class ScriptStateError(SabiError):
    """ The interpreter was asked to do something its lifecycle forbids. """
