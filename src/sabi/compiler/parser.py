""" Script source to parse tree

Wraps the lark LALR parser built from sabi.lark. Parse failures are turned
into ParseError with enough position information to point an author at the
offending token.
"""

import functools
import logging
import importlib.resources

import lark
from lark.exceptions import UnexpectedToken, UnexpectedCharacters, UnexpectedEOF

from sabi.errors import ParseError

logger = logging.getLogger(__name__)

GRAMMAR_FILE = "sabi.lark"

@functools.cache
def grammar() -> str:
    return importlib.resources.files("sabi.compiler").joinpath(GRAMMAR_FILE).read_text()

@functools.cache
def parser() -> lark.Lark:
    logger.debug(f'building parser from {GRAMMAR_FILE}')
    return lark.Lark(
        grammar(),
        parser="lalr",
        start="start",
        propagate_positions=True,
        maybe_placeholders=True,
    )

def _context(e:lark.exceptions.UnexpectedInput, source:str) -> str:
    if e.pos_in_stream is None:
        return ""
    return "\n" + e.get_context(source)

def parse(source:str) -> lark.Tree:
    """
    Parses script source into a parse tree.

    Parameters
    ----------
    source : str
        the full text of one act

    Returns
    -------
    out : lark.Tree
        a tree rooted at "start" with one "scene" child per scene

    Raises
    ------
    ParseError
        if source doesn't conform to the grammar. no partial tree is returned.
    """

    try:
        return parser().parse(source)
    except UnexpectedToken as e:
        token = str(e.token)
        if e.token.type == "$END":
            message = f'unexpected end of script at line {e.line}, column {e.column}, expected one of {sorted(e.expected)}'
            token = ""
        else:
            message = f'unexpected token "{token}" ({e.token.type}) at line {e.line}, column {e.column}, expected one of {sorted(e.expected)}'
        raise ParseError(
            message + _context(e, source),
            line=e.line, column=e.column, token=token, expected=e.expected,
        ) from e
    except UnexpectedCharacters as e:
        token = e.char
        raise ParseError(
            f'unexpected character "{token}" at line {e.line}, column {e.column}' + _context(e, source),
            line=e.line, column=e.column, token=token, expected=e.allowed or (),
        ) from e
    except UnexpectedEOF as e:
        raise ParseError(
            f'unexpected end of script, expected one of {sorted(e.expected)}',
            line=e.line, column=e.column, token="", expected=e.expected,
        ) from e
