""" sabi script compiler

Turns script source into an Act in two passes: the lark grammar in sabi.lark
produces a generic parse tree, then the builder walks that tree into the
domain AST (Act -> Scenes -> Statements) with expressions left unevaluated
until dispatch.
"""

from .parser import parse
from .builder import build_act, compile_act
from .expr import evaluate, evaluate_into_string
