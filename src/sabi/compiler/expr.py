""" Script expressions

Expressions are tiny immutable trees of number and string literals joined by
"+". They're resolved to a literal right before a statement is dispatched so
collaborators only ever see primitive values.
"""

from dataclasses import dataclass
from typing import Union

from sabi import util


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Add:
    lhs: "Expr"
    rhs: "Expr"


Expr = Union[Number, String, Add]
Literal = Union[Number, String]


def evaluate(expr:Expr) -> Literal:
    """ Reduce expr to a literal without touching expr itself.

    | left   | right  | result                      |
    |--------|--------|-----------------------------|
    | Number | Number | Number(l + r)               |
    | String | String | String(l + r)               |
    | Number | String | String(stringify(l) + r)    |
    | String | Number | String(l + stringify(r))    |

    Nested Adds on either side are resolved first.
    """
    if isinstance(expr, (Number, String)):
        return expr

    left = evaluate(expr.lhs)
    right = evaluate(expr.rhs)

    if isinstance(left, Number) and isinstance(right, Number):
        return Number(left.value + right.value)
    else:
        return String(literal_to_string(left) + literal_to_string(right))


def literal_to_string(literal:Literal) -> str:
    if isinstance(literal, String):
        return literal.value
    return util.format_number(literal.value)


def evaluate_into_string(expr:Expr) -> str:
    return literal_to_string(evaluate(expr))
