""" Utility methods broadly applicable across sabi. """

from __future__ import annotations

import sys
import math
import decimal
import logging
import pdb
from typing import Any

logger = logging.getLogger(__name__)

def fullname(o:Any) -> str:
    """ fully qualified class name of o (or o itself if it's a class)

    used to name per-object loggers. the module is looked up on the class
    since __qualname__ leaves it out. """

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__
    else:
        return module + '.' + klass.__qualname__

def format_number(value:float) -> str:
    """ renders a script number the way it shows up in text

    shortest round-trip digits written out in full, never in exponent
    notation (1e-07 -> "0.0000001"), and integral values drop the
    fractional part (2.0 -> "2"). """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    s = format(decimal.Decimal(repr(value)), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s

class PDBManager:
    def __init__(self) -> None:
        self.logger = logging.getLogger(fullname(self))

    def __enter__(self) -> PDBManager:
        self.logger.info("entering PDBManager")

        return self

    def __exit__(self, e:Any, m:Any, tb:Any) -> None:
        self.logger.info("exiting PDBManager")
        if e is not None:
            self.logger.info(f'handling exception {e} {m}')
            print(m.__repr__(), file=sys.stderr)
            pdb.post_mortem(tb)
