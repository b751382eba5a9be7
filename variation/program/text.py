"""Reading and writing Push program text.

Push text is the parenthesised form ``(integer_add 1 (exec_dup 2.5 true))``.
Tokens are separated by single spaces, which parenthesis-insertion mutation
relies on when it picks its insertion points.

Symbols are written verbatim, so a symbol spelled like a literal (``"true"``,
``"5"``, ``"nan"``) reads back as that literal. Instruction names never look
like literals, but such symbols do not survive a write/read round trip.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List

from variation.exceptions import ProgramSyntaxError
from variation.program.model import Marker, Program, is_seq

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|\d+[eE][+-]?\d+)$")
_SPECIAL_FLOATS = {"inf": math.inf, "+inf": math.inf, "-inf": -math.inf, "nan": math.nan}
_FORBIDDEN_SYMBOL_CHARS = re.compile(r"[\s()]")
_DONE = object()


def atom_to_text(atom) -> str:
    if isinstance(atom, bool):
        return "true" if atom else "false"
    if isinstance(atom, (int, float)):
        return repr(atom)
    if isinstance(atom, Marker):
        raise ProgramSyntaxError(f"Structural marker {atom!r} has no text form")
    if isinstance(atom, str):
        if not atom or _FORBIDDEN_SYMBOL_CHARS.search(atom):
            raise ProgramSyntaxError(f"Symbol {atom!r} cannot be written as Push text")
        return atom
    raise ProgramSyntaxError(f"Unsupported atom type {type(atom).__name__}: {atom!r}")


def program_to_text(program: Program) -> str:
    """Render a program as Push text."""
    if not is_seq(program):
        return atom_to_text(program)
    pieces = ["("]
    stack = [iter(program)]
    need_space = False
    while stack:
        node = next(stack[-1], _DONE)
        if node is _DONE:
            stack.pop()
            pieces.append(")")
            need_space = True
            continue
        if need_space:
            pieces.append(" ")
        if is_seq(node):
            pieces.append("(")
            stack.append(iter(node))
            need_space = False
        else:
            pieces.append(atom_to_text(node))
            need_space = True
    return "".join(pieces)


def tokenize(text: str) -> List[str]:
    return text.replace("(", " ( ").replace(")", " ) ").split()


def parse_atom(token: str):
    if token == "true":
        return True
    if token == "false":
        return False
    if _INT_RE.match(token):
        return int(token)
    if _FLOAT_RE.match(token):
        return float(token)
    special = _SPECIAL_FLOATS.get(token)
    if special is not None:
        return special
    return token


def parse_program(text: str) -> Program:
    """Read the first form of Push text into a program.

    Anything after the first complete form is ignored.

    Raises:
        ProgramSyntaxError: If the text is empty or the first form is unbalanced
    """
    tokens = tokenize(text)
    if not tokens:
        raise ProgramSyntaxError("Cannot read a program from empty text")
    if tokens[0] == ")":
        raise ProgramSyntaxError(f"Unmatched ')' at start of {text!r}")
    if tokens[0] != "(":
        return parse_atom(tokens[0])

    stack: List[list] = []
    for position, token in enumerate(tokens):
        if token == "(":
            stack.append([])
        elif token == ")":
            finished = tuple(stack.pop())
            if not stack:
                if position + 1 < len(tokens):
                    logger.debug("Ignoring %d tokens after first form", len(tokens) - position - 1)
                return finished
            stack[-1].append(finished)
        else:
            stack[-1].append(parse_atom(token))
    raise ProgramSyntaxError(f"Unbalanced parentheses in {text!r}")
