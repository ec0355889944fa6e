"""Structural parser turning Brainfuck source into the intermediate representation.

Grammar::

    Program    := (Whitespace? Statement Whitespace?)*
    Statement  := '>' | '<' | '+' | '-' | ',' | '.' | Loop | RawInsert
    Loop       := '[' Program ']'
    RawInsert  := '::' <any text not containing '::'> '::'
    Whitespace := (' ' | '\\t' | '\\r' | '\\n')+ | '#' <any text not containing '#'> '#'

Open loops are tracked on an explicit stack, so nesting depth is limited by
memory rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .intermediate import CellOp, Input, Loop, Op, Output, PointerMove, Program, RawInsert, Statement

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"
COMMENT_DELIMITER = "#"
INSERT_DELIMITER = "::"

_SIMPLE_STATEMENTS: Dict[str, Statement] = {
    ">": PointerMove(1),
    "<": PointerMove(-1),
    "+": CellOp(Op.ADD, 1),
    "-": CellOp(Op.ADD, -1),
    ",": Input(),
    ".": Output(),
}


class ParseError(Exception):
    """Raised when the source cannot be consumed as a whole program.

    ``remaining`` holds the exact unconsumed text from the offending position.
    """

    def __init__(self, reason: str, source: str, position: int) -> None:
        self.reason = reason
        self.position = position
        self.remaining = source[position:]
        self.line = source.count("\n", 0, position) + 1
        self.column = position - (source.rfind("\n", 0, position) + 1) + 1
        super().__init__(
            f"{reason} at line {self.line}, column {self.column}: {_preview(self.remaining)!r}"
        )


def _preview(text: str, limit: int = 20) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class Parser:
    def parse(self, source: str) -> Program:
        self.source = source
        self.pos = 0
        # (position of '[', statements of the enclosing block)
        open_loops: List[Tuple[int, List[Statement]]] = []
        statements: List[Statement] = []

        while True:
            self._skip_whitespace()
            char = self._peek()
            if char is None:
                break
            simple = _SIMPLE_STATEMENTS.get(char)
            if simple is not None:
                statements.append(simple)
                self.pos += 1
            elif source.startswith(INSERT_DELIMITER, self.pos):
                statements.append(self._parse_insert())
            elif char == "[":
                open_loops.append((self.pos, statements))
                statements = []
                self.pos += 1
            elif char == "]":
                if not open_loops:
                    raise ParseError("Unexpected ']' without matching '['", source, self.pos)
                _, enclosing = open_loops.pop()
                enclosing.append(Loop(statements))
                statements = enclosing
                self.pos += 1
            elif char == COMMENT_DELIMITER:
                raise ParseError("Unterminated comment", source, self.pos)
            else:
                raise ParseError(f"Unexpected character {char!r}", source, self.pos)

        if open_loops:
            raise ParseError("Unterminated loop, missing ']'", source, open_loops[0][0])

        program = Program(statements)
        logger.debug("Parsed %d top-level statements from %d characters", len(program), len(source))
        return program

    def _peek(self) -> Optional[str]:
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char in WHITESPACE:
                self.pos += 1
            elif char == COMMENT_DELIMITER:
                end = self.source.find(COMMENT_DELIMITER, self.pos + 1)
                if end == -1:
                    # Left for the statement loop to report.
                    return
                self.pos = end + 1
            else:
                return

    def _parse_insert(self) -> RawInsert:
        start = self.pos
        text_start = start + len(INSERT_DELIMITER)
        end = self.source.find(INSERT_DELIMITER, text_start)
        if end == -1:
            raise ParseError("Unterminated raw insert, missing '::'", self.source, start)
        self.pos = end + len(INSERT_DELIMITER)
        return RawInsert(self.source[text_start:end])


def parse(source: str) -> Program:
    return Parser().parse(source)


__all__ = [
    "COMMENT_DELIMITER",
    "INSERT_DELIMITER",
    "ParseError",
    "Parser",
    "parse",
]
