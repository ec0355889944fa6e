"""Render the intermediate representation back to Brainfuck surface syntax.

Bare single-character spellings are used wherever the statement has one;
everything else gets an explicit ``symbol(value)`` form so the output stays
a faithful picture of the tree, e.g. ``>(5)`` or ``*(3)``.
"""

from __future__ import annotations

from typing import Iterable, List

from .intermediate import CellOp, Input, Loop, Op, Output, PointerMove, Program, RawInsert, Statement


def format_statement(stmt: Statement) -> str:
    if isinstance(stmt, Loop):
        return "[" + format_statements(stmt.body) + "]"
    if isinstance(stmt, PointerMove):
        if stmt.offset == 1:
            return ">"
        if stmt.offset == -1:
            return "<"
        if stmt.offset == 0:
            return ""
        arrow = ">" if stmt.offset > 0 else "<"
        return f"{arrow}({stmt.offset})"
    if isinstance(stmt, CellOp):
        if stmt.op is Op.ADD and stmt.operand == 1:
            return "+"
        if stmt.op is Op.ADD and stmt.operand == -1:
            return "-"
        return f"{stmt.op.value}({stmt.operand})"
    if isinstance(stmt, Output):
        return "."
    if isinstance(stmt, Input):
        return ","
    if isinstance(stmt, RawInsert):
        return f"::{stmt.text}::"
    raise TypeError(f"Unhandled statement type: {stmt!r}")


def format_statements(statements: Iterable[Statement]) -> str:
    pieces: List[str] = []
    stack = [iter(statements)]
    while stack:
        stmt = next(stack[-1], None)
        if stmt is None:
            stack.pop()
            if stack:
                pieces.append("]")
            continue
        if isinstance(stmt, Loop):
            pieces.append("[")
            stack.append(iter(stmt.body))
        else:
            pieces.append(format_statement(stmt))
    return "".join(pieces)


def format_program(program: Program) -> str:
    return format_statements(program.statements)


__all__ = ["format_program", "format_statement", "format_statements"]
