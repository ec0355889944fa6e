from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _check_int32(value: int, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if not (INT32_MIN <= value <= INT32_MAX):
        raise ValueError(f"{field_name} out of 32-bit signed range: {value}")


class Op(str, Enum):
    ADD = "+"
    MUL = "*"
    DIV = "/"
    MOD = "%"


# === IR Nodes ===


class Statement:
    pass


@dataclass(frozen=True)
class PointerMove(Statement):
    offset: int

    def __post_init__(self) -> None:
        _check_int32(self.offset, "offset")


@dataclass(frozen=True)
class CellOp(Statement):
    op: Op
    operand: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Op(self.op))
        _check_int32(self.operand, "operand")


@dataclass(frozen=True)
class Output(Statement):
    pass


@dataclass(frozen=True)
class Input(Statement):
    pass


@dataclass(frozen=True)
class Loop(Statement):
    """Repeats ``body`` while the active cell is non-zero."""

    body: Tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))


@dataclass(frozen=True)
class RawInsert(Statement):
    """Target-language text spliced into generated output unmodified."""

    text: str


@dataclass(frozen=True)
class Program:
    statements: Tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __str__(self) -> str:
        from .display import format_program

        return format_program(self)


def walk(statements: Iterable[Statement]) -> Iterator[Statement]:
    """Yield every statement in source order, descending into loop bodies."""
    stack = [iter(statements)]
    while stack:
        stmt = next(stack[-1], None)
        if stmt is None:
            stack.pop()
            continue
        yield stmt
        if isinstance(stmt, Loop):
            stack.append(iter(stmt.body))


__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "CellOp",
    "Input",
    "Loop",
    "Op",
    "Output",
    "PointerMove",
    "Program",
    "RawInsert",
    "Statement",
    "walk",
]
