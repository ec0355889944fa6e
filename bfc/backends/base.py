from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from ..intermediate import CellOp, Input, Loop, Output, PointerMove, Program, RawInsert, Statement

logger = logging.getLogger(__name__)


@dataclass
class EmitState:
    lines: List[str] = field(default_factory=list)
    depth: int = 0


class CodeGenerator:
    """Backend-independent walk over the IR.

    Subclasses supply the translation of each statement kind as a list of
    lines; indentation follows loop depth and is applied here.
    """

    extension = ""
    body_depth = 1

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent

    def generate(self, program: Program, pre: int, post: int) -> str:
        _check_tape_size(pre, "pre")
        _check_tape_size(post, "post")
        state = EmitState()
        state.lines.extend(self._prologue(pre, post))
        state.depth = self.body_depth
        self._emit_block(program.statements, state)
        state.depth = 0
        state.lines.extend(self._epilogue())
        logger.debug(
            "Generated %d lines of %s for a %d cell tape",
            len(state.lines),
            type(self).__name__,
            pre + post,
        )
        return "\n".join(state.lines) + "\n"

    # --- Tree walk ---

    def _emit_block(self, statements: Iterable[Statement], state: EmitState) -> None:
        stack: List[Iterator[Statement]] = [iter(statements)]
        base_depth = state.depth
        while stack:
            state.depth = base_depth + len(stack) - 1
            stmt = next(stack[-1], None)
            if stmt is None:
                stack.pop()
                if stack:
                    state.depth -= 1
                    self._write(self._loop_close(), state)
                continue
            if isinstance(stmt, Loop):
                self._write(self._loop_open(), state)
                stack.append(iter(stmt.body))
            else:
                self._write(self._translate(stmt), state)
        state.depth = base_depth

    def _translate(self, stmt: Statement) -> List[str]:
        if isinstance(stmt, PointerMove):
            return self._pointer_move(stmt.offset)
        if isinstance(stmt, CellOp):
            return self._cell_op(stmt)
        if isinstance(stmt, Output):
            return self._output()
        if isinstance(stmt, Input):
            return self._input()
        if isinstance(stmt, RawInsert):
            return self._raw_insert(stmt.text)
        raise TypeError(f"Unhandled statement type: {stmt!r}")

    def _write(self, lines: Iterable[str], state: EmitState) -> None:
        prefix = self.indent * state.depth
        for line in lines:
            state.lines.append(prefix + line if line else "")

    # --- Backend hooks ---

    def _prologue(self, pre: int, post: int) -> List[str]:
        raise NotImplementedError

    def _epilogue(self) -> List[str]:
        raise NotImplementedError

    def _pointer_move(self, offset: int) -> List[str]:
        raise NotImplementedError

    def _cell_op(self, stmt: CellOp) -> List[str]:
        raise NotImplementedError

    def _output(self) -> List[str]:
        raise NotImplementedError

    def _input(self) -> List[str]:
        raise NotImplementedError

    def _loop_open(self) -> List[str]:
        raise NotImplementedError

    def _loop_close(self) -> List[str]:
        raise NotImplementedError

    def _raw_insert(self, text: str) -> List[str]:
        raise NotImplementedError


def _check_tape_size(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


__all__ = ["CodeGenerator", "EmitState"]
