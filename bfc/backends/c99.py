"""C99 backend.

Produces a standalone single-file program: a zeroed ``unsigned char`` tape
of ``pre + post`` cells with the pointer starting ``pre`` cells in.
"""

from __future__ import annotations

from typing import List

from ..intermediate import CellOp
from .base import CodeGenerator

INSERT_START = "/* Start of inserted section */"
INSERT_END = "/* End of inserted section */"


class C99Generator(CodeGenerator):
    extension = "c"

    def _prologue(self, pre: int, post: int) -> List[str]:
        pointer_init = "cells" if pre == 0 else f"cells + {pre}"
        return [
            "#include <stdio.h>",
            "",
            "int main(void) {",
            f"{self.indent}static unsigned char cells[{pre + post}] = {{0}};",
            f"{self.indent}unsigned char *ptr = {pointer_init};",
        ]

    def _epilogue(self) -> List[str]:
        return [f"{self.indent}return 0;", "}"]

    def _pointer_move(self, offset: int) -> List[str]:
        # abs() on a Python int cannot overflow, so INT32_MIN keeps its magnitude.
        if offset > 0:
            return [f"ptr += {offset};"]
        if offset < 0:
            return [f"ptr -= {abs(offset)};"]
        return ["/* redundant pointer move */"]

    def _cell_op(self, stmt: CellOp) -> List[str]:
        return [f"*ptr {stmt.op.value}= {stmt.operand};"]

    def _output(self) -> List[str]:
        return ["putchar(*ptr);"]

    def _input(self) -> List[str]:
        return ["*ptr = getchar();"]

    def _loop_open(self) -> List[str]:
        return ["while (*ptr) {"]

    def _loop_close(self) -> List[str]:
        return ["}"]

    def _raw_insert(self, text: str) -> List[str]:
        return [INSERT_START, *text.split("\n"), INSERT_END]


__all__ = ["C99Generator", "INSERT_END", "INSERT_START"]
