from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .backends import Backend, compile_program
from .display import format_program
from .intermediate import Program
from .parser import Parser

logger = logging.getLogger(__name__)

DEFAULT_TAPE_LENGTH = 30000


@dataclass
class CompilerOptions:
    pre: int = 0
    post: int = DEFAULT_TAPE_LENGTH
    backend: Backend = Backend.C99
    indent: str = "    "

    def __post_init__(self) -> None:
        for name in ("pre", "post"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.pre + self.post == 0:
            raise ValueError("tape must have at least one cell (pre + post > 0)")
        try:
            self.backend = Backend(self.backend)
        except ValueError as exc:
            choices = ", ".join(b.value for b in Backend)
            raise ValueError(f"Unknown backend '{self.backend}' (choose from: {choices})") from exc


@dataclass(frozen=True)
class CompileResult:
    code: str
    extension: str


class BrainfuckCompiler:
    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()
        self.parser = Parser()

    def parse(self, source: str) -> Program:
        return self.parser.parse(source)

    def format(self, source: str) -> str:
        return format_program(self.parse(source))

    def compile(self, source: str) -> CompileResult:
        program = self.parse(source)
        options = self.options
        logger.debug(
            "Compiling for %s with pre=%d post=%d",
            options.backend.value,
            options.pre,
            options.post,
        )
        code, extension = compile_program(
            program,
            options.pre,
            options.post,
            options.backend,
            indent=options.indent,
        )
        return CompileResult(code=code, extension=extension)


__all__ = [
    "BrainfuckCompiler",
    "CompileResult",
    "CompilerOptions",
    "DEFAULT_TAPE_LENGTH",
]
