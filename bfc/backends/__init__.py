from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple, Type

from ..intermediate import Program
from .base import CodeGenerator, EmitState
from .c99 import C99Generator


class Backend(str, Enum):
    C99 = "c99"


GENERATORS: Dict[Backend, Type[CodeGenerator]] = {
    Backend.C99: C99Generator,
}


def get_generator(backend: Backend, indent: str = "    ") -> CodeGenerator:
    return GENERATORS[Backend(backend)](indent=indent)


def compile_program(
    program: Program,
    pre: int,
    post: int,
    backend: Backend = Backend.C99,
    *,
    indent: str = "    ",
) -> Tuple[str, str]:
    """Generate target source for ``program``; returns ``(code, extension)``."""
    generator = get_generator(backend, indent=indent)
    return generator.generate(program, pre, post), generator.extension


__all__ = [
    "Backend",
    "C99Generator",
    "CodeGenerator",
    "EmitState",
    "GENERATORS",
    "compile_program",
    "get_generator",
]
