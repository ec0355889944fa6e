from .backends import Backend, compile_program
from .compiler import BrainfuckCompiler, CompileResult, CompilerOptions
from .display import format_program
from .intermediate import CellOp, Input, Loop, Op, Output, PointerMove, Program, RawInsert, Statement
from .parser import ParseError, Parser, parse

__all__ = [
    "Backend",
    "BrainfuckCompiler",
    "CellOp",
    "CompileResult",
    "CompilerOptions",
    "Input",
    "Loop",
    "Op",
    "Output",
    "ParseError",
    "Parser",
    "PointerMove",
    "Program",
    "RawInsert",
    "Statement",
    "compile_program",
    "format_program",
    "parse",
]
