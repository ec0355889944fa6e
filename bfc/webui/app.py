from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from bfc.backends import GENERATORS, Backend, compile_program
from bfc.compiler import DEFAULT_TAPE_LENGTH, BrainfuckCompiler, CompilerOptions
from bfc.intermediate import walk
from bfc.parser import ParseError

logger = logging.getLogger(__name__)


def _parse_error_detail(exc: ParseError) -> dict:
    return {
        "message": str(exc),
        "remaining": exc.remaining,
        "position": exc.position,
        "line": exc.line,
        "column": exc.column,
    }


class CompileRequest(BaseModel):
    source: str
    pre: int = Field(default=0, ge=0)
    post: int = Field(default=DEFAULT_TAPE_LENGTH, ge=0)
    backend: str = Backend.C99.value

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in {backend.value for backend in Backend}:
            choices = ", ".join(backend.value for backend in Backend)
            raise ValueError(f"backend must be one of: {choices}")
        return normalized


class CompileResponse(BaseModel):
    code: str
    extension: str
    backend: str
    statement_count: int


class FormatRequest(BaseModel):
    source: str


class FormatResponse(BaseModel):
    formatted: str


class BackendInfo(BaseModel):
    name: str
    extension: str


class BackendList(BaseModel):
    backends: List[BackendInfo]


def create_app() -> FastAPI:
    app = FastAPI(title="bfc compiler API", version="0.1.0")

    @app.get("/api/backends", response_model=BackendList)
    def list_backends() -> BackendList:
        return BackendList(
            backends=[
                BackendInfo(name=backend.value, extension=generator.extension)
                for backend, generator in GENERATORS.items()
            ]
        )

    @app.post("/api/compile", response_model=CompileResponse)
    def compile_source(payload: CompileRequest) -> CompileResponse:
        try:
            options = CompilerOptions(pre=payload.pre, post=payload.post, backend=payload.backend)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(exc),
            ) from exc

        compiler = BrainfuckCompiler(options)
        try:
            program = compiler.parse(payload.source)
        except ParseError as exc:
            logger.debug("Rejected source: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_parse_error_detail(exc),
            ) from exc

        code, extension = compile_program(
            program, options.pre, options.post, options.backend, indent=options.indent
        )
        return CompileResponse(
            code=code,
            extension=extension,
            backend=options.backend.value,
            statement_count=sum(1 for _ in walk(program)),
        )

    @app.post("/api/format", response_model=FormatResponse)
    def format_source(payload: FormatRequest) -> FormatResponse:
        try:
            formatted = BrainfuckCompiler().format(payload.source)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_parse_error_detail(exc),
            ) from exc
        return FormatResponse(formatted=formatted)

    return app


__all__ = ["create_app"]
