# Pydantic data models for lint diagnostics: Span, Position, Range, Diagnostic.

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator
from tree_sitter import Node as TSNode


class Span(BaseModel):
    """Half-open byte range [lo, hi) into the program source."""

    lo: int = Field(..., ge=0)
    hi: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _ordered(self) -> "Span":
        if self.hi < self.lo:
            raise ValueError(f"span end {self.hi} precedes start {self.lo}")
        return self

    @classmethod
    def from_node(cls, node: TSNode) -> "Span":
        return cls(lo=node.start_byte, hi=node.end_byte)


class Position(BaseModel):
    """A resolved source position."""

    line: int = Field(..., ge=1, description="1-based line number")
    col: int = Field(..., ge=0, description="0-based column, in characters")
    byte_pos: int = Field(..., ge=0)

    model_config = {"frozen": True}


class Range(BaseModel):
    start: Position
    end: Position

    model_config = {"frozen": True}


class Diagnostic(BaseModel):
    """A single violation reported by a rule (e.g. `delete x` at 1:25)."""

    filename: str
    code: str
    message: str
    span: Span
    range: Range
    hint: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def line(self) -> int:
        return self.range.start.line

    @property
    def col(self) -> int:
        return self.range.start.col
