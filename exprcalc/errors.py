"""Error types shared by all calculator stages."""

import enum
from dataclasses import dataclass

from exprcalc.utils import PrintableEnum


class ErrorKind(PrintableEnum):
    UNEXPECTED_CHARACTER = enum.auto()
    UNEXPECTED_TOKEN = enum.auto()
    DIVISION_BY_ZERO = enum.auto()
    DOMAIN_ERROR = enum.auto()
    NUMERIC_OVERFLOW = enum.auto()


class CalculatorError(Exception):
    """Base class for tokenizer, parser and runtime errors.

    Every subclass exposes ``kind`` so callers can branch on the failure category
    without caring which stage produced it.
    """

    kind: ErrorKind


@dataclass
class CalcRuntimeError(CalculatorError):
    errmsg: str
    kind: ErrorKind

    def __str__(self) -> str:
        return f"[Runtime error] {self.errmsg}"
