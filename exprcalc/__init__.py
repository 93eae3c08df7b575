from exprcalc.calculator import calculate, format_result, try_calculate
from exprcalc.errors import CalcRuntimeError, CalculatorError, ErrorKind
from exprcalc.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, ParserError
from exprcalc.tokenizer import TokenizerError

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "CalcRuntimeError",
    "CalculatorError",
    "ErrorKind",
    "ParserError",
    "TokenizerError",
    "calculate",
    "format_result",
    "try_calculate",
]
