from exprcalc.errors import CalculatorError
from exprcalc.parser import DEFAULT_MAX_DEPTH, parse
from exprcalc.runtime import evaluate
from exprcalc.tokenizer import tokenize


def calculate(code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> float:
    """Evaluates an arithmetic expression like ``"2 + 3 * sqrt(16)"``.

    Raises TokenizerError, ParserError or CalcRuntimeError, all subclasses of
    CalculatorError. Never returns NaN or infinity.
    """
    return evaluate(parse(tokenize(code), max_depth=max_depth))


def try_calculate(code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> float | CalculatorError:
    """Same as calculate, but the error is returned instead of raised"""
    try:
        return calculate(code, max_depth=max_depth)
    except CalculatorError as e:
        return e


def format_result(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
