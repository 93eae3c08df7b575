import math
from typing import Callable, Optional

from exprcalc.utils import PrintableEnum


class BuiltinFunction(PrintableEnum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SQRT = "sqrt"
    EXP = "exp"
    LN = "ln"
    ABS = "abs"
    FLOOR = "floor"
    CEIL = "ceil"


BuiltinImpl = Callable[[float], float]

BUILTIN_FUNCS: dict[BuiltinFunction, BuiltinImpl] = dict()


def register_builtin_func(func: BuiltinFunction):
    """Registers the implementation of ``func``.

    Implementations return None for arguments outside of their domain, which is
    reported as ValueError to the caller.
    """

    def decorator(fn: Callable[[float], Optional[float]]) -> BuiltinImpl:
        def decorated(arg: float) -> float:
            maybe_res = fn(arg)
            if maybe_res is None:
                raise ValueError(f"{func.value}() is not defined for {arg!r}")
            else:
                return maybe_res

        BUILTIN_FUNCS[func] = decorated
        return decorated

    return decorator


@register_builtin_func(BuiltinFunction.SIN)
def sin_(arg: float) -> float:
    return math.sin(arg)


@register_builtin_func(BuiltinFunction.COS)
def cos_(arg: float) -> float:
    return math.cos(arg)


@register_builtin_func(BuiltinFunction.TAN)
def tan_(arg: float) -> float:
    return math.tan(arg)


@register_builtin_func(BuiltinFunction.ASIN)
def asin_(arg: float) -> float | None:
    if -1.0 <= arg <= 1.0:
        return math.asin(arg)
    else:
        return None


@register_builtin_func(BuiltinFunction.ACOS)
def acos_(arg: float) -> float | None:
    if -1.0 <= arg <= 1.0:
        return math.acos(arg)
    else:
        return None


@register_builtin_func(BuiltinFunction.ATAN)
def atan_(arg: float) -> float:
    return math.atan(arg)


@register_builtin_func(BuiltinFunction.SQRT)
def sqrt_(arg: float) -> float | None:
    if arg < 0:
        return None
    else:
        return math.sqrt(arg)


@register_builtin_func(BuiltinFunction.EXP)
def exp_(arg: float) -> float:
    # raises OverflowError past ~709.78
    return math.exp(arg)


@register_builtin_func(BuiltinFunction.LN)
def ln_(arg: float) -> float | None:
    if arg > 0:
        return math.log(arg)
    else:
        return None


@register_builtin_func(BuiltinFunction.ABS)
def abs_(arg: float) -> float:
    return abs(arg)


@register_builtin_func(BuiltinFunction.FLOOR)
def floor_(arg: float) -> float:
    return float(math.floor(arg))


@register_builtin_func(BuiltinFunction.CEIL)
def ceil_(arg: float) -> float:
    return float(math.ceil(arg))
