import math
from typing import Callable

from exprcalc.builtins import BUILTIN_FUNCS
from exprcalc.errors import CalcRuntimeError, ErrorKind
from exprcalc.parser import BinaryOperation, BinaryOperator, Call, Expression, Literal, UnaryOperation, UnaryOperator

BinaryOperationImpl = Callable[[float, float], float]
UnaryOperationImpl = Callable[[float], float]


def evaluate(expression: Expression) -> float:
    """Evaluates the tree bottom-up.

    Walks with an explicit stack rather than recursion, so long left-associative
    chains like ``1 + 1 + ... + 1`` are not limited by the interpreter's stack.
    """
    results: list[float] = []
    pending: list[tuple[Expression, bool]] = [(expression, False)]
    while pending:
        node, operands_ready = pending.pop()
        if isinstance(node, Literal):
            results.append(_ensure_finite(node.value, "Number literal"))
        elif operands_ready:
            results.append(_apply(node, results))
        else:
            pending.append((node, True))
            for operand in reversed(_operands(node)):
                pending.append((operand, False))

    if len(results) != 1:
        raise RuntimeError(f"Internal error, {len(results)} values left after evaluation")
    return results[0]


def _operands(expression: Expression) -> list[Expression]:
    if isinstance(expression, BinaryOperation):
        return [expression.left, expression.right]
    elif isinstance(expression, UnaryOperation):
        return [expression.operand]
    elif isinstance(expression, Call):
        return [expression.argument]
    else:
        raise RuntimeError(f"Unexpected expression type: {expression}")


def _apply(expression: Expression, results: list[float]) -> float:
    """Pops operand values of ``expression`` off ``results`` and applies it"""
    if isinstance(expression, BinaryOperation):
        right = results.pop()
        left = results.pop()
        return eval_binary_operation(expression.operator, left, right)
    elif isinstance(expression, UnaryOperation):
        return eval_unary_operation(expression.operator, results.pop())
    elif isinstance(expression, Call):
        arg = results.pop()
        try:
            result = BUILTIN_FUNCS[expression.function](arg)
        except ValueError as e:
            raise CalcRuntimeError(str(e), kind=ErrorKind.DOMAIN_ERROR) from e
        except OverflowError as e:
            raise CalcRuntimeError(
                f"{expression.function.value}({arg!r}) is too large", kind=ErrorKind.NUMERIC_OVERFLOW
            ) from e
        return _ensure_finite(result, f"{expression.function.value}()")
    else:
        raise RuntimeError(f"Unexpected expression type: {expression}")


def _ensure_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise CalcRuntimeError(f"{what} overflowed to {value!r}", kind=ErrorKind.NUMERIC_OVERFLOW)
    return value


def _div(a: float, b: float) -> float:
    if b == 0:
        raise CalcRuntimeError(f"Division by zero: {a!r} / {b!r}", kind=ErrorKind.DIVISION_BY_ZERO)
    return a / b


def _pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except (OverflowError, ValueError) as e:
        # math.pow raises ValueError for results that are not real numbers, e.g. (-8)^0.5 or 0^-1
        raise CalcRuntimeError(f"Power {a!r}^{b!r} has no finite result", kind=ErrorKind.NUMERIC_OVERFLOW) from e


BINARY_OPERATION_IMPLS: dict[BinaryOperator, tuple[str, BinaryOperationImpl]] = {
    BinaryOperator.ADD: ("Addition", lambda a, b: a + b),
    BinaryOperator.SUB: ("Subtraction", lambda a, b: a - b),
    BinaryOperator.MUL: ("Multiplication", lambda a, b: a * b),
    BinaryOperator.DIV: ("Division", _div),
    BinaryOperator.POW: ("Power", _pow),
}

UNARY_OPERATION_IMPLS: dict[UnaryOperator, tuple[str, UnaryOperationImpl]] = {
    UnaryOperator.NEG: ("Negation", lambda a: -a),
}


def eval_binary_operation(operator: BinaryOperator, a: float, b: float) -> float:
    op_name, impl = BINARY_OPERATION_IMPLS[operator]
    return _ensure_finite(impl(a, b), op_name)


def eval_unary_operation(operator: UnaryOperator, operand: float) -> float:
    op_name, impl = UNARY_OPERATION_IMPLS[operator]
    return _ensure_finite(impl(operand), op_name)
