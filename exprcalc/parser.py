import enum
from dataclasses import dataclass
from typing import Iterable

from exprcalc.builtins import BuiltinFunction
from exprcalc.errors import CalculatorError, ErrorKind
from exprcalc.tokenizer import Token, TokenType, untokenize
from exprcalc.utils import PrintableEnum, point_at

DEFAULT_MAX_DEPTH = 64
# each nesting level costs about six interpreter frames while parsing
MAX_DEPTH_LIMIT = 100


@dataclass
class ParserError(CalculatorError):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int
    kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN

    def __str__(self) -> str:
        if self.error_token_idx < len(self.tokens):
            error_token = self.tokens[self.error_token_idx]
            caret_idx = len(untokenize(self.tokens[: self.error_token_idx + 1])) - len(error_token.lexeme)
        else:
            caret_idx = len(untokenize(self.tokens)) + 1
        snippet, caret = point_at(untokenize(self.tokens), caret_idx)
        return "\n".join([f"Parser error: {self.errmsg}", snippet, caret])


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


@dataclass(frozen=True)
class Call:
    function: BuiltinFunction
    argument: "Expression"


Expression = Literal | BinaryOperation | UnaryOperation | Call


ADDITIVE_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}


@dataclass
class _ParseContext:
    tokens: list[Token]
    max_depth: int

    def peek(self, i: int) -> TokenType | None:
        return self.tokens[i].type if i < len(self.tokens) else None

    def error(self, errmsg: str, i: int) -> ParserError:
        return ParserError(errmsg, tokens=self.tokens, error_token_idx=i)


def parse(tokens: Iterable[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    """Builds an expression tree out of the whole token sequence.

    Grammar, from the loosest binding to the tightest:

        expression := term (('+' | '-') term)*
        term       := power (('*' | '/') power)*
        power      := unary ('^' power)?
        unary      := '-' unary | atom
        atom       := NUMBER | IDENTIFIER '(' expression ')' | '(' expression ')'

    ``max_depth`` limits nesting of brackets, calls, unary minuses and powers; values
    above MAX_DEPTH_LIMIT are lowered to it.
    """
    ctx = _ParseContext(tokens=list(tokens), max_depth=min(max_depth, MAX_DEPTH_LIMIT))
    try:
        expr, i = _consume_expression(ctx, 0, depth=0)
    except RecursionError:
        # the caller already used up most of the stack
        raise ctx.error("Expression is nested too deeply", 0) from None
    if i < len(ctx.tokens):
        if ctx.tokens[i].type is TokenType.BRACKET_CLOSE:
            raise ctx.error("Unmatched closing bracket", i)
        raise ctx.error(f"Binary operator expected, found {ctx.tokens[i].type}", i)
    return expr


def _check_depth(ctx: _ParseContext, i: int, depth: int) -> None:
    if depth > ctx.max_depth:
        raise ctx.error(f"Expression is nested too deeply (limit is {ctx.max_depth})", i)


def _consume_expression(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    left, i = _consume_term(ctx, i, depth)
    while ctx.peek(i) in ADDITIVE_OPERATORS:
        operator = ADDITIVE_OPERATORS[ctx.tokens[i].type]
        right, i = _consume_term(ctx, i + 1, depth)
        left = BinaryOperation(operator=operator, left=left, right=right)
    return left, i


def _consume_term(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    left, i = _consume_power(ctx, i, depth)
    while ctx.peek(i) in MULTIPLICATIVE_OPERATORS:
        operator = MULTIPLICATIVE_OPERATORS[ctx.tokens[i].type]
        right, i = _consume_power(ctx, i + 1, depth)
        left = BinaryOperation(operator=operator, left=left, right=right)
    return left, i


def _consume_power(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    base, i = _consume_unary(ctx, i, depth)
    if ctx.peek(i) is not TokenType.CARET:
        return base, i
    _check_depth(ctx, i, depth + 1)
    # right-associative: 2^3^2 == 2^(3^2)
    exponent, i = _consume_power(ctx, i + 1, depth + 1)
    return BinaryOperation(operator=BinaryOperator.POW, left=base, right=exponent), i


def _consume_unary(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    if ctx.peek(i) is not TokenType.MINUS:
        return _consume_atom(ctx, i, depth)
    _check_depth(ctx, i, depth + 1)
    operand, i = _consume_unary(ctx, i + 1, depth + 1)
    return UnaryOperation(operator=UnaryOperator.NEG, operand=operand), i


def _consume_atom(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    if i >= len(ctx.tokens):
        raise ctx.error("Unexpected end of expression, operand expected", i)
    first = ctx.tokens[i]
    if first.type is TokenType.NUMBER:
        return Literal(first.value), i + 1
    elif first.type is TokenType.IDENTIFIER:
        function = BuiltinFunction.lookup(first.lexeme)
        if function is None:
            raise ctx.error(f"Unknown function {first.lexeme!r}", i)
        if ctx.peek(i + 1) is not TokenType.BRACKET_OPEN:
            raise ctx.error(f"Expected '(' after function name {first.lexeme!r}", i + 1)
        argument, i = _consume_bracketed(ctx, i + 1, depth)
        return Call(function=function, argument=argument), i
    elif first.type is TokenType.BRACKET_OPEN:
        return _consume_bracketed(ctx, i, depth)
    else:
        raise ctx.error(f"Operand expected, found {first.type}", i)


def _consume_bracketed(ctx: _ParseContext, i: int, depth: int) -> tuple[Expression, int]:
    """``i`` points at the opening bracket"""
    _check_depth(ctx, i, depth + 1)
    if ctx.peek(i + 1) is TokenType.BRACKET_CLOSE:
        raise ctx.error("Empty parenthesis", i + 1)
    expr, j = _consume_expression(ctx, i + 1, depth + 1)
    if ctx.peek(j) is not TokenType.BRACKET_CLOSE:
        if j >= len(ctx.tokens):
            raise ctx.error("Unclosed bracket", i)
        raise ctx.error(f"Closing bracket expected, found {ctx.tokens[j].type}", j)
    return expr, j + 1


def render(expression: Expression) -> str:
    """Same text as ``repr(expression)``, built without recursion so that deep trees can be printed"""
    parts: list[str] = []
    pending: list[Expression | str] = [expression]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Literal):
            parts.append(repr(item))
        elif isinstance(item, BinaryOperation):
            pending.extend(
                reversed([f"BinaryOperation(operator={item.operator!r}, left=", item.left, ", right=", item.right, ")"])
            )
        elif isinstance(item, UnaryOperation):
            pending.extend(reversed([f"UnaryOperation(operator={item.operator!r}, operand=", item.operand, ")"]))
        elif isinstance(item, Call):
            pending.extend(reversed([f"Call(function={item.function!r}, argument=", item.argument, ")"]))
        else:
            raise RuntimeError(f"Unexpected expression type: {item!r}")
    return "".join(parts)
