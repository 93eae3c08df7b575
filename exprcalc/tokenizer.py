import enum
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from exprcalc.errors import CalculatorError, ErrorKind
from exprcalc.utils import PrintableEnum, point_at


@dataclass
class TokenizerError(CalculatorError):
    errmsg: str
    code: str
    error_char_idx: int
    kind: ErrorKind = ErrorKind.UNEXPECTED_CHARACTER

    def __str__(self) -> str:
        snippet, caret = point_at(self.code, self.error_char_idx)
        return "\n".join([f"[Tokenizer error] {self.errmsg}", snippet, caret])


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    IDENTIFIER = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int = 0

    @property
    def value(self) -> float:
        if self.type is not TokenType.NUMBER:
            raise ValueError(f"{self.type} token has no numeric value")
        return float(self.lexeme)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


NUMBER_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")
IDENTIFIER_PATTERN = re.compile(r"[a-z]+")

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


def tokenize(code: str) -> Iterator[Token]:
    """Lazily splits ``code`` into tokens, left to right.

    The error for an unexpected character is raised only when the consumer reaches it.
    """
    i = 0
    while i < len(code):
        if code[i].isspace():
            i += 1
            continue

        number_match = NUMBER_PATTERN.match(code, i)
        if number_match:
            yield Token(type=TokenType.NUMBER, lexeme=number_match.group(), position=i)
            i = number_match.end()
            continue

        identifier_match = IDENTIFIER_PATTERN.match(code, i)
        if identifier_match:
            yield Token(type=TokenType.IDENTIFIER, lexeme=identifier_match.group(), position=i)
            i = identifier_match.end()
            continue

        if code[i] in SINGLE_CHAR_TOKENS:
            yield Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i], position=i)
            i += 1
            continue

        raise TokenizerError(f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i)


def untokenize(tokens: Iterable[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)

    # sqrt ( 4 ) => sqrt(4)
    result = re.sub(r"([a-z])\s+\(", r"\1(", result)

    # 4 ^ 5 => 4^5
    result = re.sub(r"\s*\^\s*", "^", result)
    return result
