"""Structured error types for parser/evaluator separation."""

from __future__ import annotations


class RispError(Exception):
    """Base class for structured risp errors."""


class ParseError(RispError, SyntaxError):
    """Tokenizer or top-level parse failure; evaluation is never attempted."""

    message = "unable to parse S expression"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CannotParseEmpty(ParseError):
    message = "unparseable empty expression passed in"


class MissingLeftParenthesis(ParseError):
    message = "missing left parenthesis in S expression"


class MissingRightParenthesis(ParseError):
    message = "missing right parenthesis in S expression"


class MissingDoubleQuote(ParseError):
    message = "missing closing double quote in string literal"


class StringDidntEnd(ParseError):
    message = "string literal must be followed by whitespace, ')' or end of input"


class ForbiddenCharInSymbol(ParseError):
    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"forbidden char in symbol {char!r}")


class CannotParseNumber(ParseError):
    def __init__(self, text: str) -> None:
        super().__init__(f"unable to parse number {text!r}")
        # Overrides SyntaxError.text, which would otherwise hold a source line.
        self.text = text


class NotAnSExpression(ParseError):
    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"top-level form is not an S expression: {node}")


class UnexpectedTrailingInput(ParseError):
    def __init__(self, rest: bytes) -> None:
        self.rest = rest
        text = rest.decode("utf-8", errors="replace")
        super().__init__(f"unexpected input after top-level form: {text!r}")


class EvalError(RispError):
    """Evaluation failure after a successful parse."""


class UnableToEvalFunction(EvalError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"there are no available functions with name: {name}")


class InvalidArguments(EvalError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid arguments: {reason}")


class CannotEvaluateEmptyList(InvalidArguments):
    def __init__(self) -> None:
        super().__init__("cannot evaluate empty list")


class CannotEvaluateNonSymbol(InvalidArguments):
    def __init__(self, head: object) -> None:
        self.head = head
        super().__init__(f"cannot evaluate non-symbol {head} in operator position")
