"""risp public API."""

from .ast import AstNode, List, Num, Str, Sym, render
from .errors import (
    CannotEvaluateEmptyList,
    CannotEvaluateNonSymbol,
    CannotParseEmpty,
    CannotParseNumber,
    EvalError,
    ForbiddenCharInSymbol,
    InvalidArguments,
    MissingDoubleQuote,
    MissingLeftParenthesis,
    MissingRightParenthesis,
    NotAnSExpression,
    ParseError,
    RispError,
    StringDidntEnd,
    UnableToEvalFunction,
    UnexpectedTrailingInput,
)
from .evaluator import StatefulEvaluate, eval_node, evaluate
from .namespace import GlobalNamespace, PrimitiveFunction
from .tokenizer import AstToken, Parsed, ParsedRest, parse, parse_program, tokenize
from .values import ListValue, NumValue, StrValue, Value

__all__ = [
    "tokenize",
    "parse",
    "parse_program",
    "eval_node",
    "evaluate",
    "StatefulEvaluate",
    "GlobalNamespace",
    "PrimitiveFunction",
    "render",
    "AstNode",
    "AstToken",
    "Parsed",
    "ParsedRest",
    "List",
    "Num",
    "Sym",
    "Str",
    "Value",
    "NumValue",
    "StrValue",
    "ListValue",
    "RispError",
    "ParseError",
    "CannotParseEmpty",
    "MissingLeftParenthesis",
    "MissingRightParenthesis",
    "ForbiddenCharInSymbol",
    "CannotParseNumber",
    "MissingDoubleQuote",
    "StringDidntEnd",
    "NotAnSExpression",
    "UnexpectedTrailingInput",
    "EvalError",
    "UnableToEvalFunction",
    "InvalidArguments",
    "CannotEvaluateEmptyList",
    "CannotEvaluateNonSymbol",
]
