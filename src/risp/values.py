"""Runtime value model and validators for the risp evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union

from .ast import AstNode, Num, Str

INT_MIN: Final[int] = -(2**63)
INT_MAX: Final[int] = 2**63 - 1


@dataclass(frozen=True)
class NumValue:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StrValue:
    value: bytes

    def __str__(self) -> str:
        return f'"{self.value.decode("utf-8", errors="replace")}"'


@dataclass(frozen=True)
class ListValue:
    """List-valued result; representable, though no built-in produces one."""

    items: tuple["Value", ...] = ()

    def __str__(self) -> str:
        return f"({' '.join(str(item) for item in self.items)})"


Value = Union[NumValue, StrValue, ListValue]


class ValueKind(str, Enum):
    NUM = "num"
    STR = "str"
    LIST = "list"


def in_int_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def kind_of(value: object) -> ValueKind:
    if isinstance(value, NumValue):
        return ValueKind.NUM
    if isinstance(value, StrValue):
        return ValueKind.STR
    if isinstance(value, ListValue):
        return ValueKind.LIST
    raise TypeError(f"unsupported runtime type {type(value).__name__}")


def validate_value(value: object, *, where: str = "value") -> None:
    if isinstance(value, NumValue):
        if isinstance(value.value, bool) or not isinstance(value.value, int):
            raise TypeError(f"{where} holds a non-integer number {value.value!r}")
        if not in_int_range(value.value):
            raise TypeError(f"{where} is outside the 64-bit signed range")
        return
    if isinstance(value, StrValue):
        if not isinstance(value.value, bytes):
            raise TypeError(f"{where} holds non-bytes string contents")
        return
    if isinstance(value, ListValue):
        for idx, item in enumerate(value.items):
            validate_value(item, where=f"{where}[{idx}]")
        return
    raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")


def as_value(node: AstNode) -> Value:
    """Convert a literal node into the corresponding runtime value."""
    if isinstance(node, Num):
        return NumValue(node.value)
    if isinstance(node, Str):
        return StrValue(node.value)
    raise TypeError(f"{type(node).__name__} node is not a literal")
