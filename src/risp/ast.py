"""AST nodes for the risp S-expression language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class List:
    items: tuple["AstNode", ...] = ()

    def __str__(self) -> str:
        return f"({' '.join(str(item) for item in self.items)})"


@dataclass(frozen=True)
class Num:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Sym:
    name: bytes

    def __str__(self) -> str:
        return self.name.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Str:
    value: bytes

    def __str__(self) -> str:
        return f'"{self.value.decode("utf-8", errors="replace")}"'


AstNode = Union[List, Num, Sym, Str]


def render(node: AstNode) -> str:
    """Canonical display form; whitespace is normalized to single spaces."""
    return str(node)
