"""Function registry consulted by the evaluator, seeded with built-in primitives."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Protocol

from .errors import InvalidArguments, UnableToEvalFunction
from .values import NumValue, Value, ValueKind, in_int_range, kind_of

logger = logging.getLogger(__name__)


class NativeFunction(Protocol):
    def __call__(self, arguments: Sequence[Value]) -> Value:
        ...


@dataclass(frozen=True)
class PrimitiveFunction:
    name: str
    fn: Callable[[Sequence[Value]], Value]

    def __call__(self, arguments: Sequence[Value]) -> Value:
        return self.fn(arguments)


def _as_key(key: bytes | bytearray | str) -> bytes:
    if isinstance(key, str):
        return key.encode("ascii")
    return bytes(key)


def _numeric_arguments(arguments: Sequence[Value], *, where: str) -> list[int]:
    numbers: list[int] = []
    for idx, arg in enumerate(arguments):
        kind = kind_of(arg)
        if kind is not ValueKind.NUM:
            raise InvalidArguments(f"non-number {kind.value} value {arg} at position {idx} in {where}")
        numbers.append(arg.value)
    return numbers


def _arithmetic(name: str, op: Callable[[int, int], int], identity: int) -> PrimitiveFunction:
    def fold(arguments: Sequence[Value]) -> Value:
        result = reduce(op, _numeric_arguments(arguments, where=f"{name} operation"), identity)
        if not in_int_range(result):
            raise InvalidArguments(f"integer overflow in {name} operation")
        return NumValue(result)

    return PrimitiveFunction(name=name, fn=fold)


def _builtin_primitives() -> dict[bytes, PrimitiveFunction]:
    return {
        b"+": _arithmetic("+", lambda acc, x: acc + x, 0),
        b"*": _arithmetic("*", lambda acc, x: acc * x, 1),
    }


class GlobalNamespace(Mapping[bytes, NativeFunction]):
    """Name-to-callable table for one evaluation session.

    Entries are only ever added or replaced through ``defn``; nothing is
    removed. Use one instance per session, or serialize access to a shared one.
    """

    def __init__(self) -> None:
        self._functions: dict[bytes, NativeFunction] = {}

    @classmethod
    def empty(cls) -> "GlobalNamespace":
        return cls()

    @classmethod
    def default(cls) -> "GlobalNamespace":
        namespace = cls.empty()
        for key, function in _builtin_primitives().items():
            namespace.defn(key, function)
        return namespace

    def defn(self, key: bytes | bytearray | str, function: NativeFunction) -> None:
        if not callable(function):
            raise TypeError(f"function for {key!r} must be callable")
        name = _as_key(key)
        if name in self._functions:
            logger.debug("redefining function %r", name)
        else:
            logger.debug("registering function %r", name)
        self._functions[name] = function

    def invoke(self, key: bytes | bytearray | str, arguments: Sequence[Value]) -> Value:
        name = _as_key(key)
        function = self._functions.get(name)
        if function is None:
            raise UnableToEvalFunction(name.decode("utf-8", errors="replace"))
        logger.debug("invoking %r with %d argument(s)", name, len(arguments))
        return function(arguments)

    def __getitem__(self, key: bytes | bytearray | str) -> NativeFunction:
        return self._functions[_as_key(key)]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray, str)):
            return False
        return _as_key(key) in self._functions
