"""Tree-walking evaluator for risp S-expressions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Final

from .ast import AstNode, List, Num, Str, Sym
from .errors import CannotEvaluateEmptyList, CannotEvaluateNonSymbol, InvalidArguments
from .namespace import GlobalNamespace
from .tokenizer import parse_program
from .values import Value, as_value, validate_value

logger = logging.getLogger(__name__)

_PARSE_CACHE_MAX: Final[int] = max(1, int(os.environ.get("RISP_PARSE_CACHE_MAX", "256")))


@lru_cache(maxsize=_PARSE_CACHE_MAX)
def _parse_program_cached(source: bytes, allow_bare_atoms: bool | None) -> tuple[AstNode, ...]:
    return parse_program(source, allow_bare_atoms=allow_bare_atoms)


def eval_node(node: AstNode, namespace: GlobalNamespace) -> Value:
    if isinstance(node, (Num, Str)):
        return as_value(node)

    if isinstance(node, Sym):
        raise InvalidArguments(f"cannot evaluate plain symbol {node} since variables are not supported")

    if isinstance(node, List):
        if not node.items:
            raise CannotEvaluateEmptyList()
        head, *rest = node.items
        if not isinstance(head, Sym):
            raise CannotEvaluateNonSymbol(head)
        arguments = [eval_node(item, namespace) for item in rest]
        logger.debug("applying %s to %d argument(s)", head, len(arguments))
        result = namespace.invoke(head.name, arguments)
        validate_value(result, where=f"result of {head}")
        return result

    raise TypeError(f"Unsupported AST node: {type(node)!r}")


def _evaluate_forms(forms: tuple[AstNode, ...], namespace: GlobalNamespace) -> Value:
    # parse_program never returns an empty tuple.
    first, *rest = forms
    result = eval_node(first, namespace)
    for form in rest:
        result = eval_node(form, namespace)
    return result


def _source_bytes(source: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(source, str):
        return source.encode("ascii")
    return bytes(source)


@dataclass
class StatefulEvaluate:
    """Callable wrapper that evaluates source against one persistent namespace."""

    namespace: GlobalNamespace = field(default_factory=GlobalNamespace.default)
    allow_bare_atoms: bool | None = None

    def __call__(self, source: bytes | bytearray | memoryview | str) -> Value:
        return evaluate(source, self.namespace, allow_bare_atoms=self.allow_bare_atoms)


def evaluate(
    source: bytes | bytearray | memoryview | str,
    namespace: GlobalNamespace | None = None,
    *,
    allow_bare_atoms: bool | None = None,
) -> Value:
    """Parse every top-level form in ``source`` and evaluate them in order.

    The value of the last form is returned. Without an explicit namespace a
    fresh ``GlobalNamespace.default()`` is used. Parse errors surface before
    any form is evaluated.
    """
    forms = _parse_program_cached(_source_bytes(source), allow_bare_atoms)
    if namespace is None:
        namespace = GlobalNamespace.default()
    return _evaluate_forms(forms, namespace)
