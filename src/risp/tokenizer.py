"""Remainder-style reader for risp S-expressions.

``tokenize`` consumes one node from the front of a byte buffer and hands back
whatever it did not consume, so a caller walks a sequence of sibling forms by
re-entering ``tokenize`` on each remainder instead of sharing a cursor.

Internally the scanners walk one immutable buffer by integer position and
slice only to build node contents and the final remainder.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Final, Union

from .ast import AstNode, List, Num, Str, Sym
from .errors import (
    CannotParseEmpty,
    CannotParseNumber,
    ForbiddenCharInSymbol,
    MissingDoubleQuote,
    MissingLeftParenthesis,
    MissingRightParenthesis,
    NotAnSExpression,
    StringDidntEnd,
    UnexpectedTrailingInput,
)
from .values import in_int_range

# bytes.isspace() also accepts \x0b, which is not ASCII whitespace here.
ASCII_WHITESPACE: Final[bytes] = b" \t\n\r\x0c"
FORBIDDEN_CHARS: Final[bytes] = b'()"\''

_ALLOW_BARE_ATOMS: Final[bool] = os.environ.get("RISP_ALLOW_BARE_ATOMS", "0") == "1"

_INTEGER_RE = re.compile(rb"-?[0-9]+\Z")
_ATOM_CUT_RE = re.compile(rb"[ \t\n\r\x0c)]")
_WHITESPACE_RE = re.compile(rb"[ \t\n\r\x0c]*")
_NUMERIC_START = frozenset(b"-0123456789")

_LPAREN = ord("(")
_RPAREN = ord(")")
_QUOTE = ord('"')


@dataclass(frozen=True)
class Parsed:
    node: AstNode


@dataclass(frozen=True)
class ParsedRest:
    node: AstNode
    rest: bytes


AstToken = Union[Parsed, ParsedRest]


def _as_bytes(source: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(source, str):
        return source.encode("ascii")
    return bytes(source)


def _content_end(buffer: bytes) -> int:
    end = len(buffer)
    while end > 0 and buffer[end - 1] in ASCII_WHITESPACE:
        end -= 1
    return end


def _skip_whitespace(buffer: bytes, pos: int, end: int) -> int:
    return _WHITESPACE_RE.match(buffer, pos, end).end()


def _scan_string(buffer: bytes, start: int, end: int) -> tuple[AstNode, int]:
    close = buffer.find(b'"', start + 1, end)
    if close == -1:
        raise MissingDoubleQuote()
    after = close + 1
    if after < end and buffer[after] not in ASCII_WHITESPACE and buffer[after] != _RPAREN:
        raise StringDidntEnd()
    return Str(buffer[start + 1 : close]), after


def _scan_list(buffer: bytes, start: int, end: int) -> tuple[AstNode, int]:
    items: list[AstNode] = []
    pos = _skip_whitespace(buffer, start + 1, end)
    while True:
        if pos == end:
            raise MissingRightParenthesis()
        if buffer[pos] == _RPAREN:
            return List(tuple(items)), pos + 1
        node, pos = _scan_node(buffer, pos, end)
        items.append(node)
        pos = _skip_whitespace(buffer, pos, end)


def _classify_atom(text: bytes) -> AstNode:
    for byte in text:
        if byte in FORBIDDEN_CHARS:
            raise ForbiddenCharInSymbol(chr(byte))

    if text[0] in _NUMERIC_START:
        decoded = text.decode("ascii", errors="replace")
        if not _INTEGER_RE.match(text):
            raise CannotParseNumber(decoded)
        value = int(text)
        if not in_int_range(value):
            raise CannotParseNumber(decoded)
        return Num(value)
    return Sym(text)


def _scan_atom(buffer: bytes, start: int, end: int) -> tuple[AstNode, int]:
    cut = _ATOM_CUT_RE.search(buffer, start, end)
    stop = end if cut is None else cut.start()
    return _classify_atom(buffer[start:stop]), stop


def _scan_node(buffer: bytes, pos: int, end: int) -> tuple[AstNode, int]:
    first = buffer[pos]
    if first == _RPAREN:
        raise MissingLeftParenthesis()
    if first == _QUOTE:
        return _scan_string(buffer, pos, end)
    if first == _LPAREN:
        return _scan_list(buffer, pos, end)
    return _scan_atom(buffer, pos, end)


def _read(buffer: bytes, pos: int, end: int) -> tuple[AstNode, int]:
    """Scan one node at ``pos``; the returned position is past any trailing whitespace."""
    pos = _skip_whitespace(buffer, pos, end)
    if pos == end:
        raise CannotParseEmpty()
    node, pos = _scan_node(buffer, pos, end)
    return node, _skip_whitespace(buffer, pos, end)


def tokenize(buffer: bytes | bytearray | memoryview | str) -> AstToken:
    """Parse the first node of ``buffer``.

    Returns ``Parsed`` when the node accounts for the whole buffer, or
    ``ParsedRest`` carrying the trimmed, unconsumed suffix. A ``)`` that closes
    an enclosing list is left at the front of the remainder for the caller.
    """
    data = _as_bytes(buffer)
    end = _content_end(data)
    node, pos = _read(data, 0, end)
    if pos == end:
        return Parsed(node)
    return ParsedRest(node, data[pos:end])


def _check_top_level(node: AstNode, allow_bare_atoms: bool | None) -> AstNode:
    allow = _ALLOW_BARE_ATOMS if allow_bare_atoms is None else allow_bare_atoms
    if not allow and not isinstance(node, List):
        raise NotAnSExpression(node)
    return node


def parse_program(
    source: bytes | bytearray | memoryview | str,
    *,
    allow_bare_atoms: bool | None = None,
) -> tuple[AstNode, ...]:
    """Parse a flat sequence of top-level forms."""
    data = _as_bytes(source)
    end = _content_end(data)
    node, pos = _read(data, 0, end)
    forms = [_check_top_level(node, allow_bare_atoms)]
    while pos < end:
        node, pos = _read(data, pos, end)
        forms.append(_check_top_level(node, allow_bare_atoms))
    return tuple(forms)


def parse(
    source: bytes | bytearray | memoryview | str,
    *,
    allow_bare_atoms: bool | None = None,
) -> AstNode:
    """Parse exactly one top-level form."""
    data = _as_bytes(source)
    end = _content_end(data)
    node, pos = _read(data, 0, end)
    node = _check_top_level(node, allow_bare_atoms)
    if pos < end:
        raise UnexpectedTrailingInput(data[pos:end])
    return node
