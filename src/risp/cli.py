"""Evaluate risp source from a file, or run a line-at-a-time REPL over stdin."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from .errors import RispError
from .evaluator import eval_node
from .namespace import GlobalNamespace
from .tokenizer import parse_program

logger = logging.getLogger(__name__)

PROMPT = "risp> "


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="risp", description=__doc__)
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="source file to interpret; omit to start a REPL on stdin",
    )
    parser.add_argument(
        "--allow-bare-atoms",
        action="store_true",
        default=None,
        help="accept top-level atoms and strings, which evaluate to themselves",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log parser and evaluator activity to stderr",
    )
    return parser


def _run_unit(
    source: bytes,
    namespace: GlobalNamespace,
    *,
    allow_bare_atoms: bool | None,
    stdout: TextIO,
) -> None:
    forms = parse_program(source, allow_bare_atoms=allow_bare_atoms)
    # A failing form leaves stdout untouched for the whole unit.
    values = [eval_node(form, namespace) for form in forms]
    stdout.write("".join(f"{value}\n" for value in values))


def _report(err: Exception, stderr: TextIO) -> None:
    logger.debug("unit failed with %s", type(err).__name__)
    stderr.write(f"Error: {err}\n")


def _run_file(path: Path, namespace: GlobalNamespace, *, allow_bare_atoms: bool | None, stdout: TextIO, stderr: TextIO) -> int:
    try:
        source = path.read_bytes()
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        stderr.write(f"Error: unable to open file {path}\n")
        return 1

    try:
        _run_unit(source, namespace, allow_bare_atoms=allow_bare_atoms, stdout=stdout)
    except RispError as err:
        _report(err, stderr)
        return 1
    return 0


def _run_repl(namespace: GlobalNamespace, *, allow_bare_atoms: bool | None, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    interactive = stdin.isatty()
    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        if not line.strip():
            continue
        try:
            source = line.encode("ascii")
        except UnicodeEncodeError:
            stderr.write("Error: input is not ASCII text\n")
            continue
        try:
            _run_unit(source, namespace, allow_bare_atoms=allow_bare_atoms, stdout=stdout)
        except RispError as err:
            _report(err, stderr)
    if interactive:
        stdout.write("\n")
    return 0


def main(
    argv: list[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
        force=True,
    )

    namespace = GlobalNamespace.default()
    if args.file is not None:
        return _run_file(args.file, namespace, allow_bare_atoms=args.allow_bare_atoms, stdout=stdout, stderr=stderr)
    return _run_repl(namespace, allow_bare_atoms=args.allow_bare_atoms, stdin=stdin, stdout=stdout, stderr=stderr)


if __name__ == "__main__":
    raise SystemExit(main())
