"""Command-line driver reading a script of skip list operations.

Script syntax, one command per line (``#`` starts a comment)::

    insert KEY VALUE
    search KEY
    delete KEY
    empty | len | show | items
"""
from __future__ import annotations

import argparse
import logging
import shlex
import sys
from typing import Iterable, TextIO

from .skiplist import MAX_LEVEL, P, NotFound, SkipList

__all__ = ["main", "get_parser", "run_script", "CommandError"]

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised for an unknown command or a wrong number of arguments."""


_ARITY = {
    "insert": 2,
    "search": 1,
    "delete": 1,
    "empty": 0,
    "len": 0,
    "show": 0,
    "items": 0,
}


def execute(skip: SkipList, argv: list[str], out: TextIO) -> None:
    """Apply one parsed command to *skip*, writing any result to *out*."""
    cmd, args = argv[0], argv[1:]
    if cmd not in _ARITY:
        raise CommandError(f"unknown command {cmd!r}")
    if len(args) != _ARITY[cmd]:
        raise CommandError(f"{cmd} takes {_ARITY[cmd]} argument(s), got {len(args)}")

    if cmd == "insert":
        skip.insert(args[0], args[1])
    elif cmd == "search":
        print(skip.search(args[0]), file=out)
    elif cmd == "delete":
        skip.delete(args[0])
    elif cmd == "empty":
        print("true" if skip.is_empty() else "false", file=out)
    elif cmd == "len":
        print(len(skip), file=out)
    elif cmd == "show":
        out.write(str(skip))
    elif cmd == "items":
        for key, value in skip.items():
            print(f"{key}\t{value}", file=out)


def run_script(skip: SkipList, lines: Iterable[str], out: TextIO | None = None) -> int:
    """Run every command in *lines*; return the number of failed commands.

    Failures are logged and the script carries on.
    """
    out = out or sys.stdout
    failures = 0
    for lineno, line in enumerate(lines, 1):
        try:
            argv = shlex.split(line, comments=True)
            if argv:
                execute(skip, argv, out)
        except (NotFound, CommandError, ValueError) as exc:
            failures += 1
            logger.error("line %d: %s", lineno, exc)
    return failures


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run skip list commands from scripts or stdin")
    parser.add_argument("--debug", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--seed", type=int, default=None, help="Seed for node heights")
    parser.add_argument("--max-level", type=int, default=MAX_LEVEL, help="Maximum node height")
    parser.add_argument("--p", type=float, default=P, help="Level promotion probability")
    parser.add_argument("file", nargs="*", help="Command scripts (default: stdin)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)

    try:
        skip = SkipList(args.max_level, args.p, seed=args.seed)
    except ValueError as exc:
        parser.error(str(exc))

    formatter = logging.Formatter("%(levelname)s: %(message)s")
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logging.root.addHandler(console)
    logging.root.setLevel(logging.DEBUG if args.debug else logging.INFO)

    failures = 0
    try:
        if not args.file:
            failures += run_script(skip, sys.stdin)
        for filename in args.file:
            try:
                fp = open(filename)
            except OSError as exc:
                logger.error("cannot read %s: %s", filename, exc.strerror)
                failures += 1
                continue
            with fp:
                failures += run_script(skip, fp)
        logger.debug("%d entries, level %d", len(skip), skip.level)
    except KeyboardInterrupt:
        return 1
    finally:
        logging.root.removeHandler(console)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
