from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from . import __version__
from .errors import InteractionsError
from .io import read_interactions
from .system import System


def _particle_spec(text: str) -> tuple[str, int]:
    name, sep, count = text.partition(":")
    if not name:
        raise argparse.ArgumentTypeError(f"empty particle name in '{text}'")
    if not sep:
        return name, 1
    try:
        n = int(count)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad particle count in '{text}'") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"particle count must be >= 1 in '{text}'")
    return name, n


def build_parser(*, cmd_check: Callable) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mdinteract")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    pc = sub.add_parser("check", help="Validate an interactions YAML file")
    pc.add_argument("file", help="Interactions YAML file")
    pc.add_argument(
        "--particle",
        action="append",
        type=_particle_spec,
        default=[],
        metavar="NAME[:COUNT]",
        help="Add COUNT (default 1) particles named NAME before reading",
    )
    pc.add_argument("--verbose", "-v", action="store_true", help="Log charge assignment and sections")
    pc.set_defaults(func=cmd_check)
    return p


def cmd_check(args: argparse.Namespace) -> int:
    system = System()
    for name, count in args.particle:
        for _ in range(count):
            system.add_particle(name)
    try:
        summary = read_interactions(system, args.file)
    except InteractionsError as exc:
        print(f"error ({exc.kind}): {exc.msg}", file=sys.stderr)
        return 1
    print(f"{args.file}: ok")
    for line in summary.lines():
        print(f"  {line}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser(cmd_check=cmd_check)
    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    func = getattr(args, "func", None)
    if func is None:
        raise SystemExit(f"unsupported cmd: {getattr(args, 'cmd', None)}")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
