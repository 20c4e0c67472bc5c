"""Command line entry point for toolstash-check.

toolstash-check automates running ``toolstash -cmp`` against a commit:

1. Clone the repository (default ``$GOROOT``) into a new temporary directory.
2. Check out the base revision (default: the commit's parent).
3. Run make.bash and ``toolstash save`` with GOROOT pointing at the clone.
4. Check out the commit itself.
5. Run ``go install std cmd`` (or make.bash again with ``-remake``).
6. Run ``go build -a -toolexec 'toolstash -cmp' std cmd``, or the
   toolstash ``buildall`` script with ``-all``.
"""

from __future__ import annotations

import argparse
import sys

from .core import TOOL_NAME, TOOL_VERSION, CommandError, ToolstashCheckError, UsageError
from .commands import command_check


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        usage="%(prog)s [options] [commit]",
        description="Check that a commit does not change compiler output, using toolstash -cmp.",
        allow_abbrev=False,
    )
    parser.add_argument("commit", nargs="?", default=None, help="Commit to check (default: HEAD).")
    parser.add_argument("-all", "--all", action="store_true", help="Build for all GOOS/GOARCH platforms.")
    parser.add_argument("-base", "--base", help="Base commit to compare against (default: commit's parent).")
    parser.add_argument("-gcflags", "--gcflags", default="", help="Additional flags to pass to compile.")
    parser.add_argument("-race", "--race", action="store_true", help="Build with -race.")
    parser.add_argument(
        "-remake",
        "--remake",
        action="store_true",
        help="Rebuild the commit with make.bash instead of go install.",
    )
    parser.add_argument("-repo", "--repo", help="Repository to use (default: $GOROOT).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print commands being run.")
    parser.add_argument("-work", "--work", action="store_true", help="Build with -work.")
    parser.add_argument("-config", "--config", help="Path to toolchain config JSON.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {TOOL_VERSION}")
    parser.set_defaults(func=command_check)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return int(args.func(args))
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{TOOL_NAME}: {exc}", file=sys.stderr)
        return 2
    except CommandError as exc:
        print(f"{TOOL_NAME}: {exc}", file=sys.stderr)
        return exc.exit_code
    except ToolstashCheckError as exc:
        print(f"{TOOL_NAME}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
