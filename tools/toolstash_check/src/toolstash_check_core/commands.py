from __future__ import annotations

import argparse
import json
from pathlib import Path

from .core import *  # noqa: F401,F403


def options_from_args(args: argparse.Namespace) -> CheckOptions:
    return CheckOptions(
        commit=args.commit or DEFAULT_COMMIT_SPEC,
        base=args.base or None,
        all_platforms=bool(args.all),
        gcflags=args.gcflags or "",
        race=bool(args.race),
        remake=bool(args.remake),
        repo=args.repo or None,
        verbose=bool(args.verbose),
        work=bool(args.work),
    )


def command_check(args: argparse.Namespace) -> int:
    options = options_from_args(args)
    options.validate()
    config = load_config(Path(args.config).resolve() if args.config else None)
    if options.verbose:
        trace(True, "config " + json.dumps(config.as_dict(), sort_keys=True))

    result = run_check(options, runner=SubprocessRunner(), config=config)
    print(result.message)
    return 0
