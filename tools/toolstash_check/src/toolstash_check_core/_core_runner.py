from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from ._core_base import CommandError


class CommandRunner(Protocol):
    """Runs external commands on behalf of the workflow.

    ``run`` streams the child's output to standard error and returns only on
    success. ``output`` captures and returns standard output. Both raise
    ``CommandError`` when the command cannot be started or exits non-zero.
    """

    def run(
        self,
        step: str,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None: ...

    def output(
        self,
        step: str,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> str: ...


class SubprocessRunner:
    def run(
        self,
        step: str,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        command = [str(item) for item in argv]
        try:
            # Child stdout goes to our stderr; stdout is reserved for the result line.
            subprocess.run(
                command,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdout=sys.stderr,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            raise CommandError(step, command, exc.returncode) from exc
        except OSError as exc:
            raise CommandError(step, command, None, str(exc)) from exc

    def output(
        self,
        step: str,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> str:
        command = [str(item) for item in argv]
        try:
            proc = subprocess.run(
                command,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            message = (exc.stderr or "").strip() or (exc.stdout or "").strip()
            raise CommandError(step, command, exc.returncode, message) from exc
        except OSError as exc:
            raise CommandError(step, command, None, str(exc)) from exc
        return proc.stdout
