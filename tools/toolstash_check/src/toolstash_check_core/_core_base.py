from __future__ import annotations

import json
import os
import shlex
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

TOOL_NAME = "toolstash-check"
TOOL_VERSION = "1.0.0"
DEFAULT_COMMIT_SPEC = "HEAD"


class ToolstashCheckError(Exception):
    pass


class UsageError(ToolstashCheckError):
    pass


class CommandError(ToolstashCheckError):
    def __init__(self, step: str, argv: Sequence[str], returncode: int | None, detail: str = "") -> None:
        self.step = step
        self.argv = tuple(argv)
        self.returncode = returncode
        self.detail = detail
        message = f"{step}: {format_command(argv)}"
        if returncode is not None:
            message += f" exited with status {returncode}"
        if detail:
            message += f": {detail}"
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        if self.returncode is None or self.returncode <= 0:
            return 1
        return self.returncode


def format_command(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(item)) for item in argv)


def load_json(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ToolstashCheckError(f"Unable to read JSON file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ToolstashCheckError(f"Invalid JSON in '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise ToolstashCheckError(f"JSON root in '{path}' must be an object")
    return payload


def write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ToolstashCheckError(f"Unable to write '{path}': {exc}") from exc


def prepend_search_path(directory: Path, current: str | None) -> str:
    if current:
        return str(directory) + os.pathsep + current
    return str(directory)


def baseline_environment(environ: Mapping[str, str], toolchain_root: Path, bin_dir: str, root_env: str) -> dict[str, str]:
    """Return a copy of ``environ`` that runs tools from ``toolchain_root``.

    The toolchain's binary directory is put first on ``PATH`` and ``root_env``
    names the toolchain itself, so the snapshot tool and every later build
    see the freshly built baseline.
    """
    env = dict(environ)
    env["PATH"] = prepend_search_path(toolchain_root / bin_dir, environ.get("PATH"))
    env[root_env] = str(toolchain_root)
    return env


def trace(enabled: bool, message: str) -> None:
    if enabled:
        print(f"{TOOL_NAME}: {message}", file=sys.stderr, flush=True)
