from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Sequence

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
from toolstash_check_core import CommandError  # noqa: E402

DEFAULT_REVISIONS = {
    "HEAD": "aaa1111",
    "aaa1111^": "bbb2222",
    "abc123": "abc1230",
    "abc1230^": "ccc3333",
    "def456": "def4560",
}


@dataclass(frozen=True)
class RecordedCall:
    kind: str
    step: str
    argv: tuple[str, ...]
    cwd: Path | None
    env: dict[str, str] | None


class RecordingRunner:
    """In-memory runner: records every call and answers rev-parse from a table."""

    def __init__(
        self,
        revisions: Mapping[str, str] | None = None,
        outputs: Mapping[tuple[str, ...], str] | None = None,
        fail_step: str | None = None,
        fail_status: int = 1,
        on_run: Callable[[RecordedCall], None] | None = None,
    ) -> None:
        self.revisions = dict(DEFAULT_REVISIONS if revisions is None else revisions)
        self.outputs = dict(outputs or {})
        self.fail_step = fail_step
        self.fail_status = fail_status
        self.on_run = on_run
        self.calls: list[RecordedCall] = []

    def _record(self, kind: str, step: str, argv: Sequence[str], cwd: Path | None, env: Mapping[str, str] | None) -> RecordedCall:
        call = RecordedCall(
            kind=kind,
            step=step,
            argv=tuple(str(item) for item in argv),
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
        self.calls.append(call)
        if step == self.fail_step:
            raise CommandError(step, argv, self.fail_status)
        return call

    def run(self, step: str, argv: Sequence[str], *, cwd: Path | None = None, env: Mapping[str, str] | None = None) -> None:
        call = self._record("run", step, argv, cwd, env)
        if self.on_run is not None:
            self.on_run(call)

    def output(self, step: str, argv: Sequence[str], *, cwd: Path | None = None, env: Mapping[str, str] | None = None) -> str:
        call = self._record("output", step, argv, cwd, env)
        if call.argv in self.outputs:
            return self.outputs[call.argv]
        if call.argv[1:3] == ("rev-parse", "--short"):
            spec = call.argv[3]
            if spec not in self.revisions:
                raise CommandError(step, argv, 128, f"fatal: ambiguous argument '{spec}': unknown revision")
            return self.revisions[spec] + "\n"
        raise AssertionError(f"unexpected output command: {call.argv}")

    @property
    def steps(self) -> list[str]:
        return [call.step for call in self.calls if call.kind == "run"]

    def call_for(self, step: str) -> RecordedCall:
        for call in self.calls:
            if call.step == step:
                return call
        raise AssertionError(f"step '{step}' was not run; ran {self.steps}")
