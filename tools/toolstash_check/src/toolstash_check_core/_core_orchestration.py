from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from ._core_base import (
    DEFAULT_COMMIT_SPEC,
    TOOL_NAME,
    ToolstashCheckError,
    UsageError,
    baseline_environment,
    format_command,
    trace,
    write_text,
)
from ._core_config import ToolchainConfig
from ._core_revisions import ResolvedRevisions, resolve_repo_root, resolve_revisions
from ._core_runner import CommandRunner

CHECKOUT_DIR_NAME = "go"


@dataclass(frozen=True)
class CheckOptions:
    commit: str = DEFAULT_COMMIT_SPEC
    base: str | None = None
    all_platforms: bool = False
    gcflags: str = ""
    race: bool = False
    remake: bool = False
    repo: str | None = None
    verbose: bool = False
    work: bool = False

    def validate(self) -> None:
        if not self.commit:
            raise UsageError("commit spec must not be empty")
        if self.all_platforms and (self.race or self.work or self.gcflags):
            raise UsageError("-all is incompatible with -race, -work, and -gcflags")


@dataclass(frozen=True)
class CheckResult:
    revisions: ResolvedRevisions
    repo_root: Path

    @property
    def message(self) -> str:
        return f"{TOOL_NAME} passed for {self.revisions.label()}"


def comparison_command(options: CheckOptions, config: ToolchainConfig) -> list[str]:
    argv = [config.driver, "build", "-a"]
    if options.race:
        argv.append("-race")
    if options.work:
        argv.append("-work")
    if options.gcflags:
        argv.append("-gcflags=" + options.gcflags)
    argv.extend(["-toolexec", f"{config.snapshot_tool} -cmp"])
    argv.extend(config.packages)
    return argv


def build_script_command(config: ToolchainConfig) -> list[str]:
    return ["./" + config.build_script]


def locate_buildall(runner: CommandRunner, config: ToolchainConfig, environ: Mapping[str, str]) -> Path:
    if config.buildall:
        return Path(config.buildall).expanduser().resolve()
    out = runner.output(
        "locate buildall",
        [config.driver, "list", "-f", "{{.Dir}}", config.buildall_package],
        env=environ,
    ).strip()
    if not out:
        raise ToolstashCheckError(f"unable to locate package directory for {config.buildall_package}")
    return Path(out) / "buildall"


def _run_step(
    runner: CommandRunner,
    options: CheckOptions,
    step: str,
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    where = f" (in {cwd})" if cwd is not None else ""
    trace(options.verbose, f"{step}: {format_command(argv)}{where}")
    runner.run(step, argv, cwd=cwd, env=env)


def run_check(
    options: CheckOptions,
    *,
    runner: CommandRunner,
    config: ToolchainConfig | None = None,
    environ: Mapping[str, str] | None = None,
    temp_parent: Path | None = None,
) -> CheckResult:
    """Build the base toolchain, stash it, then compare the target build against it.

    Every step must succeed before the next one starts; the first failure
    propagates as an exception. The scratch checkout lives in a temporary
    directory that is removed on every exit path.
    """
    options.validate()
    config = config or ToolchainConfig()
    ambient = dict(os.environ if environ is None else environ)

    repo_root = resolve_repo_root(runner, options.repo, config, ambient)
    trace(options.verbose, f"resolving revisions in {repo_root}")
    revisions = resolve_revisions(runner, repo_root, options.commit, options.base, vcs=config.vcs)
    trace(options.verbose, f"target {revisions.commit}, base {revisions.base}")

    buildall: Path | None = None
    if options.all_platforms:
        buildall = locate_buildall(runner, config, ambient)

    with tempfile.TemporaryDirectory(prefix=f"{TOOL_NAME}-", dir=temp_parent) as tmpdir:
        trace(options.verbose, f"work directory {tmpdir}")
        tmproot = Path(tmpdir) / CHECKOUT_DIR_NAME
        build_dir = tmproot / config.build_dir

        _run_step(runner, options, "clone", [config.vcs, "clone", str(repo_root), str(tmproot)], env=ambient)
        _run_step(runner, options, "checkout base", [config.vcs, "checkout", revisions.base], cwd=tmproot, env=ambient)
        # Skips version stamping, which otherwise needs a tagged release.
        write_text(tmproot / config.version_file, config.version_marker)
        _run_step(runner, options, "build base", build_script_command(config), cwd=build_dir, env=ambient)

        env = baseline_environment(ambient, tmproot, config.bin_dir, config.root_env)
        _run_step(runner, options, "snapshot base", [config.snapshot_tool, "save"], env=env)

        _run_step(runner, options, "checkout target", [config.vcs, "checkout", revisions.commit], cwd=tmproot, env=env)
        if options.remake:
            _run_step(runner, options, "build target", build_script_command(config), cwd=build_dir, env=env)
        else:
            _run_step(runner, options, "install target", [config.driver, "install", *config.packages], env=env)

        if buildall is not None:
            _run_step(runner, options, "compare all platforms", [str(buildall)], env=env)
        else:
            _run_step(runner, options, "compare", comparison_command(options, config), env=env)

    return CheckResult(revisions=revisions, repo_root=repo_root)
