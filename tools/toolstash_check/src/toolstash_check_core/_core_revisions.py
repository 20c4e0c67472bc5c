from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from ._core_base import ToolstashCheckError
from ._core_config import ToolchainConfig
from ._core_runner import CommandRunner


@dataclass(frozen=True)
class ResolvedRevisions:
    commit: str
    base: str
    explicit_base: bool

    def label(self) -> str:
        if self.explicit_base:
            return f"{self.base}..{self.commit}"
        return self.commit


def rev_parse(runner: CommandRunner, repo_root: Path, spec: str, *, vcs: str = "git") -> str:
    """Resolve ``spec`` to a short, unambiguous revision id in ``repo_root``."""
    out = runner.output(f"resolve '{spec}'", [vcs, "rev-parse", "--short", spec], cwd=repo_root)
    revision = out.strip()
    if not revision or len(revision.split()) != 1:
        raise ToolstashCheckError(f"revision '{spec}' did not resolve to a single commit: {out.strip()!r}")
    return revision


def resolve_revisions(
    runner: CommandRunner,
    repo_root: Path,
    commit_spec: str,
    base_spec: str | None,
    *,
    vcs: str = "git",
) -> ResolvedRevisions:
    commit = rev_parse(runner, repo_root, commit_spec, vcs=vcs)
    if base_spec:
        base = rev_parse(runner, repo_root, base_spec, vcs=vcs)
    else:
        base = rev_parse(runner, repo_root, commit + "^", vcs=vcs)
    return ResolvedRevisions(commit=commit, base=base, explicit_base=bool(base_spec))


def resolve_repo_root(
    runner: CommandRunner,
    repo: str | None,
    config: ToolchainConfig,
    environ: Mapping[str, str],
) -> Path:
    if repo:
        return Path(repo).expanduser().resolve()
    ambient = environ.get(config.root_env, "").strip()
    if ambient:
        return Path(ambient).resolve()
    out = runner.output(
        f"locate {config.root_env}",
        [config.driver, "env", config.root_env],
        env=environ,
    ).strip()
    if not out:
        raise ToolstashCheckError(
            f"unable to determine the repository root: {config.root_env} is unset; pass -repo explicitly"
        )
    return Path(out).resolve()
