from .core import (
    CheckOptions,
    CheckResult,
    CommandError,
    CommandRunner,
    ResolvedRevisions,
    SubprocessRunner,
    ToolchainConfig,
    ToolstashCheckError,
    UsageError,
    baseline_environment,
    comparison_command,
    load_config,
    locate_buildall,
    resolve_repo_root,
    resolve_revisions,
    rev_parse,
    run_check,
)

__all__ = [
    "CheckOptions",
    "CheckResult",
    "CommandError",
    "CommandRunner",
    "ResolvedRevisions",
    "SubprocessRunner",
    "ToolchainConfig",
    "ToolstashCheckError",
    "UsageError",
    "baseline_environment",
    "comparison_command",
    "load_config",
    "locate_buildall",
    "resolve_repo_root",
    "resolve_revisions",
    "rev_parse",
    "run_check",
]
