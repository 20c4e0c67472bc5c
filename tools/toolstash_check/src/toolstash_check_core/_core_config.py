from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import jsonschema

from ._core_base import ToolstashCheckError, load_json

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


@dataclass(frozen=True)
class ToolchainConfig:
    vcs: str = "git"
    driver: str = "go"
    snapshot_tool: str = "toolstash"
    build_script: str = "make.bash"
    build_dir: str = "src"
    bin_dir: str = "bin"
    root_env: str = "GOROOT"
    version_file: str = "VERSION"
    version_marker: str = "devel"
    packages: tuple[str, ...] = ("std", "cmd")
    buildall: str | None = None
    buildall_package: str = "golang.org/x/tools/cmd/toolstash"

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            out[item.name] = list(value) if isinstance(value, tuple) else value
        return out


def get_schema_path(kind: str) -> Path:
    mapping = {
        "config": SCHEMA_DIR / "config.schema.json",
    }
    if kind not in mapping:
        raise ToolstashCheckError(f"Unknown schema kind: {kind}")
    return mapping[kind]


def validate_with_jsonschema(kind: str, payload: dict[str, Any]) -> None:
    schema_path = get_schema_path(kind)
    if not schema_path.exists():
        raise ToolstashCheckError(f"schema file not found: {schema_path}")
    schema_payload = load_json(schema_path)
    try:
        jsonschema.validate(payload, schema_payload)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ToolstashCheckError(f"{kind} failed JSON schema validation at {location}: {exc.message}") from exc


def validate_config_payload(payload: dict[str, Any]) -> None:
    if not isinstance(payload, dict):
        raise ToolstashCheckError("config root must be an object")
    validate_with_jsonschema("config", payload)

    packages = payload.get("packages")
    if isinstance(packages, list) and len(set(packages)) != len(packages):
        raise ToolstashCheckError("config.packages must not contain duplicates")
    for key in ["build_script", "version_file"]:
        value = payload.get(key)
        if isinstance(value, str) and ("/" in value or "\\" in value):
            raise ToolstashCheckError(f"config.{key} must be a plain file name, got '{value}'")


def config_from_payload(payload: dict[str, Any]) -> ToolchainConfig:
    validate_config_payload(payload)
    overrides: dict[str, Any] = {}
    for key, value in payload.items():
        overrides[key] = tuple(value) if key == "packages" else value
    return replace(ToolchainConfig(), **overrides)


def load_config(path: Path | None) -> ToolchainConfig:
    if path is None:
        return ToolchainConfig()
    return config_from_payload(load_json(path))
