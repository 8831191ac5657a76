from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from ..core.errors import ConfigError
from ..core.paths import CONFIG_FILENAME, resolve_in_repo

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "config.schema.json"

DEFAULT_DOCUMENT = "style-guide.md"
DEFAULT_BULLETS = "*"
DEFAULT_MAXDEPTH = 3
DEFAULT_RULES = ".markdownlint.yaml"


@dataclass(frozen=True)
class CheckSpec:
    id: str
    kind: str
    document: str
    bullets: str = DEFAULT_BULLETS
    maxdepth: int = DEFAULT_MAXDEPTH
    rules: str = DEFAULT_RULES
    command: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"id": self.id, "kind": self.kind, "document": self.document}
        if self.kind == "toc":
            payload.update({"bullets": self.bullets, "maxdepth": self.maxdepth})
        if self.kind == "markdownlint":
            payload["rules"] = self.rules
        if self.command:
            payload["command"] = list(self.command)
        return payload


@dataclass(frozen=True)
class GuideConfig:
    document: str
    checks: tuple[CheckSpec, ...]
    source: Path | None = None
    schema_version: int = 1
    check_ids: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "check_ids", tuple(c.id for c in self.checks))

    def select(self, ids: list[str] | None) -> list[CheckSpec]:
        if not ids:
            return list(self.checks)
        unknown = [i for i in ids if i not in self.check_ids]
        if unknown:
            raise ConfigError(
                f"unknown check id(s): {', '.join(unknown)} (configured: {', '.join(self.check_ids)})"
            )
        wanted = set(ids)
        return [c for c in self.checks if c.id in wanted]

    def get(self, check_id: str) -> CheckSpec:
        return self.select([check_id])[0]


def default_config() -> GuideConfig:
    return GuideConfig(
        document=DEFAULT_DOCUMENT,
        checks=(
            CheckSpec(id="toc", kind="toc", document=DEFAULT_DOCUMENT),
            CheckSpec(id="markdownlint", kind="markdownlint", document=DEFAULT_DOCUMENT),
        ),
    )


def _load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _validate(payload: object, source: Path) -> None:
    try:
        jsonschema.validate(payload, _load_schema())
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ConfigError(f"{source}: schema validation failed at {loc}: {exc.message}") from exc


def _parse(payload: dict[str, Any], source: Path) -> GuideConfig:
    document = str(payload.get("document", DEFAULT_DOCUMENT))
    raw_checks = payload.get("checks")
    if raw_checks is None:
        base = default_config()
        checks = tuple(CheckSpec(id=c.id, kind=c.kind, document=document) for c in base.checks)
        return GuideConfig(document=document, checks=checks, source=source)
    specs: list[CheckSpec] = []
    seen: set[str] = set()
    for row in raw_checks:
        check_id = str(row["id"])
        if check_id in seen:
            raise ConfigError(f"{source}: duplicate check id `{check_id}`")
        seen.add(check_id)
        specs.append(
            CheckSpec(
                id=check_id,
                kind=str(row["kind"]),
                document=str(row.get("document", document)),
                bullets=str(row.get("bullets", DEFAULT_BULLETS)),
                maxdepth=int(row.get("maxdepth", DEFAULT_MAXDEPTH)),
                rules=str(row.get("rules", DEFAULT_RULES)),
                command=tuple(str(part) for part in row.get("command", ())),
            )
        )
    return GuideConfig(
        document=document,
        checks=tuple(specs),
        source=source,
        schema_version=int(payload["schema_version"]),
    )


def load_config(repo_root: Path, explicit: str | None = None) -> GuideConfig:
    """Load `guidectl.yaml` from the repository root, or `explicit` when given.

    A missing default file yields the built-in configuration; a missing
    explicit file is an error.
    """
    path = resolve_in_repo(repo_root, explicit) if explicit else repo_root / CONFIG_FILENAME
    if not path.is_file():
        if explicit:
            raise ConfigError(f"config file not found: {path}")
        return default_config()
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if payload is None:
        payload = {}
    _validate(payload, path)
    return _parse(payload, path)
