from __future__ import annotations

from pathlib import Path

from ..config.loader import CheckSpec, GuideConfig
from ..core.context import RunContext
from ..core.errors import ConfigError
from ..core.logging import log_event
from ..core.paths import resolve_in_repo
from .checker import check
from .derivations import CommandDerivation, Derivation, MarkdownlintDerivation, TocDerivation
from .report import DriftReport


def build_derivation(spec: CheckSpec, repo_root: Path, ctx: RunContext | None = None) -> Derivation:
    argv = spec.command or None
    if spec.kind == "toc":
        return TocDerivation(repo_root, bullets=spec.bullets, maxdepth=spec.maxdepth, argv=argv, name=spec.id, ctx=ctx)
    if spec.kind == "markdownlint":
        return MarkdownlintDerivation(repo_root, rules=spec.rules, argv=argv, name=spec.id, ctx=ctx)
    if spec.kind == "command":
        if not argv:
            raise ConfigError(f"check `{spec.id}` of kind `command` needs a command")
        return CommandDerivation(spec.id, argv, repo_root, ctx=ctx)
    raise ConfigError(f"check `{spec.id}` has unknown kind `{spec.kind}`")


def run_checks(
    ctx: RunContext,
    config: GuideConfig,
    ids: list[str] | None = None,
    document: str | None = None,
) -> list[DriftReport]:
    """Run the selected checks sequentially, in configured order.

    A failing derivation aborts the run; drift in one check does not.
    """
    selected = config.select(ids)
    reports: list[DriftReport] = []
    for spec in selected:
        rel = document or spec.document
        path = resolve_in_repo(ctx.repo_root, rel)
        if ctx.verbose:
            log_event(ctx, "info", "suite", "start-check", id=spec.id, kind=spec.kind, document=rel)
        derivation = build_derivation(spec, ctx.repo_root, ctx)
        reports.append(check(path, derivation, check_id=spec.id, ctx=ctx, label=rel))
    return reports


def documents_for(config: GuideConfig, ids: list[str] | None = None, document: str | None = None) -> list[str]:
    out: list[str] = []
    for spec in config.select(ids):
        rel = document or spec.document
        if rel not in out:
            out.append(rel)
    return out
