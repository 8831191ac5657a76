from __future__ import annotations

import argparse
import os
import sys

from .. import __version__
from ..config.loader import GuideConfig, load_config
from ..core.context import RunContext
from ..core.errors import ConfigError, ScriptError
from ..core.exit_codes import ERR_DRIFT, ERR_INTERNAL, OK
from ..core.logging import log_event
from ..drift.gate import GATE_FIX_HINT, run_gate
from ..drift.report import DriftReport
from ..drift.suite import documents_for, run_checks
from .output import build_base_payload, emit, print_gate, print_reports, render_error, resolve_output_format

REGENERATE_COMMANDS = ("toc", "markdownlint")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="guidectl", description="keep generated style guide content in sync")
    p.add_argument("--version", action="version", version=f"guidectl {__version__}")
    p.add_argument("--config", help="config file path (default: guidectl.yaml at the repository root)")
    p.add_argument("--cwd", help="run from an explicit repository root")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="print versions and git context")
    sub.add_parser("checks", help="list configured drift checks")

    toc_p = sub.add_parser("toc", help="regenerate the table of contents in place")
    toc_p.add_argument("--document", help="document path (default: from config)")
    lint_p = sub.add_parser("markdownlint", help="apply lint autofixes in place")
    lint_p.add_argument("--document", help="document path (default: from config)")

    check_p = sub.add_parser("check", help="fail when regenerating a document changes it")
    check_p.add_argument("ids", nargs="*", help="check ids to run (default: all configured)")
    check_p.add_argument("--document", help="document path (default: from config)")

    ci_p = sub.add_parser("ci", help="run every check then fail if the working tree changed")
    ci_p.add_argument("--skip-git", action="store_true", help="skip the git status gate")
    ci_p.add_argument(
        "--documents-only",
        action="store_true",
        help="limit the git status gate to the configured documents (default: whole work tree)",
    )
    return p


def _regenerate_ids(config: GuideConfig, cmd: str) -> list[str]:
    if cmd in config.check_ids:
        return [cmd]
    by_kind = [c.id for c in config.checks if c.kind == cmd]
    if not by_kind:
        raise ConfigError(f"no configured check of kind `{cmd}`")
    return by_kind


def _reports_payload(ctx: RunContext, reports: list[DriftReport], status: str) -> dict[str, object]:
    return {
        **build_base_payload(ctx, status),
        "checks": [r.to_payload() for r in reports],
    }


def _run_regenerate(ctx: RunContext, config: GuideConfig, cmd: str, document: str | None) -> int:
    reports = run_checks(ctx, config, _regenerate_ids(config, cmd), document)
    if ctx.as_json:
        emit(_reports_payload(ctx, reports, "ok"), True)
    else:
        print_reports(reports, regenerate=True)
    return OK


def _run_check(ctx: RunContext, config: GuideConfig, ids: list[str], document: str | None) -> int:
    reports = run_checks(ctx, config, ids or None, document)
    drifted = [r for r in reports if not r.is_clean]
    if ctx.as_json:
        emit(_reports_payload(ctx, reports, "drift" if drifted else "ok"), True)
    else:
        print_reports(reports)
    return ERR_DRIFT if drifted else OK


def _run_ci(ctx: RunContext, config: GuideConfig, skip_git: bool, documents_only: bool = False) -> int:
    reports = run_checks(ctx, config)
    drifted = [r for r in reports if not r.is_clean]
    gate = None if skip_git else run_gate(ctx, documents_for(config) if documents_only else None)
    failed = bool(drifted) or (gate is not None and not gate.is_clean)
    if ctx.as_json:
        payload = _reports_payload(ctx, reports, "drift" if failed else "ok")
        if gate is not None:
            payload["gate"] = gate.to_payload()
        emit(payload, True)
    else:
        print_reports(reports)
        if gate is not None:
            print_gate(gate)
            if not gate.is_clean and not drifted:
                print(GATE_FIX_HINT, file=sys.stderr)
    return ERR_DRIFT if failed else OK


def _dispatch(ctx: RunContext, ns: argparse.Namespace, config_path: str | None) -> int:
    if ns.cmd == "version":
        emit({**build_base_payload(ctx), "guidectl_version": __version__}, ctx.as_json)
        return OK
    config = load_config(ctx.repo_root, config_path)
    if ns.cmd == "checks":
        emit(
            {
                **build_base_payload(ctx),
                "config": str(config.source) if config.source else None,
                "checks": [c.to_payload() for c in config.checks],
            },
            ctx.as_json,
        )
        return OK
    if ns.cmd in REGENERATE_COMMANDS:
        return _run_regenerate(ctx, config, ns.cmd, ns.document)
    if ns.cmd == "check":
        return _run_check(ctx, config, ns.ids, ns.document)
    if ns.cmd == "ci":
        return _run_ci(ctx, config, ns.skip_git, ns.documents_only)
    raise ConfigError(f"unknown command `{ns.cmd}`")


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format, ci_present=bool(os.environ.get("CI")))
    ctx = None
    try:
        ctx = RunContext.from_args(
            ns.run_id,
            ns.cwd,
            fmt,  # type: ignore[arg-type]
            ns.verbose,
            ns.quiet,
            ns.log_json,
        )
        if ctx.verbose:
            log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, repo_root=str(ctx.repo_root))
        return _dispatch(ctx, ns, ns.config)
    except ScriptError as exc:
        print(
            render_error(
                as_json=(fmt == "json"),
                message=str(exc),
                code=exc.code,
                kind=exc.kind,
                run_id=(ctx.run_id if ctx else ""),
            ),
            file=sys.stderr,
        )
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(
                as_json=(fmt == "json"),
                message=f"internal error: {exc}",
                code=ERR_INTERNAL,
                kind="internal_error",
                run_id=(ctx.run_id if ctx else ""),
            ),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
