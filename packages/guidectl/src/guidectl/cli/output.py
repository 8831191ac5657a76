"""CLI payload output helpers."""

from __future__ import annotations

import sys

from ..core.context import RunContext
from ..core.serialize import dumps_json
from ..drift.gate import GateResult
from ..drift.report import DriftReport


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def build_base_payload(ctx: RunContext, status: str = "ok") -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "guidectl",
        "status": status,
        "run_id": ctx.run_id,
        "repo_root": str(ctx.repo_root),
        "format": ctx.output_format,
        "git_sha": ctx.git_sha,
        "git_dirty": ctx.git_dirty,
    }


def resolve_output_format(*, cli_json: bool, cli_format: str | None, ci_present: bool) -> str:
    if cli_json:
        return "json"
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", run_id: str = "") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "guidectl",
                "status": "error",
                "run_id": run_id,
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return message


def print_reports(reports: list[DriftReport], regenerate: bool = False) -> None:
    for report in reports:
        if report.is_clean:
            verb = "unchanged" if regenerate else "clean"
            print(f"{report.check_id}: {verb} ({report.document})")
            continue
        if regenerate:
            print(f"{report.check_id}: regenerated {report.document} ({report.changed_lines} changed lines)")
            continue
        print(f"{report.check_id}: drift in {report.document} ({report.changed_lines} changed lines)")
        for line in report.diff:
            print(line)
        print(report.remediation(), file=sys.stderr)


def print_gate(gate: GateResult) -> None:
    if gate.diff:
        print(gate.diff, end="" if gate.diff.endswith("\n") else "\n")
    if gate.is_clean:
        print("No changes")
        return
    for line in gate.changed:
        print(f"changed: {line}", file=sys.stderr)
