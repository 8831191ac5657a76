from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
FIXTURES = Path(__file__).resolve().parent / "fixtures"

FAKE_TOC = [
    sys.executable,
    str(FIXTURES / "fake_toc.py"),
    "-i",
    "{document}",
    "--bullets={bullets}",
    "--maxdepth={maxdepth}",
]
FAKE_MARKDOWNLINT = [
    sys.executable,
    str(FIXTURES / "fake_markdownlint.py"),
    "--fix",
    "--config",
    "{rules}",
    "{document}",
]

UP_TO_DATE_GUIDE = """# Guide

<!-- toc -->

* [Guide](#guide)
  * [Rules](#rules)
  * [Style](#style)

<!-- tocstop -->

## Rules

Prefer small rules.

## Style

Use `opa fmt`.
"""


def write_config(repo: Path, document: str = "style-guide.md") -> Path:
    toc_cmd = ", ".join(f'"{part}"' for part in FAKE_TOC)
    lint_cmd = ", ".join(f'"{part}"' for part in FAKE_MARKDOWNLINT)
    cfg = repo / "guidectl.yaml"
    cfg.write_text(
        "\n".join(
            [
                "schema_version: 1",
                f"document: {document}",
                "checks:",
                "  - id: toc",
                "    kind: toc",
                '    bullets: "*"',
                "    maxdepth: 3",
                f"    command: [{toc_cmd}]",
                "  - id: markdownlint",
                "    kind: markdownlint",
                "    rules: .markdownlint.yaml",
                f"    command: [{lint_cmd}]",
                "",
            ]
        ),
        encoding="utf-8",
    )
    (repo / ".markdownlint.yaml").write_text("default: true\n", encoding="utf-8")
    return cfg


def run_guidectl(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "packages/guidectl/src")
    env.pop("CI", None)
    env.setdefault("RUN_ID", "pytest-run")
    return subprocess.run(
        [sys.executable, "-m", "guidectl", *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
