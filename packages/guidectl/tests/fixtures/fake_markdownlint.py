#!/usr/bin/env python3
"""Stand-in for `markdownlint --fix` used by the test suite.

Fixes trailing whitespace in place. Duplicate heading text (MD024) cannot be
fixed automatically and makes the run exit 1 with a diagnostic.
"""
from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

_HEADING_RE = re.compile(r"^#{1,6}\s+(.+?)\s*$")


def main() -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--fix", action="store_true")
    p.add_argument("--config")
    p.add_argument("document")
    ns = p.parse_args()
    if ns.config and not Path(ns.config).is_file():
        print(f"Unable to read config file: {ns.config}", file=sys.stderr)
        return 2
    path = Path(ns.document)
    lines = path.read_text(encoding="utf-8").splitlines()
    fixed = [line.rstrip() for line in lines]
    if ns.fix and fixed != lines:
        path.write_text("\n".join(fixed) + "\n", encoding="utf-8")
    seen: dict[str, int] = {}
    errors: list[str] = []
    for idx, line in enumerate(fixed, start=1):
        m = _HEADING_RE.match(line)
        if not m:
            continue
        title = m.group(1)
        if title in seen:
            errors.append(f"{ns.document}:{idx} MD024/no-duplicate-heading Multiple headings with the same content [{title}]")
        seen.setdefault(title, idx)
    for err in errors:
        print(err, file=sys.stderr)
    return 1 if errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
