#!/usr/bin/env python3
"""Stand-in for `markdown-toc -i` used by the test suite.

Rewrites the block between `<!-- toc -->` and `<!-- tocstop -->` with a nested
bullet list of headings up to --maxdepth. Documents without the opening
marker are left untouched.
"""
from __future__ import annotations

import argparse
import re
from pathlib import Path

OPEN = "<!-- toc -->"
CLOSE = "<!-- tocstop -->"
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")


def slug(text: str) -> str:
    out = re.sub(r"[^a-z0-9 _-]", "", text.strip().lower())
    return out.replace(" ", "-")


def headings(lines: list[str], maxdepth: int) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    fenced = False
    for line in lines:
        if line.startswith("```"):
            fenced = not fenced
            continue
        if fenced:
            continue
        m = _HEADING_RE.match(line)
        if m and len(m.group(1)) <= maxdepth:
            found.append((len(m.group(1)), m.group(2)))
    return found


def render(found: list[tuple[int, str]], bullet: str) -> list[str]:
    if not found:
        return []
    top = min(level for level, _ in found)
    return [f"{'  ' * (level - top)}{bullet} [{title}](#{slug(title)})" for level, title in found]


def main() -> int:
    p = argparse.ArgumentParser()
    p.add_argument("-i", dest="document", required=True)
    p.add_argument("--bullets", default="*")
    p.add_argument("--maxdepth", type=int, default=6)
    ns = p.parse_args()
    path = Path(ns.document)
    lines = path.read_text(encoding="utf-8").splitlines()
    if OPEN not in lines:
        return 0
    start = lines.index(OPEN)
    end = lines.index(CLOSE) if CLOSE in lines else start
    body = lines[:start] + lines[end + 1 :]
    block = [OPEN, "", *render(headings(body, ns.maxdepth), ns.bullets), "", CLOSE]
    new_lines = lines[:start] + block + lines[end + 1 :]
    path.write_text("\n".join(new_lines) + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
