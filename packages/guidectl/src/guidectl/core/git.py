from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .process import run_command


@dataclass(frozen=True)
class GitContext:
    sha: str
    is_dirty: bool


def read_git_context(repo_root: Path) -> GitContext:
    sha_res = run_command(["git", "rev-parse", "--short", "HEAD"], repo_root)
    sha = sha_res.stdout.strip() if sha_res.code == 0 else "unknown"
    dirty_res = run_command(["git", "status", "--porcelain"], repo_root)
    is_dirty = bool(dirty_res.stdout.strip()) if dirty_res.code == 0 else True
    return GitContext(sha=sha or "unknown", is_dirty=is_dirty)


def is_work_tree(repo_root: Path) -> bool:
    res = run_command(["git", "rev-parse", "--is-inside-work-tree"], repo_root)
    return res.code == 0 and res.stdout.strip() == "true"


def _pathspec(paths: list[str] | None) -> list[str]:
    return ["--", *paths] if paths else []


def porcelain_status(repo_root: Path, paths: list[str] | None = None) -> list[str]:
    res = run_command(["git", "status", "--porcelain", *_pathspec(paths)], repo_root)
    if res.code != 0:
        raise ConfigError(f"git status failed in {repo_root}: {res.combined_output}")
    return [line for line in res.stdout.splitlines() if line.strip()]


def diff_text(repo_root: Path, paths: list[str] | None = None) -> str:
    res = run_command(["git", "--no-pager", "diff", *_pathspec(paths)], repo_root)
    if res.code != 0:
        raise ConfigError(f"git diff failed in {repo_root}: {res.combined_output}")
    return res.stdout
