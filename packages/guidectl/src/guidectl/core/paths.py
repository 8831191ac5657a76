from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME = "guidectl.yaml"


def find_repo_root(start: Path | None = None) -> Path:
    """Walk up from `start` to the nearest directory holding the config file or `.git`.

    Falls back to `start` itself so a bare directory still works with default settings.
    """
    origin = (start or Path.cwd()).resolve()
    if origin.is_file():
        origin = origin.parent
    for cur in (origin, *origin.parents):
        if (cur / CONFIG_FILENAME).is_file():
            return cur
    for cur in (origin, *origin.parents):
        if (cur / ".git").exists():
            return cur
    return origin


def resolve_in_repo(repo_root: Path, raw: str | Path) -> Path:
    path = Path(raw)
    return path if path.is_absolute() else (repo_root / path)
