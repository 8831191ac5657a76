from __future__ import annotations

from dataclasses import dataclass

from ..core.context import RunContext
from ..core.errors import ConfigError
from ..core.git import diff_text, is_work_tree, porcelain_status
from ..core.logging import log_event

GATE_FIX_HINT = "working tree changes found after regeneration; regenerate and commit: guidectl ci"


@dataclass(frozen=True)
class GateResult:
    changed: tuple[str, ...]
    diff: str

    @property
    def is_clean(self) -> bool:
        return not self.changed

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "status": "clean" if self.is_clean else "dirty",
            "changed": list(self.changed),
            "diff": self.diff,
        }
        if not self.is_clean:
            payload["fix_hint"] = GATE_FIX_HINT
        return payload


def run_gate(ctx: RunContext, paths: list[str] | None = None) -> GateResult:
    """Report working-tree changes after regeneration, like `git status --porcelain`.

    The whole work tree is inspected unless `paths` narrows it.
    """
    if not is_work_tree(ctx.repo_root):
        raise ConfigError(f"git gate requires a git work tree: {ctx.repo_root}")
    changed = tuple(porcelain_status(ctx.repo_root, paths))
    diff = diff_text(ctx.repo_root, paths) if changed else ""
    log_event(ctx, "info", "gate", "status", changed=len(changed), scoped=bool(paths))
    return GateResult(changed=changed, diff=diff)
