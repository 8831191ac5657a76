from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

CLEAN = "clean"
DIRTY = "dirty"


@dataclass(frozen=True)
class DriftReport:
    check_id: str
    document: Path
    status: str
    diff: tuple[str, ...] = ()
    duration_ms: int = 0

    @property
    def is_clean(self) -> bool:
        return self.status == CLEAN

    @property
    def changed_lines(self) -> int:
        return sum(
            1
            for line in self.diff
            if line[:1] in {"+", "-"} and not line.startswith(("+++", "---"))
        )

    def remediation(self) -> str:
        return f"{self.document} is out of date; regenerate and commit: guidectl {self.check_id}"

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.check_id,
            "document": str(self.document),
            "status": self.status,
            "changed_lines": self.changed_lines,
            "duration_ms": self.duration_ms,
            "diff": list(self.diff),
        }
        if not self.is_clean:
            payload["fix_hint"] = self.remediation()
        return payload
