from __future__ import annotations

import difflib
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Union

from ..core.errors import DerivationFailed, NotFound
from ..core.logging import log_event
from .derivations import Derivation
from .document import Document, encode_text, read_document
from .report import CLEAN, DIRTY, DriftReport

if TYPE_CHECKING:
    from ..core.context import RunContext

DeriveFn = Union[Derivation, Callable[[Document], Union[str, None]]]


def line_diff(before: Document, after: Document, label: str) -> tuple[str, ...]:
    lines = difflib.unified_diff(
        before.lines,
        after.lines,
        fromfile=f"a/{label}",
        tofile=f"b/{label}",
    )
    return tuple(line.rstrip("\n") for line in lines)


def _apply(derive_fn: DeriveFn, document: Document, name: str) -> str | None:
    if isinstance(derive_fn, Derivation):
        return derive_fn.apply(document)
    try:
        return derive_fn(document)
    except DerivationFailed:
        raise
    except Exception as exc:
        raise DerivationFailed(f"{name}: derivation raised on {document.path}", diagnostics=repr(exc)) from exc


def _name_of(derive_fn: DeriveFn) -> str:
    return str(getattr(derive_fn, "name", None) or getattr(derive_fn, "__name__", "derive"))


def check(
    document_path: str | Path,
    derive_fn: DeriveFn,
    check_id: str | None = None,
    ctx: RunContext | None = None,
    label: str | None = None,
) -> DriftReport:
    """Verify that `document_path` is a fixed point of `derive_fn`.

    The document is snapshotted, derived (in place or by returned text, which
    is written back), re-read and diffed line by line against the snapshot.
    The file keeps the derived content afterwards, so the same call that
    detects drift in CI fixes it locally.

    Raises `NotFound` for a missing document and `DerivationFailed` when the
    derivation cannot process it. Drift is reported, never raised.
    """
    path = Path(document_path)
    name = check_id or _name_of(derive_fn)
    started = time.monotonic()
    baseline = read_document(path)
    derived = _apply(derive_fn, baseline, name)
    if derived is not None:
        data = encode_text(derived)
        if data != baseline.data:
            path.write_bytes(data)
    try:
        result = read_document(path)
    except NotFound as exc:
        raise DerivationFailed(f"{name}: derivation removed {path}") from exc
    diff = () if result.data == baseline.data else line_diff(baseline, result, label or path.as_posix())
    report = DriftReport(
        check_id=name,
        document=Path(label) if label else path,
        status=CLEAN if not diff else DIRTY,
        diff=diff,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    if ctx is not None:
        log_event(
            ctx,
            "info",
            "drift",
            "check",
            id=report.check_id,
            document=str(report.document),
            status=report.status,
            changed_lines=report.changed_lines,
            duration_ms=report.duration_ms,
        )
    return report
