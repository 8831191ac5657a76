"""Drift checking: regenerate derived content and compare against the committed file."""

from .checker import check, line_diff
from .derivations import (
    CommandDerivation,
    Derivation,
    FunctionDerivation,
    MarkdownlintDerivation,
    TocDerivation,
)
from .document import Document, read_document
from .report import CLEAN, DIRTY, DriftReport

__all__ = [
    "CLEAN",
    "DIRTY",
    "CommandDerivation",
    "Derivation",
    "Document",
    "DriftReport",
    "FunctionDerivation",
    "MarkdownlintDerivation",
    "TocDerivation",
    "check",
    "line_diff",
    "read_document",
]
