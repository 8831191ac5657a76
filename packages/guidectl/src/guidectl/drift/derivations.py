"""Derivation functions: deterministic `Document -> Document` transformations.

A derivation either rewrites the document file in place and returns `None`
(how `markdown-toc -i` and `markdownlint --fix` behave) or returns the derived
text for the checker to write back.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..core.errors import DerivationFailed
from ..core.process import run_command
from .document import Document

if TYPE_CHECKING:
    from ..core.context import RunContext

TOC_COMMAND = ("npx", "markdown-toc", "-i", "{document}", "--bullets={bullets}", "--maxdepth={maxdepth}")
MARKDOWNLINT_COMMAND = ("npx", "markdownlint", "--fix", "--config", "{rules}", "{document}")


@runtime_checkable
class Derivation(Protocol):
    name: str

    def apply(self, document: Document) -> str | None: ...


def render_argv(template: tuple[str, ...] | list[str], values: Mapping[str, str]) -> list[str]:
    out: list[str] = []
    for part in template:
        for key, value in values.items():
            part = part.replace("{" + key + "}", value)
        out.append(part)
    return out


class CommandDerivation:
    """Runs an external tool that rewrites the document in place."""

    def __init__(
        self,
        name: str,
        argv: tuple[str, ...] | list[str],
        cwd: Path,
        params: Mapping[str, str] | None = None,
        ctx: RunContext | None = None,
    ) -> None:
        self.name = name
        self.argv = tuple(argv)
        self.cwd = cwd
        self.params = dict(params or {})
        self.ctx = ctx

    def command_for(self, document: Document) -> list[str]:
        return render_argv(self.argv, {**self.params, "document": str(document.path)})

    def apply(self, document: Document) -> str | None:
        cmd = self.command_for(document)
        result = run_command(cmd, self.cwd, ctx=self.ctx)
        if result.code != 0:
            raise DerivationFailed(
                f"{self.name}: `{' '.join(cmd)}` exited with code {result.code} on {document.path}",
                diagnostics=result.combined_output,
            )
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, argv={self.argv!r})"


class TocDerivation(CommandDerivation):
    def __init__(
        self,
        cwd: Path,
        bullets: str = "*",
        maxdepth: int = 3,
        argv: tuple[str, ...] | list[str] | None = None,
        name: str = "toc",
        ctx: RunContext | None = None,
    ) -> None:
        super().__init__(
            name,
            argv or TOC_COMMAND,
            cwd,
            params={"bullets": bullets, "maxdepth": str(maxdepth)},
            ctx=ctx,
        )


class MarkdownlintDerivation(CommandDerivation):
    def __init__(
        self,
        cwd: Path,
        rules: str = ".markdownlint.yaml",
        argv: tuple[str, ...] | list[str] | None = None,
        name: str = "markdownlint",
        ctx: RunContext | None = None,
    ) -> None:
        super().__init__(name, argv or MARKDOWNLINT_COMMAND, cwd, params={"rules": rules}, ctx=ctx)


class FunctionDerivation:
    """Wraps a pure text transformation."""

    def __init__(self, name: str, fn: Callable[[str], str]) -> None:
        self.name = name
        self.fn = fn

    def apply(self, document: Document) -> str | None:
        try:
            return self.fn(document.text)
        except DerivationFailed:
            raise
        except Exception as exc:
            raise DerivationFailed(f"{self.name}: derivation raised on {document.path}", diagnostics=repr(exc)) from exc
