from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_DERIVATION, ERR_NOT_FOUND


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


@dataclass
class DerivationFailed(ScriptError):
    """The external tool could not process the document.

    `diagnostics` carries the tool's own output verbatim.
    """

    code: int = ERR_DERIVATION
    kind: str = "derivation_failed"
    diagnostics: str = ""

    def __str__(self) -> str:
        if self.diagnostics:
            return f"{self.message}\n{self.diagnostics}"
        return self.message


@dataclass
class NotFound(ScriptError):
    code: int = ERR_NOT_FOUND
    kind: str = "not_found"


@dataclass
class ConfigError(ScriptError):
    code: int = ERR_CONFIG
    kind: str = "config_error"
