"""Guidectl core package."""
from .context import RunContext
from .errors import ConfigError, DerivationFailed, NotFound, ScriptError
from .logging import log_event, utc_now_iso
from .paths import find_repo_root
from .process import CommandResult, run_command
from .serialize import dumps_json

__all__ = [
    "CommandResult",
    "ConfigError",
    "DerivationFailed",
    "NotFound",
    "RunContext",
    "ScriptError",
    "dumps_json",
    "find_repo_root",
    "log_event",
    "run_command",
    "utc_now_iso",
]
