"""Configuration loading for guidectl."""

from .loader import CheckSpec, GuideConfig, default_config, load_config

__all__ = ["CheckSpec", "GuideConfig", "default_config", "load_config"]
