"""Configuration system for subgen.

Layered config loading (lowest to highest priority):
1. Model defaults below
2. Environment variables (SUBGEN_WHISPER__MODEL, etc.)
3. config/default.toml (shipped with package, all keys commented out)
4. ~/.config/subgen/config.toml (user-level)
5. ./subgen.toml (project-level)
6. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "subgen" / "config.toml"
_PROJECT_CONFIG = Path("subgen.toml")


class WhisperConfig(BaseModel):
    model: str = "large-v3-turbo"
    device: str = "auto"  # auto, cpu, cuda
    word_timestamps: bool = True
    language: str | None = None  # None = auto-detect


class AudioConfig(BaseModel):
    ffmpeg_path: str | None = None  # None = bundled binary, then PATH


class SubgenConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SUBGEN_",
        env_nested_delimiter="__",
    )

    whisper: WhisperConfig = WhisperConfig()
    audio: AudioConfig = AudioConfig()
    scratch_dir: Path | None = None  # None = system temp dir


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> SubgenConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. whisper.model="small").
    """
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        config_data = _deep_merge(config_data, _load_toml(path))

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    # Env vars are handled by Pydantic BaseSettings, below the TOML layers
    return SubgenConfig(**config_data)
