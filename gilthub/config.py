"""Configuration loading for gilthub."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

ENV_PREFIX = "GILTHUB_"


class Env:
    """Helper that reads key/value data from .env or YAML files.

    Environment variables named ``GILTHUB_<KEY>`` win over file values.
    """

    def __init__(self, path: Path):
        self.path = path
        self.data: Dict[str, Any] = {}
        if not path.exists():
            return
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            self.data = self._load_yaml(path)
        else:
            self.data = self._load_env(path)

    @staticmethod
    def _normalize_keys(mapping: Dict[str, Any]) -> Dict[str, Any]:
        normalised: Dict[str, Any] = {}
        for key, value in (mapping or {}).items():
            if not isinstance(key, str):
                raise ConfigError("Configuration keys must be strings.")
            normalised[key.upper()] = value
        return normalised

    def _load_env(self, path: Path) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for raw in path.read_text(encoding="utf-8").splitlines():
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            data[key.strip().upper()] = value.strip().strip('"').strip("'")
        return data

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path} is not valid YAML: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"{path} root must be a mapping")

        defaults_section = raw.get("defaults") or {}
        if not isinstance(defaults_section, dict):
            raise ConfigError(f"{path} defaults section must be a mapping")

        scalar_values = {k: v for k, v in raw.items() if not isinstance(v, dict)}
        merged = self._normalize_keys(defaults_section)
        merged.update(self._normalize_keys(scalar_values))
        return merged

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        val = os.getenv(ENV_PREFIX + key)
        if val is not None:
            return val
        val = self.data.get(key, default)
        return None if val is None else str(val)


@dataclass(frozen=True)
class Config:
    git_bin: str = "git"
    tar_bin: str = "tar"
    aws_bin: str = "aws"
    basename_bin: str = "basename"
    temp_root: Optional[Path] = None
    temp_prefix: str = "gilthub"
    log_file: str = ""
    log_level: str = "INFO"
    config_path: str = ""


def load_config(env_path: Path) -> Config:
    env = Env(env_path)

    temp_root_raw = env.get("TEMP_ROOT", "")
    temp_root = Path(temp_root_raw).expanduser() if temp_root_raw else None

    log_level = str(env.get("LOG_LEVEL", "INFO")).upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Config(
        git_bin=str(env.get("GIT_BIN", "git")),
        tar_bin=str(env.get("TAR_BIN", "tar")),
        aws_bin=str(env.get("AWS_BIN", "aws")),
        basename_bin=str(env.get("BASENAME_BIN", "basename")),
        temp_root=temp_root,
        temp_prefix=str(env.get("TEMP_PREFIX", "gilthub")),
        log_file=str(env.get("LOG_FILE", "")),
        log_level=log_level,
        config_path=str(env_path),
    )


__all__ = ["ENV_PREFIX", "Env", "Config", "load_config"]
