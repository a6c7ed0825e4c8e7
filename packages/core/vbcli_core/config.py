"""Persistent CLI settings schema and loader."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1

TOKEN_ENV = "VESTABOARD_TOKEN"
MODEL_ENV = "VESTABOARD_MODEL"
CONFIG_DIR_ENV = "VBCLI_CONFIG_DIR"

_MODELS = ("flagship", "note")
_ALIGNS = ("top", "center", "bottom")
_JUSTIFIES = ("left", "center", "right", "justified")


@dataclass
class ApiConfig:
    board_url: str = "https://cloud.vestaboard.com"
    compose_url: str = "https://vbml.vestaboard.com"
    timeout_s: float = 15.0


@dataclass
class ComposeConfig:
    model: str = "flagship"
    align: str = "center"
    justify: str = "center"


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    api: ApiConfig = field(default_factory=ApiConfig)
    compose: ComposeConfig = field(default_factory=ComposeConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "vbcli"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "vbcli"
    return Path.home() / ".config" / "vbcli"


def config_path() -> Path:
    return config_root() / "config.json"


def access_token() -> str:
    return os.environ.get(TOKEN_ENV, "").strip()


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_api(cfg: AppConfig) -> None:
    defaults = ApiConfig()
    if not isinstance(cfg.api.board_url, str) or not cfg.api.board_url.strip():
        cfg.api.board_url = defaults.board_url
    if not isinstance(cfg.api.compose_url, str) or not cfg.api.compose_url.strip():
        cfg.api.compose_url = defaults.compose_url
    try:
        timeout = float(cfg.api.timeout_s)
    except (TypeError, ValueError):
        timeout = defaults.timeout_s
    cfg.api.timeout_s = max(1.0, min(120.0, timeout))


def _normalize_compose(cfg: AppConfig) -> None:
    model = str(cfg.compose.model).strip().lower()
    cfg.compose.model = model if model in _MODELS else "flagship"
    align = str(cfg.compose.align).strip().lower()
    cfg.compose.align = align if align in _ALIGNS else "center"
    justify = str(cfg.compose.justify).strip().lower()
    cfg.compose.justify = justify if justify in _JUSTIFIES else "center"


def _normalize_diagnostics(cfg: AppConfig) -> None:
    try:
        keep = int(cfg.diagnostics.keep_log_files)
    except (TypeError, ValueError):
        keep = DiagnosticsConfig().keep_log_files
    cfg.diagnostics.keep_log_files = max(2, keep)


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        api=_merge(ApiConfig, raw.get("api", {})),
        compose=_merge(ComposeConfig, raw.get("compose", {})),
        diagnostics=_merge(DiagnosticsConfig, raw.get("diagnostics", {})),
    )

    _normalize_api(cfg)
    _normalize_compose(cfg)
    _normalize_diagnostics(cfg)
    return cfg

