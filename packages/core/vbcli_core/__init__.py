"""Core CLI services for settings, logging, and diagnostics."""

from .config import AppConfig, access_token, config_path, load_config
from .diagnostics import build_doctor_payload, redact
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "access_token",
    "build_doctor_payload",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "redact",
]
