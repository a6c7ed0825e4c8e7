"""Caller-side validation of compose and transition options."""

from __future__ import annotations

import os

from vbcli_board import Align, Justify, Model, TransitionSpeed, TransitionType, ValidationError
from vbcli_core.config import MODEL_ENV


def _choices(values: list[str]) -> str:
    quoted = [f'"{v}"' for v in values]
    if len(quoted) == 2:
        return f"{quoted[0]} or {quoted[1]}"
    return ", ".join(quoted[:-1]) + f", or {quoted[-1]}"


def _pick(flag: str, value: str | None, enum_type, default: str | None):
    normalized = (value or "").strip().lower() or (default or "")
    try:
        return enum_type(normalized)
    except ValueError:
        allowed = _choices([m.value for m in enum_type])
        raise ValidationError(f"invalid --{flag} {value!r} (expected {allowed})") from None


def resolve_model(value: str | None, default: str = "flagship") -> Model:
    """Flag value, then $VESTABOARD_MODEL, then the configured default."""
    if not (value or "").strip():
        env_value = os.environ.get(MODEL_ENV, "").strip()
        if env_value:
            return _pick("model", env_value, Model, None)
    return _pick("model", value, Model, default or "flagship")


def resolve_align(value: str | None, default: str = "center") -> Align:
    return _pick("align", value, Align, default or "center")


def resolve_justify(value: str | None, default: str = "center") -> Justify:
    return _pick("justify", value, Justify, default or "center")


def resolve_transition_type(value: str | None) -> TransitionType:
    return _pick("type", value, TransitionType, None)


def resolve_transition_speed(value: str | None) -> TransitionSpeed:
    return _pick("speed", value, TransitionSpeed, None)
