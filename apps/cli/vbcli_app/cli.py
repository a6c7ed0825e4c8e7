"""CLI entrypoints for sending, formatting, and inspecting board messages."""

from __future__ import annotations

import argparse
import json
import sys
from importlib import metadata
from typing import TextIO

from vbcli_board import (
    BoardClient,
    BoardError,
    DecodeError,
    ValidationError,
    decode_escapes,
    looks_like_raw_characters,
    parse_characters,
    substitute_aliases,
)
from vbcli_core import AppConfig, access_token, build_doctor_payload, get_logger, load_config
from vbcli_core.logging_setup import configure_logging

from .options import (
    resolve_align,
    resolve_justify,
    resolve_model,
    resolve_transition_speed,
    resolve_transition_type,
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _installed_version() -> str:
    try:
        return metadata.version("vbcli")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def _build_client(args: argparse.Namespace, cfg: AppConfig | None = None) -> BoardClient:
    cfg = cfg or load_config()
    return BoardClient(
        access_token(),
        board_url=cfg.api.board_url,
        compose_url=cfg.api.compose_url,
        timeout_s=cfg.api.timeout_s,
        verbose=bool(getattr(args, "verbose", False)),
        log_writer=sys.stderr,
    )


def _stdin_is_terminal(stdin: TextIO) -> bool:
    try:
        return stdin.isatty()
    except (AttributeError, ValueError):
        return False


def resolve_input(value: str | None, arg_name: str, stdin: TextIO | None = None) -> str:
    """Positional value, ``-`` for stdin, or piped stdin when omitted."""
    stdin = stdin if stdin is not None else sys.stdin
    if value is not None and value != "-":
        return value
    if value is None and _stdin_is_terminal(stdin):
        raise ValidationError(f"missing {arg_name} argument (or pipe stdin)")
    return stdin.read().strip()


def _send_raw(client: BoardClient, text: str) -> int:
    client.send_characters(parse_characters(text))
    return 0


def _compose_and_send(
    args: argparse.Namespace, cfg: AppConfig, client: BoardClient, text: str, format_only: bool
) -> int:
    if looks_like_raw_characters(text):
        return _send_raw(client, text)

    model = resolve_model(args.model, cfg.compose.model)
    align = resolve_align(args.align, cfg.compose.align)
    justify = resolve_justify(args.justify, cfg.compose.justify)

    template = substitute_aliases(decode_escapes(text))
    characters = client.format_message(template, model, align, justify)
    if format_only:
        print(json.dumps(characters, separators=(",", ":")))
        return 0
    client.send_characters(characters)
    return 0


def cmd_send_raw(args: argparse.Namespace) -> int:
    client = _build_client(args)
    return _send_raw(client, resolve_input(args.characters, "characters-json"))


def cmd_send(args: argparse.Namespace) -> int:
    cfg = load_config()
    client = _build_client(args, cfg)
    text = resolve_input(args.message, "message")
    return _compose_and_send(args, cfg, client, text, format_only=args.format)


def cmd_format(args: argparse.Namespace) -> int:
    cfg = load_config()
    client = _build_client(args, cfg)
    text = resolve_input(args.message, "message")
    return _compose_and_send(args, cfg, client, text, format_only=True)


def cmd_clear(args: argparse.Namespace) -> int:
    cfg = load_config()
    return _compose_and_send(args, cfg, _build_client(args, cfg), "", format_only=False)


def extract_layout(state: bytes) -> str:
    try:
        payload = json.loads(state.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"decode API response: {exc}") from exc
    message = payload.get("currentMessage") if isinstance(payload, dict) else None
    layout = message.get("layout") if isinstance(message, dict) else None
    if not layout:
        raise DecodeError("currentMessage.layout not found")
    if not isinstance(layout, str):
        raise DecodeError("currentMessage.layout must be a string")
    return layout


def cmd_get(args: argparse.Namespace) -> int:
    state = _build_client(args).get_current()
    if args.layout:
        print(extract_layout(state))
        return 0
    print(state.decode("utf-8", errors="replace"))
    return 0


def cmd_set_transition(args: argparse.Namespace) -> int:
    client = _build_client(args)
    transition = resolve_transition_type(args.type)
    speed = resolve_transition_speed(args.speed)
    client.set_transition(transition, speed)
    return 0


def cmd_get_transition(args: argparse.Namespace) -> int:
    body = _build_client(args).get_transition()
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"decode API response: {exc}") from exc
    print(json.dumps(data, indent=2))
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def _add_compose_flags(cmd: argparse.ArgumentParser, verb: str) -> None:
    cmd.add_argument("-m", "--model", default=None, help=f"Board model for {verb}: flagship or note")
    cmd.add_argument("-a", "--align", default=None, help=f"Vertical align for {verb}: top, center, or bottom")
    cmd.add_argument(
        "-j",
        "--justify",
        default=None,
        help=f"Horizontal justify for {verb}: left, center, right, or justified",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vbcli", description="CLI for sending messages to a split-flap board")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose HTTP logging")

    # Lets -v follow the sub-command without clobbering a leading -v.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="command", required=True)

    raw_cmd = sub.add_parser("send-raw", parents=[common], help="Send a raw characters JSON matrix")
    raw_cmd.add_argument("characters", nargs="?", default=None, help="Characters JSON, or - for stdin")
    raw_cmd.set_defaults(func=cmd_send_raw)

    send_cmd = sub.add_parser("send", parents=[common], help="Compose template text and send it")
    send_cmd.add_argument("message", nargs="?", default=None, help="Message text, or - for stdin")
    _add_compose_flags(send_cmd, "send")
    send_cmd.add_argument("--format", action="store_true", help="Print composed characters and skip sending")
    send_cmd.set_defaults(func=cmd_send)

    format_cmd = sub.add_parser("format", parents=[common], help="Compose template text and print characters JSON")
    format_cmd.add_argument("message", help="Message text, or - for stdin")
    _add_compose_flags(format_cmd, "format")
    format_cmd.set_defaults(func=cmd_format)

    clear_cmd = sub.add_parser("clear", parents=[common], help="Clear the board (same as send '')")
    _add_compose_flags(clear_cmd, "clear")
    clear_cmd.set_defaults(func=cmd_clear)

    get_cmd = sub.add_parser("get", parents=[common], help="Fetch the current board state as JSON")
    get_cmd.add_argument("-l", "--layout", action="store_true", help="Print only currentMessage.layout")
    get_cmd.set_defaults(func=cmd_get)

    set_tr_cmd = sub.add_parser("set-transition", parents=[common], help="Set board transition type and speed")
    set_tr_cmd.add_argument("--type", required=True, help="Transition type: classic, wave, drift, curtain")
    set_tr_cmd.add_argument("--speed", required=True, help="Transition speed: fast or gentle")
    set_tr_cmd.set_defaults(func=cmd_set_transition)

    get_tr_cmd = sub.add_parser("get-transition", parents=[common], help="Fetch transition settings as JSON")
    get_tr_cmd.set_defaults(func=cmd_get_transition)

    doctor_cmd = sub.add_parser("doctor", parents=[common], help="Print environment and config diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(keep_files=load_config().diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except BoardError as exc:
        get_logger().error(f"{args.command} failed: {exc}", extra={"event": "command_failed"})
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("error: interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
