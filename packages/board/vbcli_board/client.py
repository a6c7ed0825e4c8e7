"""HTTP client for the board write/read service and the compose service."""

from __future__ import annotations

import http.client
import json
import logging
import os
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, TextIO

import certifi

from .errors import ConfigurationError, DecodeError, ProtocolError, TransportError, ValidationError
from .models import (
    Align,
    CharacterMatrix,
    ComposeRequest,
    ComposeResult,
    ComposeShape,
    Justify,
    Model,
    TransitionSettings,
    TransitionSpeed,
    TransitionType,
)
from .payload import coerce_matrix

BOARD_BASE_URL = "https://cloud.vestaboard.com"
COMPOSE_BASE_URL = "https://vbml.vestaboard.com"
WRITE_PATH = "/"
TRANSITION_PATH = "/transition"
COMPOSE_PATH = "/compose"
TOKEN_HEADER = "X-vestaboard-token"
DEFAULT_TIMEOUT_S = 15.0

_log = logging.getLogger("vbcli.board")


def build_ssl_context() -> ssl.SSLContext:
    """Create the TLS context for API calls with explicit CA handling."""
    if os.environ.get("VBCLI_ALLOW_INSECURE_TLS", "").strip() == "1":
        return ssl._create_unverified_context()

    ca_bundle = os.environ.get("VBCLI_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)

    return ssl.create_default_context(cafile=certifi.where())


def pretty_json(payload: bytes) -> str:
    trimmed = payload.strip()
    if not trimmed:
        return "<empty>"
    text = trimmed.decode("utf-8", errors="replace")
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def decode_compose_response(body: bytes) -> ComposeResult:
    """Decode either ``{"characters": [[...]]}`` or a bare ``[[...]]``."""
    try:
        value = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"compose API returned malformed JSON: {exc}") from exc

    if isinstance(value, dict):
        wrapped = coerce_matrix(value.get("characters"))
        if wrapped:
            return ComposeResult(characters=wrapped, shape=ComposeShape.WRAPPED)

    bare = coerce_matrix(value)
    if bare:
        return ComposeResult(characters=bare, shape=ComposeShape.BARE)

    raise DecodeError("compose API returned no characters")


@dataclass(frozen=True)
class _Response:
    url: str
    status: int
    body: bytes


class BoardClient:
    """Single-attempt, blocking client; one request in flight per call."""

    def __init__(
        self,
        token: str,
        board_url: str = BOARD_BASE_URL,
        compose_url: str = COMPOSE_BASE_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        verbose: bool = False,
        log_writer: TextIO | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        token = (token or "").strip()
        if not token:
            raise ConfigurationError("VESTABOARD_TOKEN is not set")
        self.board_url = board_url.rstrip("/")
        self.compose_url = compose_url.rstrip("/")
        self.timeout_s = timeout_s
        self.verbose = verbose
        self.log_writer = log_writer
        self._token = token
        self._ssl_context = ssl_context

    # -- board service -------------------------------------------------

    def send_text(self, text: str) -> None:
        self._write({"text": text})

    def send_characters(self, characters: CharacterMatrix) -> None:
        self._write({"characters": characters})

    def get_current(self) -> bytes:
        resp = self._request("GET", self.board_url + WRITE_PATH, headers=self._auth_headers())
        self._raise_for_status("board", resp)
        return resp.body

    def get_transition(self) -> bytes:
        resp = self._request("GET", self.board_url + TRANSITION_PATH, headers=self._auth_headers())
        self._raise_for_status("board", resp)
        return resp.body

    def set_transition(self, transition: TransitionType | str, speed: TransitionSpeed | str) -> None:
        try:
            settings = TransitionSettings(TransitionType(transition), TransitionSpeed(speed))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        resp = self._request(
            "PUT",
            self.board_url + TRANSITION_PATH,
            payload=settings.to_payload(),
            headers=self._auth_headers(),
        )
        self._raise_for_status("board", resp)

    # -- compose service -----------------------------------------------

    def format_message(
        self,
        text: str,
        model: Model | str = Model.FLAGSHIP,
        align: Align | str = Align.CENTER,
        justify: Justify | str = Justify.CENTER,
    ) -> CharacterMatrix:
        return self.compose(text, model, align, justify).characters

    def compose(
        self,
        text: str,
        model: Model | str = Model.FLAGSHIP,
        align: Align | str = Align.CENTER,
        justify: Justify | str = Justify.CENTER,
    ) -> ComposeResult:
        try:
            request = ComposeRequest.for_model(text, model, align, justify)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        resp = self._request("POST", self.compose_url + COMPOSE_PATH, payload=request.to_payload())
        self._raise_for_status("compose", resp)
        result = decode_compose_response(resp.body)
        _log.info(
            f"compose decoded rows={len(result.characters)} shape={result.shape.value}",
            extra={"event": "compose_decoded"},
        )
        return result

    # -- plumbing ------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        return {TOKEN_HEADER: self._token}

    def _write(self, payload: dict[str, Any]) -> None:
        resp = self._request("POST", self.board_url + WRITE_PATH, payload=payload, headers=self._auth_headers())
        if resp.status == 409:
            # Board already shows this message.
            _log.info("board write unchanged (409)", extra={"event": "board_write_conflict"})
            return
        self._raise_for_status("board", resp)

    @staticmethod
    def _raise_for_status(service: str, resp: _Response) -> None:
        if 200 <= resp.status < 300:
            return
        body = resp.body.decode("utf-8", errors="replace").strip()
        raise ProtocolError(service, resp.status, body)

    def _request(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> _Response:
        data: bytes | None = None
        if payload is not None:
            try:
                data = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"marshal payload: {exc}") from exc

        req = urllib.request.Request(url, data=data, method=method)
        if data is not None:
            req.add_header("Content-Type", "application/json")
        for name, value in (headers or {}).items():
            req.add_header(name, value)

        self._trace_request(url, data or b"")
        _log.info(f"{method} {url}", extra={"event": "http_request"})

        context = self._ssl_context
        if context is None and url.startswith("https:"):
            context = build_ssl_context()

        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s, context=context) as raw:
                status = int(raw.status)
                body = raw.read()
        except urllib.error.HTTPError as exc:
            status = exc.code
            try:
                body = exc.read()
            except (OSError, http.client.HTTPException) as read_exc:
                raise TransportError(f"read response from {url}: {read_exc}", read_exc) from read_exc
            finally:
                exc.close()
        except (urllib.error.URLError, OSError, http.client.HTTPException) as exc:
            reason = getattr(exc, "reason", exc)
            _log.warning(f"{method} {url} failed: {reason}", extra={"event": "http_transport_error"})
            raise TransportError(f"could not reach {url}: {reason}", exc) from exc

        self._trace_response(url, status, body)
        _log.info(f"{method} {url} -> {status}", extra={"event": "http_response"})
        return _Response(url=url, status=status, body=body)

    def _trace_request(self, url: str, body: bytes) -> None:
        if not self.verbose or self.log_writer is None:
            return
        self.log_writer.write(f"request URL: {url}\n")
        self.log_writer.write(f"request payload:\n{pretty_json(body)}\n")

    def _trace_response(self, url: str, status: int, body: bytes) -> None:
        if not self.verbose or self.log_writer is None:
            return
        self.log_writer.write(f"response URL: {url}\n")
        self.log_writer.write(f"response status: {status}\n")
        self.log_writer.write(f"response payload:\n{pretty_json(body)}\n")
