"""Best-effort decoding of backslash escapes typed on the command line."""

from __future__ import annotations

import re

_SIMPLE = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:"
    r"(?P<simple>[abfnrtv\\\"])"
    r"|x(?P<hex>[0-9a-fA-F]{2})"
    r"|(?P<oct>[0-7]{3})"
    r"|u(?P<u4>[0-9a-fA-F]{4})"
    r"|U(?P<u8>[0-9a-fA-F]{8})"
    r")"
)


def _decode_one(match: re.Match[str]) -> str | None:
    if match.group("simple") is not None:
        return _SIMPLE[match.group("simple")]
    if match.group("hex") is not None:
        return chr(int(match.group("hex"), 16))
    if match.group("oct") is not None:
        value = int(match.group("oct"), 8)
        return chr(value) if value <= 0xFF else None
    value = int(match.group("u4") or match.group("u8"), 16)
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        return None
    return chr(value)


def decode_escapes(text: str) -> str:
    """Turn escapes such as ``\\n`` into their literal characters.

    Follows double-quoted string literal rules. Anything the grammar rejects
    (unknown escape, dangling backslash, bare ``"`` or a raw newline) makes
    the input come back unchanged.
    """
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            match = _ESCAPE_RE.match(text, i)
            if match is None:
                return text
            decoded = _decode_one(match)
            if decoded is None:
                return text
            out.append(decoded)
            i = match.end()
            continue
        if ch in ('"', "\n"):
            return text
        out.append(ch)
        i += 1
    return "".join(out)
