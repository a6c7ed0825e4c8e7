"""Rewrite human-readable ``{alias}`` tokens into numeric character codes."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_DEFAULT_ALIASES: dict[str, int] = {
    "blank": 0,
    "space": 0,
    "exclamation": 37,
    "exclamation mark": 37,
    "at": 38,
    "pound": 39,
    "hash": 39,
    "dollar": 40,
    "left parenthesis": 41,
    "open parenthesis": 41,
    "right parenthesis": 42,
    "close parenthesis": 42,
    "hyphen": 44,
    "dash": 44,
    "plus": 46,
    "ampersand": 47,
    "equal": 48,
    "equals": 48,
    "semicolon": 49,
    "colon": 50,
    "single quote": 52,
    "apostrophe": 52,
    "double quote": 53,
    "percent": 54,
    "comma": 55,
    "period": 56,
    "dot": 56,
    "slash": 59,
    "forward slash": 59,
    "question": 60,
    "question mark": 60,
    "degree": 62,
    "heart": 62,
    "red": 63,
    "orange": 64,
    "yellow": 65,
    "green": 66,
    "blue": 67,
    "violet": 68,
    "purple": 68,
    "white": 69,
    "black": 70,
    "filled": 71,
}


def canonical_alias(name: str) -> str:
    """Lowercase, fold ``_``/``-`` to spaces and collapse whitespace."""
    lowered = name.strip().lower().replace("_", " ").replace("-", " ")
    return " ".join(lowered.split())


class AliasResolver:
    """Scans template text and resolves single-brace alias tokens.

    ``{{...}}`` expression tokens belong to the compose service and are
    copied through verbatim, so the double-brace check must run before the
    single-brace one.
    """

    def __init__(self, aliases: Mapping[str, int] | None = None) -> None:
        source = _DEFAULT_ALIASES if aliases is None else aliases
        self._aliases: Mapping[str, int] = MappingProxyType(
            {canonical_alias(k): int(v) for k, v in source.items()}
        )

    @property
    def aliases(self) -> Mapping[str, int]:
        return self._aliases

    def lookup(self, name: str) -> int | None:
        return self._aliases.get(canonical_alias(name))

    def rewrite_token(self, interior: str) -> str:
        token = interior.strip()
        if _INTEGER_RE.fullmatch(token):
            return f"{{{token}}}"
        code = self.lookup(token)
        if code is not None:
            return f"{{{code}}}"
        return f"{{{interior}}}"

    def resolve(self, text: str) -> str:
        out: list[str] = []
        i = 0
        n = len(text)
        while i < n:
            if text.startswith("{{", i):
                end = text.find("}}", i + 2)
                if end == -1:
                    out.append(text[i:])
                    break
                out.append(text[i : end + 2])
                i = end + 2
                continue

            if text[i] != "{":
                out.append(text[i])
                i += 1
                continue

            end = text.find("}", i + 1)
            if end == -1:
                out.append(text[i:])
                break
            out.append(self.rewrite_token(text[i + 1 : end]))
            i = end + 1

        return "".join(out)


DEFAULT_RESOLVER = AliasResolver()


def substitute_aliases(text: str) -> str:
    return DEFAULT_RESOLVER.resolve(text)
