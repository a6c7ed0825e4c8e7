"""Message composition and transport for split-flap boards."""

from .aliases import AliasResolver, canonical_alias, substitute_aliases
from .client import BoardClient, decode_compose_response
from .errors import (
    BoardError,
    ConfigurationError,
    DecodeError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from .escapes import decode_escapes
from .models import (
    Align,
    CharacterMatrix,
    ComposeRequest,
    ComposeResult,
    ComposeShape,
    Justify,
    Model,
    TransitionSpeed,
    TransitionType,
)
from .payload import looks_like_raw_characters, parse_characters

__all__ = [
    "AliasResolver",
    "Align",
    "BoardClient",
    "BoardError",
    "CharacterMatrix",
    "ComposeRequest",
    "ComposeResult",
    "ComposeShape",
    "ConfigurationError",
    "DecodeError",
    "Justify",
    "Model",
    "ProtocolError",
    "TransitionSpeed",
    "TransitionType",
    "TransportError",
    "ValidationError",
    "canonical_alias",
    "decode_compose_response",
    "decode_escapes",
    "looks_like_raw_characters",
    "parse_characters",
    "substitute_aliases",
]
