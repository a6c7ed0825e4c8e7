"""Typed request/response models for the board and compose services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Row-major grid of character codes (0..71); range is enforced remotely.
CharacterMatrix = list[list[int]]


class Model(str, Enum):
    FLAGSHIP = "flagship"
    NOTE = "note"


class Align(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Justify(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "justified"


class TransitionType(str, Enum):
    CLASSIC = "classic"
    WAVE = "wave"
    DRIFT = "drift"
    CURTAIN = "curtain"


class TransitionSpeed(str, Enum):
    FAST = "fast"
    GENTLE = "gentle"


class ComposeShape(str, Enum):
    WRAPPED = "wrapped"
    BARE = "bare"


@dataclass(frozen=True)
class ComponentStyle:
    align: Align = Align.CENTER
    justify: Justify = Justify.CENTER


@dataclass(frozen=True)
class Component:
    template: str
    style: ComponentStyle


@dataclass(frozen=True)
class BoardDimensions:
    height: int
    width: int


NOTE_DIMENSIONS = BoardDimensions(height=3, width=15)


@dataclass(frozen=True)
class ComposeRequest:
    """Body of a compose call.

    ``style`` is only set for models with a fixed small grid; it is omitted
    from the payload entirely otherwise.
    """

    components: tuple[Component, ...]
    style: BoardDimensions | None = None

    @classmethod
    def for_model(
        cls, template: str, model: Model | str, align: Align | str, justify: Justify | str
    ) -> "ComposeRequest":
        style = ComponentStyle(align=Align(align), justify=Justify(justify))
        component = Component(template=template, style=style)
        if Model(model) is Model.NOTE:
            return cls(components=(component,), style=NOTE_DIMENSIONS)
        return cls(components=(component,))

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "components": [
                {
                    "template": c.template,
                    "style": {"align": c.style.align.value, "justify": c.style.justify.value},
                }
                for c in self.components
            ]
        }
        if self.style is not None:
            payload["style"] = {"height": self.style.height, "width": self.style.width}
        return payload


@dataclass(frozen=True)
class ComposeResult:
    characters: CharacterMatrix
    shape: ComposeShape


@dataclass(frozen=True)
class TransitionSettings:
    transition: TransitionType
    speed: TransitionSpeed

    def to_payload(self) -> dict[str, str]:
        return {"transition": self.transition.value, "transitionSpeed": self.speed.value}
