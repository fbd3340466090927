"""Annotation shapes, their colours and the painter that holds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NewType, Optional, Sequence

AnnotShapeId = NewType("AnnotShapeId", int)

Pos2 = tuple[float, float]
WorldRange = tuple[float, float]

LABEL_TEXT_SIZE = 12.0


def _round_u8(value: float) -> int:
    """Round half up and saturate into 0..=255."""
    return max(0, min(255, int(value + 0.5)))


def _gamma_u8_from_linear(linear: float) -> int:
    if linear <= 0.0:
        return 0
    if linear <= 0.0031308:
        return _round_u8(3294.6 * linear)
    if linear <= 1.0:
        return _round_u8(269.025 * linear ** (1.0 / 2.4) - 14.025)
    return 255


def _linear_from_gamma_u8(value: int) -> float:
    if value <= 10:
        return value / 3294.6
    return ((value + 14.025) / 269.025) ** 2.4


def _check_u8(name: str, value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..=255, got {value}")
    return value


@dataclass(frozen=True)
class Color32:
    """A premultiplied sRGBA colour with 8 bits per channel."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            _check_u8(name, getattr(self, name))

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color32":
        return cls(r, g, b, 255)

    @classmethod
    def from_linear_rgb(cls, r: float, g: float, b: float) -> "Color32":
        """Build an opaque colour from linear-space components in 0.0..=1.0."""
        return cls._from_linear_rgba(r, g, b, 1.0)

    @classmethod
    def _from_linear_rgba(cls, r: float, g: float, b: float, a: float) -> "Color32":
        return cls(
            _gamma_u8_from_linear(r),
            _gamma_u8_from_linear(g),
            _gamma_u8_from_linear(b),
            _round_u8(abs(a) * 255.0),
        )

    def _to_linear_rgba(self) -> tuple[float, float, float, float]:
        return (
            _linear_from_gamma_u8(self.r),
            _linear_from_gamma_u8(self.g),
            _linear_from_gamma_u8(self.b),
            self.a / 255.0,
        )

    def linear_multiply(self, factor: float) -> "Color32":
        """Scale all channels, alpha included, in linear space."""
        r, g, b, a = self._to_linear_rgba()
        return self._from_linear_rgba(r * factor, g * factor, b * factor, a * factor)

    def gamma_multiply(self, factor: float) -> "Color32":
        """Scale all channels, alpha included, directly in gamma space."""
        return Color32(
            _round_u8(self.r * factor),
            _round_u8(self.g * factor),
            _round_u8(self.b * factor),
            _round_u8(self.a * factor),
        )


BLACK = Color32(0, 0, 0, 255)


@dataclass
class AnnotationDrawConfig:
    """Settings for drawing annotation regions."""

    color_region_opacity: float = 0.7
    color_region_border: bool = True


class DrawAnnotation:
    """Something the annotation painter can hold; position and colour are optional."""

    def set_position(self, pos: Optional[Pos2]) -> None:
        """Move the shape on screen; shapes without a position ignore this."""

    def set_color(self, color: Color32) -> None:
        """Recolour the shape; shapes without a colour ignore this."""


class AnnotationDrawCollection(DrawAnnotation):
    """A group of shapes that move and change colour together."""

    def __init__(self, shapes: Sequence[DrawAnnotation] = ()) -> None:
        self.shapes: list[DrawAnnotation] = list(shapes)

    def __iter__(self) -> Iterator[DrawAnnotation]:
        return iter(self.shapes)

    def __len__(self) -> int:
        return len(self.shapes)

    def set_position(self, pos: Optional[Pos2]) -> None:
        for shape in self.shapes:
            shape.set_position(pos)

    def set_color(self, color: Color32) -> None:
        for shape in self.shapes:
            shape.set_color(color)


@dataclass
class AnnotationLabel(DrawAnnotation):
    """A text label, centred on its screen position when it has one."""

    text: str
    screen_pos: Optional[Pos2] = None
    color: Color32 = field(default=BLACK)
    text_size: float = LABEL_TEXT_SIZE

    def set_position(self, pos: Optional[Pos2]) -> None:
        self.screen_pos = pos


@dataclass
class AnnotationWorldRegion(DrawAnnotation):
    """A coloured band over a world-space range on one or both axes."""

    world_x_range: Optional[WorldRange]
    world_y_range: Optional[WorldRange]
    color: Color32

    def set_color(self, color: Color32) -> None:
        self.color = color

    def fill_color(self, config: AnnotationDrawConfig) -> Color32:
        return self.color.gamma_multiply(config.color_region_opacity)

    def stroke_color(self, config: AnnotationDrawConfig) -> Optional[Color32]:
        """Border colour, or None when borders are switched off."""
        if not config.color_region_border:
            return None
        return self.color.gamma_multiply(0.5)


class AnnotationPainter:
    """Holds annotation shapes by id, each of which can be switched on or off."""

    def __init__(self) -> None:
        self._shapes: list[DrawAnnotation] = []
        self._enabled: list[bool] = []

    def __len__(self) -> int:
        return len(self._shapes)

    def _check_id(self, shape_id: AnnotShapeId) -> int:
        if not 0 <= shape_id < len(self._shapes):
            raise IndexError(f"no annotation shape with id {shape_id}")
        return shape_id

    def add_shape(self, shape: DrawAnnotation) -> AnnotShapeId:
        shape_id = AnnotShapeId(len(self._shapes))
        self._shapes.append(shape)
        self._enabled.append(True)
        return shape_id

    def add_collection(self, shapes: Sequence[DrawAnnotation]) -> AnnotShapeId:
        return self.add_shape(AnnotationDrawCollection(shapes))

    def get_shape(self, shape_id: AnnotShapeId) -> Optional[DrawAnnotation]:
        if not 0 <= shape_id < len(self._shapes):
            return None
        return self._shapes[shape_id]

    def set_shape_color(self, shape_id: AnnotShapeId, color: Color32) -> None:
        self._shapes[self._check_id(shape_id)].set_color(color)

    def is_shape_enabled(self, shape_id: AnnotShapeId) -> bool:
        return self._enabled[self._check_id(shape_id)]

    def set_enable_shape(self, shape_id: AnnotShapeId, enabled: bool) -> None:
        self._enabled[self._check_id(shape_id)] = enabled

    def enabled_shapes(self) -> Iterator[tuple[AnnotShapeId, DrawAnnotation]]:
        """Yield the enabled shapes with their ids, in the order they were added."""
        for index, (shape, enabled) in enumerate(zip(self._shapes, self._enabled)):
            if enabled:
                yield AnnotShapeId(index), shape