"""Plain geometry values used by the layout engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def at(cls, x: float, y: float, size: Size) -> "Rect":
        return cls(x, y, size.width, size.height)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


ZERO_RECT = Rect()
