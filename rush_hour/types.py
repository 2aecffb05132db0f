from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


PLAYER_ID = "X"


class VehicleKind(Enum):
    PLAYER = auto()
    OTHER = auto()


class Orientation(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


class Slide(Enum):
    """Movement along a vehicle's own axis."""

    FORWARD = auto()  # towards the origin (decreasing coordinate)
    BACKWARD = auto()


class Heading(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, text: str) -> "Heading":
        return cls(text.strip().lower())


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def move(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

