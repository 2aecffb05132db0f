from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator

from .errors import InvalidVehicle
from .types import PLAYER_ID, Orientation, Position, Slide, VehicleKind


@dataclass(frozen=True)
class Vehicle:
    id: str
    kind: VehicleKind
    origin: Position
    length: int
    orientation: Orientation

    @classmethod
    def from_cells(cls, vehicle_id: str, cells: Iterable[Position]) -> "Vehicle":
        """Build a vehicle from the (unordered) cells it occupies.

        The cells are expected to form one straight run; this is not checked.
        """
        cells = list(cells)
        if not cells:
            raise InvalidVehicle(f"Vehicle {vehicle_id!r} has no cells")
        rows = {c.y for c in cells}
        orientation = Orientation.HORIZONTAL if len(rows) == 1 else Orientation.VERTICAL
        kind = VehicleKind.PLAYER if vehicle_id == PLAYER_ID else VehicleKind.OTHER
        origin = Position(min(c.x for c in cells), min(c.y for c in cells))
        return cls(
            id=vehicle_id,
            kind=kind,
            origin=origin,
            length=len(cells),
            orientation=orientation,
        )

    @property
    def is_player(self) -> bool:
        return self.kind == VehicleKind.PLAYER

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == Orientation.HORIZONTAL

    def head(self) -> Position:
        return self.origin

    def occupied_cells(self) -> Iterator[Position]:
        dx, dy = (1, 0) if self.is_horizontal else (0, 1)
        for i in range(self.length):
            yield self.origin.move(dx * i, dy * i)

    def tail(self) -> Position:
        dx, dy = (1, 0) if self.is_horizontal else (0, 1)
        n = self.length - 1
        return self.origin.move(dx * n, dy * n)

    def includes(self, pos: Position) -> bool:
        return any(cell == pos for cell in self.occupied_cells())

    def overlaps(self, other: "Vehicle") -> bool:
        if other.id == self.id:
            return False
        theirs = set(other.occupied_cells())
        return any(cell in theirs for cell in self.occupied_cells())

    def slide(self, direction: Slide, delta: int = 1) -> "Vehicle":
        # No bounds checking here; the board decides legality
        step = -delta if direction == Slide.FORWARD else delta
        if self.is_horizontal:
            return replace(self, origin=self.origin.move(step, 0))
        return replace(self, origin=self.origin.move(0, step))
