from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import CarNotFound, PuzzleParseError
from .text_export import board_to_lines, board_to_puzzle_text
from .types import Heading, Orientation, Position, Slide
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

EXIT_MARKER = "x"
# Characters that never name a vehicle
NON_VEHICLE_CHARS = frozenset(".+-| ")

EXAMPLE_PUZZLE = """\
+--x---+
|...LLL|
|......|
|..BBBR|
|...G.R|
|..XGUU|
|..X...|
+------+"""

# Which slide a heading corresponds to, per orientation
HEADING_TO_SLIDE: Dict[Orientation, Dict[Heading, Slide]] = {
    Orientation.HORIZONTAL: {Heading.LEFT: Slide.FORWARD, Heading.RIGHT: Slide.BACKWARD},
    Orientation.VERTICAL: {Heading.UP: Slide.FORWARD, Heading.DOWN: Slide.BACKWARD},
}


@dataclass(frozen=True)
class BoardState:
    width: int
    height: int
    exit: Position
    vehicles: Tuple[Vehicle, ...]

    @classmethod
    def parse(cls, text: str) -> Optional["BoardState"]:
        """Parse puzzle text, returning None instead of raising."""
        try:
            return parse_board(text)
        except PuzzleParseError as exc:
            logger.debug("Could not parse puzzle: %s", exc)
            return None

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def find_vehicle(self, vehicle_id: str) -> Optional[Tuple[int, Vehicle]]:
        for i, vehicle in enumerate(self.vehicles):
            if vehicle.id == vehicle_id:
                return i, vehicle
        return None

    def vehicle(self, vehicle_id: str) -> Vehicle:
        found = self.find_vehicle(vehicle_id)
        if found is None:
            raise CarNotFound(vehicle_id)
        return found[1]

    def player(self) -> Optional[Vehicle]:
        return next((v for v in self.vehicles if v.is_player), None)

    def is_solved(self) -> bool:
        return any(v.head() == self.exit for v in self.vehicles if v.is_player)

    def fits(self, vehicle: Vehicle) -> bool:
        """Whether ``vehicle`` may be placed as given, all other vehicles unchanged.

        The Player may stick out of the grid once its head is on the exit;
        every other placement must stay inside the grid.
        """
        if any(vehicle.overlaps(other) for other in self.vehicles):
            return False
        if vehicle.is_player and vehicle.head() == self.exit:
            return True
        return all(self.in_bounds(cell) for cell in vehicle.occupied_cells())

    def move_vehicle(self, vehicle_id: str, direction: Slide) -> Optional["BoardState"]:
        found = self.find_vehicle(vehicle_id)
        if found is None:
            return None
        index, vehicle = found
        moved = vehicle.slide(direction)
        if moved.origin.x < 0 or moved.origin.y < 0:
            return None
        if not self.fits(moved):
            return None
        vehicles = self.vehicles[:index] + (moved,) + self.vehicles[index + 1:]
        return BoardState(self.width, self.height, self.exit, vehicles)

    def next_states(self) -> List["BoardState"]:
        results: List[BoardState] = []
        for vehicle in self.vehicles:
            for direction in (Slide.FORWARD, Slide.BACKWARD):
                nxt = self.move_vehicle(vehicle.id, direction)
                if nxt is not None:
                    results.append(nxt)
        return results

    def apply_heading(self, vehicle_id: str, heading: Heading) -> Optional["BoardState"]:
        """Move a vehicle one cell towards a cardinal heading.

        Returns None when the heading is across the vehicle's axis or the
        move is illegal.
        """
        found = self.find_vehicle(vehicle_id)
        if found is None:
            return None
        direction = HEADING_TO_SLIDE[found[1].orientation].get(heading)
        if direction is None:
            return None
        return self.move_vehicle(vehicle_id, direction)

    def diff(self, previous: "BoardState") -> Optional[Tuple[str, Heading]]:
        """Return the vehicle that moved between ``previous`` and this board, and where to."""
        before = {v.id: v for v in previous.vehicles}
        for vehicle in self.vehicles:
            old = before.get(vehicle.id)
            if old is None or old.head() == vehicle.head():
                continue
            new_head, old_head = vehicle.head(), old.head()
            if new_head.x > old_head.x:
                heading = Heading.RIGHT
            elif new_head.x < old_head.x:
                heading = Heading.LEFT
            elif new_head.y > old_head.y:
                heading = Heading.DOWN
            else:
                heading = Heading.UP
            return vehicle.id, heading
        return None

    def render(self) -> List[str]:
        return board_to_lines(self)

    def to_text(self) -> str:
        return board_to_puzzle_text(self)

    def __str__(self) -> str:
        return "\n".join(self.render())


def parse_board(text: str) -> BoardState:
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines:
        raise PuzzleParseError("Empty puzzle")
    if len(lines) < 3:
        raise PuzzleParseError("Puzzle needs a top border, at least one row and a bottom border")

    row_width = len(lines[0])
    for y, line in enumerate(lines):
        if len(line) != row_width:
            raise PuzzleParseError(f"Row {y} has width {len(line)}, expected {row_width}")

    # Interior size, excluding the border on each side
    width = row_width - 2
    height = len(lines) - 2
    if width < 1 or height < 1:
        raise PuzzleParseError("Puzzle has no interior cells")

    marker: Optional[Position] = None
    cells: Dict[str, List[Position]] = {}
    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            if ch == EXIT_MARKER:
                if marker is None:
                    marker = Position(x, y)
                continue
            if ch in NON_VEHICLE_CHARS:
                continue
            if not (0 < x <= width and 0 < y <= height):
                raise PuzzleParseError(f"Vehicle {ch!r} sits on the border at ({x}, {y})")
            cells.setdefault(ch, []).append(Position(x - 1, y - 1))

    if marker is None:
        raise PuzzleParseError(f"Puzzle has no exit marker {EXIT_MARKER!r}")
    if marker.x not in (0, row_width - 1) and marker.y not in (0, len(lines) - 1):
        raise PuzzleParseError(f"Exit marker at ({marker.x}, {marker.y}) is not on the border")

    # The exit is the interior cell next to the marker
    exit_pos = Position(
        min(max(marker.x - 1, 0), width - 1),
        min(max(marker.y - 1, 0), height - 1),
    )

    vehicles = tuple(Vehicle.from_cells(vid, ps) for vid, ps in cells.items())
    logger.debug("Parsed %dx%d board with %d vehicles, exit at %s", width, height, len(vehicles), exit_pos.as_tuple())

    return BoardState(width=width, height=height, exit=exit_pos, vehicles=vehicles)


def load_board_from_file(path: str | Path) -> BoardState:
    text = Path(path).read_text(encoding="utf-8")
    return parse_board(text)
