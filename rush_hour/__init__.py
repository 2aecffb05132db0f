"""Rush Hour solver package.

Exposes public APIs for parsing puzzles and solving them.
"""

from .types import (
    Position,
    Heading,
    Orientation,
    Slide,
    VehicleKind,
)
from .errors import (
    RushHourError,
    PuzzleParseError,
    InvalidVehicle,
    InvalidMove,
    CarNotFound,
    SearchLimitReached,
)
from .vehicle import Vehicle
from .board import BoardState, parse_board, load_board_from_file
from .solver import Step, solve

__all__ = [
    "Position",
    "Heading",
    "Orientation",
    "Slide",
    "VehicleKind",
    "RushHourError",
    "PuzzleParseError",
    "InvalidVehicle",
    "InvalidMove",
    "CarNotFound",
    "SearchLimitReached",
    "Vehicle",
    "BoardState",
    "parse_board",
    "load_board_from_file",
    "Step",
    "solve",
]
