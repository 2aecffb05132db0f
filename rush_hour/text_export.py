"""
text_export.py

Convert a BoardState into text.

Two layouts are supported:

- Plain grid: ``height`` lines of ``width`` characters, '.' for empty cells and
  the vehicle id on every cell a vehicle occupies.
- Puzzle text: the plain grid wrapped in a border, in the same format the
  parser reads back:

      +--x---+
      |...LLL|
      |......|
      |..BBBR|
      |...G.R|
      |..XGUU|
      |..X...|
      +------+

  Corners are '+', horizontal edges '-', vertical edges '|', and one border
  cell next to the exit is replaced by 'x'.

Cells outside the grid (a Player car that drove out through the exit) are
not drawn.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .board import BoardState

DEFAULT_SYMBOLS: Dict[str, str] = {
    'corner': '+',
    'h_wall': '-',
    'v_wall': '|',
    'exit': 'x',
    'empty': '.',
}


def board_to_grid(board: "BoardState", symbols: Optional[Dict[str, str]] = None) -> List[List[str]]:
    syms = dict(DEFAULT_SYMBOLS)
    if symbols:
        syms.update(symbols)

    grid: List[List[str]] = [[syms['empty'] for _ in range(board.width)] for _ in range(board.height)]
    for vehicle in board.vehicles:
        for cell in vehicle.occupied_cells():
            if board.in_bounds(cell):
                grid[cell.y][cell.x] = vehicle.id[:1]
    return grid


def board_to_lines(board: "BoardState", symbols: Optional[Dict[str, str]] = None) -> List[str]:
    return ["".join(row) for row in board_to_grid(board, symbols)]


def exit_marker_position(board: "BoardState") -> Tuple[int, int]:
    """Return the (column, row) of the exit marker in the bordered layout."""
    ex, ey = board.exit.x, board.exit.y
    if ey == 0:
        return ex + 1, 0
    if ex == 0:
        return 0, ey + 1
    if ex == board.width - 1:
        return board.width + 1, ey + 1
    return ex + 1, board.height + 1


def board_to_puzzle_text(board: "BoardState", symbols: Optional[Dict[str, str]] = None) -> str:
    syms = dict(DEFAULT_SYMBOLS)
    if symbols:
        syms.update(symbols)

    edge = syms['corner'] + syms['h_wall'] * board.width + syms['corner']
    rows: List[List[str]] = [list(edge)]
    for line in board_to_lines(board, syms):
        rows.append(list(syms['v_wall'] + line + syms['v_wall']))
    rows.append(list(edge))

    mx, my = exit_marker_position(board)
    rows[my][mx] = syms['exit']

    return "\n".join("".join(row) for row in rows)
