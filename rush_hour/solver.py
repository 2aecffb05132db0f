from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, Optional, Tuple

from .board import BoardState
from .errors import InvalidMove, SearchLimitReached
from .types import Heading

logger = logging.getLogger(__name__)

Move = Tuple[str, Heading]
CameFrom = Dict[BoardState, Optional[BoardState]]


@dataclass
class Step:
    vehicle_id: str
    heading: Heading
    count: int = 1

    def as_tuple(self) -> Tuple[str, str, int]:
        return (self.vehicle_id, self.heading.value, self.count)

    @property
    def description(self) -> str:
        return f"{self.vehicle_id} - {self.heading.value} {self.count}"


def breadth_first_search(
    start: BoardState,
    max_states: Optional[int] = None,
    on_expand: Optional[Callable[[BoardState], None]] = None,
) -> Tuple[Optional[BoardState], CameFrom]:
    """Search outward from ``start`` until a solved board is taken off the queue.

    Returns the solved board (or None when every reachable board was tried)
    together with the predecessor map. ``max_states`` bounds how many boards
    are taken off the queue; going past it raises SearchLimitReached.
    """
    came_from: CameFrom = {start: None}
    queue: Deque[BoardState] = deque([start])
    expanded = 0

    while queue:
        state = queue.popleft()
        if max_states is not None and expanded >= max_states:
            raise SearchLimitReached(max_states)
        expanded += 1
        if on_expand is not None:
            on_expand(state)

        if state.is_solved():
            logger.debug("Solved after expanding %d states (%d discovered)", expanded, len(came_from))
            return state, came_from

        for nxt in state.next_states():
            if nxt not in came_from:
                came_from[nxt] = state
                queue.append(nxt)

    logger.debug("State space exhausted after %d states", expanded)
    return None, came_from


def reconstruct_path(came_from: CameFrom, goal: BoardState) -> List[BoardState]:
    path: List[BoardState] = []
    current: Optional[BoardState] = goal
    while current is not None:
        path.append(current)
        current = came_from[current]
    path.reverse()
    return path


def atomic_moves(path: List[BoardState]) -> List[Move]:
    moves: List[Move] = []
    for prev, nxt in zip(path, path[1:]):
        change = nxt.diff(prev)
        if change is not None:
            moves.append(change)
    return moves


def compress_moves(moves: Iterable[Move]) -> List[Step]:
    steps: List[Step] = []
    for vehicle_id, heading in moves:
        if steps and steps[-1].vehicle_id == vehicle_id and steps[-1].heading == heading:
            steps[-1].count += 1
        else:
            steps.append(Step(vehicle_id, heading))
    return steps


def expand_steps(steps: Iterable[Step]) -> List[Move]:
    return [(s.vehicle_id, s.heading) for s in steps for _ in range(s.count)]


def replay(board: BoardState, moves: Iterable[Move]) -> BoardState:
    """Apply atomic moves one after another, failing on the first illegal one."""
    for i, (vehicle_id, heading) in enumerate(moves):
        nxt = board.apply_heading(vehicle_id, heading)
        if nxt is None:
            raise InvalidMove(f"Move {i + 1} ({vehicle_id} {heading.value}) is not legal")
        board = nxt
    return board


def solve(
    board: BoardState,
    max_states: Optional[int] = None,
    on_expand: Optional[Callable[[BoardState], None]] = None,
) -> Optional[List[Step]]:
    goal, came_from = breadth_first_search(board, max_states=max_states, on_expand=on_expand)
    if goal is None:
        return None
    steps = compress_moves(atomic_moves(reconstruct_path(came_from, goal)))
    logger.info("Solution found in %d steps (%d moves)", len(steps), sum(s.count for s in steps))
    return steps
