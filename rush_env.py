"""
Rush Hour environment for applying moves one at a time.

This module implements a small step-based environment on top of
``rush_hour.BoardState``, for playing a puzzle by hand or checking a proposed
solution move by move.

Supported actions (with or without leading "Action:"):
- "<car> <heading> [count]": slide a car up/down/left/right, count cells
  (default 1). The solver's output format "<car> - <heading> <count>" is
  accepted too.
- UNDO: revert the last applied action
- RESET: restore the initial state

Rules implemented:
- A car only moves along its own axis, one cell at a time; a multi-cell
  action stops at the first cell that is blocked.
- The game is won (done = True, won = True) once the Player car 'X' has its
  head on the exit.

Usage (as library):
    from rush_env import Game

    game = Game.from_text(open('puzzles/classic.txt').read())
    print(game.to_text())
    res = game.step('L left 3')
    print(res.ascii)

CLI (one-shot):
    python rush_env.py puzzles/classic.txt "L left 3" "B left 2"

This prints the board after each action and a JSON summary.
"""
from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from rush_hour.board import BoardState, parse_board
from rush_hour.types import Heading

MOVE_RE = re.compile(r"^(\S+?)\s*(?:-\s*)?\b(up|down|left|right)\b(?:\s+(\d+))?$", re.IGNORECASE)


@dataclass
class Action:
    kind: str  # 'MOVE', 'UNDO' or 'RESET'
    vehicle_id: Optional[str] = None
    heading: Optional[Heading] = None
    count: int = 1

    def __str__(self) -> str:
        if self.kind != 'MOVE':
            return self.kind
        return f"{self.vehicle_id} {self.heading.value} {self.count}"


@dataclass
class StepResult:
    ok: bool
    action: str
    moved: bool
    blocked: bool
    cells: int
    won: bool
    done: bool
    reason: Optional[str]
    ascii: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.ok,
            'action': self.action,
            'moved': self.moved,
            'blocked': self.blocked,
            'cells': self.cells,
            'won': self.won,
            'done': self.done,
            'reason': self.reason,
        }


class Game:
    def __init__(self, board: BoardState):
        self.initial = board
        self.reset()

    @classmethod
    def from_text(cls, text: str) -> 'Game':
        return cls(parse_board(text))

    @classmethod
    def from_file(cls, path: str | Path) -> 'Game':
        return cls.from_text(Path(path).read_text(encoding='utf-8'))

    def reset(self) -> None:
        self.board = self.initial
        self.won = self.board.is_solved()
        self.done = self.won
        self.history: List[Dict[str, Any]] = []
        self.move_count = 0

    def snapshot(self) -> Dict[str, Any]:
        # Boards are immutable, no copy needed
        return {
            'board': self.board,
            'done': self.done,
            'won': self.won,
            'move_count': self.move_count,
        }

    def restore(self, snap: Dict[str, Any]) -> None:
        self.board = snap['board']
        self.done = snap['done']
        self.won = snap['won']
        self.move_count = snap.get('move_count', 0)

    @staticmethod
    def parse_action(s: str) -> Optional[Action]:
        if not isinstance(s, str):
            return None
        t = s.strip()
        if not t:
            return None
        # allow prefix like "Action: L left 2"
        if ':' in t:
            _, t2 = t.split(':', 1)
            t = t2.strip()
        if t.upper() in {'UNDO', 'RESET'}:
            return Action(t.upper())
        m = MOVE_RE.match(t)
        if not m:
            return None
        count = int(m.group(3)) if m.group(3) else 1
        if count < 1:
            return None
        return Action('MOVE', m.group(1), Heading.parse(m.group(2)), count)

    def to_text(self) -> str:
        return self.board.to_text()

    def _result(self, ok: bool, action: str, reason: Optional[str] = None,
                moved: bool = False, blocked: bool = False, cells: int = 0) -> StepResult:
        return StepResult(ok, action, moved, blocked, cells, self.won, self.done, reason, self.to_text())

    def step(self, action: str) -> StepResult:
        a = self.parse_action(action)
        if a is None:
            return self._result(False, str(action), 'invalid_action')

        if a.kind == 'RESET':
            self.reset()
            return self._result(True, str(a))

        if a.kind == 'UNDO':
            if not self.history:
                return self._result(False, str(a), 'no_history')
            self.restore(self.history.pop())
            return self._result(True, str(a))

        if self.done:
            return self._result(False, str(a), 'game_over')

        if self.board.find_vehicle(a.vehicle_id) is None:
            return self._result(False, str(a), 'unknown_vehicle')

        # Record state for UNDO
        self.history.append(self.snapshot())

        cells = 0
        blocked = False
        for _ in range(a.count):
            nxt = self.board.apply_heading(a.vehicle_id, a.heading)
            if nxt is None:
                blocked = True
                break
            self.board = nxt
            cells += 1
            if self.board.is_solved():
                self.done = True
                self.won = True
                break

        self.move_count += cells
        return self._result(True, str(a), moved=cells > 0, blocked=blocked, cells=cells)


def _main(argv: List[str]) -> int:
    if len(argv) < 2:
        print('usage: python rush_env.py <puzzle.txt> [ACTIONS ...]', file=sys.stderr)
        return 2
    game = Game.from_file(argv[1])
    for a in argv[2:]:
        res = game.step(a)
        print(f'\n=== {res.action} ===')
        print(res.ascii)
        if res.reason:
            print(f'# reason: {res.reason}')
        if res.done:
            break
    summary = {
        'moves': game.move_count,
        'done': game.done,
        'won': game.won,
    }
    print('\n# summary:')
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(_main(sys.argv))
