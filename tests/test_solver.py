import unittest

import pytest

from rush_hour.board import parse_board
from rush_hour.errors import InvalidMove, SearchLimitReached
from rush_hour.solver import (
    Step,
    atomic_moves,
    breadth_first_search,
    compress_moves,
    expand_steps,
    reconstruct_path,
    replay,
    solve,
)
from rush_hour.types import Heading

CLASSIC = """
        +--x---+
        |...LLL|
        |......|
        |..BBBR|
        |...G.R|
        |..XGUU|
        |..X...|
        +------+
        """

CLASSIC_SOLUTION = [
    ('L', 'left', 3),
    ('B', 'left', 2),
    ('G', 'up', 3),
    ('B', 'right', 2),
    ('X', 'up', 1),
    ('U', 'left', 1),
    ('R', 'down', 1),
    ('B', 'right', 1),
    ('X', 'up', 1),
    ('U', 'left', 3),
    ('X', 'down', 1),
    ('B', 'left', 3),
    ('G', 'down', 1),
    ('L', 'right', 3),
    ('G', 'down', 2),
    ('B', 'right', 3),
    ('X', 'up', 3),
]

TWO_MOVES = """
+-x--+
|.AA.|
|.X..|
|.X..|
+----+
"""

MEDIUM = """
+--x---+
|.AA...|
|....B.|
|..X.B.|
|..XCC.|
|DD....|
|......|
+------+
"""

RIGHT_EXIT = """
+------+
|AA..B.|
|XX..B.x
|......|
|......|
+------+
"""

BOXED_IN = """
+-x-+
|AAA|
|BXC|
|BXC|
+---+
"""


def min_moves_by_layers(board):
    """Shortest distance to a solved board, one BFS layer at a time."""
    seen = {board}
    layer = [board]
    depth = 0
    while layer:
        if any(s.is_solved() for s in layer):
            return depth
        nxt_layer = []
        for state in layer:
            for nxt in state.next_states():
                if nxt not in seen:
                    seen.add(nxt)
                    nxt_layer.append(nxt)
        layer = nxt_layer
        depth += 1
    return None


class TestClassicPuzzle(unittest.TestCase):
    def test_solve_classic(self):
        plan = solve(parse_board(CLASSIC))
        self.assertIsNotNone(plan)
        self.assertEqual([s.as_tuple() for s in plan], CLASSIC_SOLUTION)
        self.assertEqual(len(plan), 17)
        self.assertEqual(plan[0].as_tuple(), ('L', 'left', 3))
        self.assertEqual(plan[-1].as_tuple(), ('X', 'up', 3))
        self.assertEqual(sum(s.count for s in plan), 34)

    def test_classic_solution_replays_to_solved_board(self):
        board = parse_board(CLASSIC)
        plan = solve(board)
        final = replay(board, expand_steps(plan))
        self.assertTrue(final.is_solved())

    def test_classic_solution_is_shortest(self):
        board = parse_board(CLASSIC)
        plan = solve(board)
        self.assertEqual(sum(s.count for s in plan), min_moves_by_layers(board))


def test_two_move_puzzle():
    plan = solve(parse_board(TWO_MOVES))
    assert [s.as_tuple() for s in plan] == [('A', 'right', 1), ('X', 'up', 1)]
    assert plan[0].description == 'A - right 1'


@pytest.mark.parametrize('text', [TWO_MOVES, MEDIUM, RIGHT_EXIT, BOXED_IN])
def test_bfs_matches_exhaustive_shortest_distance(text):
    board = parse_board(text)
    plan = solve(board)
    expected = min_moves_by_layers(board)
    if expected is None:
        assert plan is None
    else:
        assert plan is not None
        assert sum(s.count for s in plan) == expected


def test_player_drives_out_through_right_exit():
    board = parse_board(RIGHT_EXIT)
    plan = solve(board)
    assert plan is not None
    assert sum(s.count for s in plan) == 7
    assert plan[-1].vehicle_id == 'X' and plan[-1].heading == Heading.RIGHT
    final = replay(board, expand_steps(plan))
    assert final.is_solved()
    # Tail is past the right edge
    assert not final.in_bounds(final.vehicle('X').tail())


def test_path_continuity_and_compression():
    board = parse_board(MEDIUM)
    goal, came_from = breadth_first_search(board)
    assert goal is not None
    path = reconstruct_path(came_from, goal)
    assert path[0] == board and path[-1] == goal

    moves = atomic_moves(path)
    assert len(moves) == len(path) - 1
    # Replaying the atomic moves walks the same path
    state = board
    for move, expected in zip(moves, path[1:]):
        state = replay(state, [move])
        assert state == expected

    steps = compress_moves(moves)
    assert expand_steps(steps) == moves
    for a, b in zip(steps, steps[1:]):
        assert (a.vehicle_id, a.heading) != (b.vehicle_id, b.heading)


def test_compress_moves_run_length():
    moves = [
        ('A', Heading.LEFT), ('A', Heading.LEFT), ('B', Heading.UP),
        ('A', Heading.LEFT), ('A', Heading.RIGHT), ('A', Heading.RIGHT),
    ]
    assert [s.as_tuple() for s in compress_moves(moves)] == [
        ('A', 'left', 2), ('B', 'up', 1), ('A', 'left', 1), ('A', 'right', 2),
    ]
    assert compress_moves([]) == []
    assert expand_steps([Step('C', Heading.DOWN, 3)]) == [('C', Heading.DOWN)] * 3


def test_already_solved_gives_empty_plan():
    board = parse_board("+x---+\n|XAA.|\n|X...|\n+----+")
    assert solve(board) == []


def test_boxed_in_player_has_no_solution():
    board = parse_board(BOXED_IN)
    assert board.next_states() == []
    assert solve(board) is None


def test_no_player_exhausts_state_space():
    board = parse_board("+-x--+\n|.AA.|\n|....|\n+----+")
    goal, came_from = breadth_first_search(board)
    assert goal is None
    assert len(came_from) == 3
    assert solve(board) is None


def test_search_limit():
    board = parse_board(CLASSIC)
    with pytest.raises(SearchLimitReached) as info:
        solve(board, max_states=10)
    assert info.value.limit == 10
    # A generous limit does not change the answer
    assert len(solve(parse_board(TWO_MOVES), max_states=100)) == 2


def test_on_expand_sees_every_dequeued_state():
    seen = []
    board = parse_board(TWO_MOVES)
    solve(board, on_expand=seen.append)
    assert seen[0] == board
    assert seen[-1].is_solved()
    assert len(seen) == len(set(seen))


def test_replay_rejects_illegal_move():
    board = parse_board(TWO_MOVES)
    with pytest.raises(InvalidMove):
        replay(board, [('X', Heading.UP)])
    with pytest.raises(InvalidMove):
        replay(board, [('A', Heading.UP)])
