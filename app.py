from flask import Flask, request, jsonify
import os
import re
import uuid
from datetime import datetime, timezone

from rush_env import Game
from rush_hour.board import EXAMPLE_PUZZLE, parse_board
from rush_hour.errors import PuzzleParseError, SearchLimitReached
from rush_hour.solver import solve

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, 'data')
PUZZLES_DIR = os.path.join(DATA_DIR, 'puzzles')
DEFAULT_PUZZLE = 'classic.txt'


def ensure_data_dir() -> None:
    os.makedirs(PUZZLES_DIR, exist_ok=True)


def _is_safe_puzzle_name(name: str) -> bool:
    # Allow only simple names like "foo.txt", alnum, dash, underscore, dot
    if not isinstance(name, str) or len(name) == 0 or len(name) > 128:
        return False
    return re.fullmatch(r"[A-Za-z0-9_.-]+", name) is not None and name.lower().endswith('.txt')


def list_puzzles() -> list[str]:
    ensure_data_dir()
    return sorted(fn for fn in os.listdir(PUZZLES_DIR) if _is_safe_puzzle_name(fn))


def load_puzzle_text(name: str | None) -> tuple[str, str]:
    """Load puzzle text by name. Returns (puzzle_name, text).
    - name == None -> the default puzzle, seeded with the example if missing
    - else load data/puzzles/<name>
    """
    ensure_data_dir()
    if not name:
        name = DEFAULT_PUZZLE
        path = os.path.join(PUZZLES_DIR, name)
        if not os.path.exists(path):
            save_puzzle_text(name, EXAMPLE_PUZZLE)
    if not _is_safe_puzzle_name(name):
        raise ValueError('invalid_puzzle_name')
    path = os.path.join(PUZZLES_DIR, name)
    if not os.path.exists(path):
        raise FileNotFoundError('puzzle_not_found')
    with open(path, 'r', encoding='utf-8') as f:
        return name, f.read()


def save_puzzle_text(name: str, text: str) -> None:
    ensure_data_dir()
    with open(os.path.join(PUZZLES_DIR, name), 'w', encoding='utf-8') as f:
        f.write(text.strip() + '\n')


def _puzzle_text_from_body(body: dict) -> str:
    text = body.get('text')
    if isinstance(text, str) and text.strip():
        return text
    _, text = load_puzzle_text(body.get('name'))
    return text


@app.get('/api/puzzles')
def api_list_puzzles():
    try:
        names = list_puzzles()
        default = DEFAULT_PUZZLE if DEFAULT_PUZZLE in names else (names[0] if names else None)
        return jsonify({'puzzles': names, 'default': default})
    except OSError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400


@app.get('/api/puzzles/<name>')
def api_get_puzzle(name: str):
    try:
        loaded_name, text = load_puzzle_text(name)
    except FileNotFoundError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 404
    except ValueError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400
    return jsonify({'name': loaded_name, 'text': text})


@app.post('/api/puzzles/<name>')
def api_save_puzzle(name: str):
    if not _is_safe_puzzle_name(name):
        return jsonify({'status': 'error', 'message': 'invalid_puzzle_name'}), 400
    body = request.get_json(force=True) or {}
    text = body.get('text') or ''
    try:
        parse_board(text)
    except PuzzleParseError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400
    save_puzzle_text(name, text)
    return jsonify({'status': 'ok', 'name': name}), 200


@app.post('/api/solve')
def api_solve():
    body = request.get_json(force=True) or {}
    try:
        board = parse_board(_puzzle_text_from_body(body))
        max_states = body.get('max_states')
        plan = solve(board, max_states=int(max_states) if max_states is not None else None)
    except FileNotFoundError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 404
    except ValueError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400
    except SearchLimitReached as e:
        return jsonify({'status': 'error', 'message': str(e), 'limit': e.limit}), 422

    steps = [list(step.as_tuple()) for step in plan] if plan is not None else []
    return jsonify({
        'status': 'ok',
        'solved': plan is not None,
        'steps': steps,
        'moves': sum(s[2] for s in steps),
        'board': board.render(),
    }), 200


# ---------------------- Play sessions ----------------------
# Simple in-memory store
RUNS = {}


@app.post('/api/run/start')
def api_run_start():
    body = request.get_json(force=True) or {}
    try:
        text = _puzzle_text_from_body(body)
        game = Game.from_text(text)
    except FileNotFoundError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 404
    except ValueError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400
    rid = str(uuid.uuid4())
    RUNS[rid] = {
        'id': rid,
        'created_at': datetime.now(timezone.utc).isoformat(),
        'puzzle_name': body.get('name'),
        'game': game,
        'log': [{'type': 'state', 'ascii': game.to_text()}],
    }
    return jsonify({'run_id': rid, 'ascii': game.to_text(), 'move_count': 0, 'done': game.done}), 200


@app.post('/api/run/step')
def api_run_step():
    body = request.get_json(force=True) or {}
    rid = body.get('run_id')
    run = RUNS.get(rid)
    if not run:
        return jsonify({'status': 'error', 'message': 'invalid_run'}), 400

    game = run['game']
    res = game.step(body.get('action') or '')
    run['log'].append({'type': 'env', 'summary': res.to_dict(), 'ascii': res.ascii})

    return jsonify({
        'status': 'ok' if res.ok else 'error',
        'run_id': rid,
        'action': res.action,
        'ascii': res.ascii,
        'moved': res.moved,
        'blocked': res.blocked,
        'cells': res.cells,
        'done': res.done,
        'won': res.won,
        'reason': res.reason,
        'move_count': game.move_count,
    }), 200


@app.get('/api/run/state')
def api_run_state():
    rid = request.args.get('run_id')
    run = RUNS.get(rid)
    if not run:
        return jsonify({'status': 'error', 'message': 'invalid_run'}), 400
    game = run['game']
    return jsonify({
        'run_id': rid,
        'ascii': game.to_text(),
        'puzzle_name': run.get('puzzle_name'),
        'move_count': game.move_count,
        'done': game.done,
        'won': game.won,
        'log': run['log'],
    })


if __name__ == '__main__':
    app.run(debug=True)
