"""Score/Rank records and request validation.

Records are plain dicts; their keys are the wire format:
  Score: {game, score, playerId, playerName, timestamp}
  Rank:  {position, score, playerName, timestamp}
"""
import json
import re
import time

from leaderboard.errors import ValidationError

MAX_PLAYER_NAME = 32
MAX_SCORE_LIMIT = 100
MAX_RANKS_LIMIT = 1000
MAX_AROUND = 500
# int64; anything wider cannot round-trip through a DynamoDB number
MIN_SCORE = -(2 ** 63)
MAX_SCORE = 2 ** 63 - 1

_INT_RE = re.compile(r"-?\d+", re.ASCII)


def make_score(game, player_id, score, player_name, timestamp):
    return {
        "game": game,
        "score": score,
        "playerId": player_id,
        "playerName": player_name,
        "timestamp": timestamp,
    }


def make_rank(position, score, player_name, timestamp):
    return {
        "position": position,
        "score": score,
        "playerName": player_name,
        "timestamp": timestamp,
    }


def _require_ids(game, player_id=None, check_player=False):
    if not game:
        raise ValidationError("Expected a game")
    if check_player and not player_id:
        raise ValidationError("Expected a player_id")


def _int_param(params, name, lo, hi, default=None):
    params = params or {}
    raw = params.get(name)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Expected a {name}")
        return default
    # int() alone would take "1_0", " 5 ", "+5" and non-ASCII digits
    if not isinstance(raw, str) or not _INT_RE.fullmatch(raw):
        raise ValidationError(f"Failed to parse {name}: {raw!r}")
    value = int(raw)
    if value < lo or value > hi:
        raise ValidationError(f"{name.capitalize()} must be between {lo} and {hi}")
    return value


def new_score(game, player_id, body, now=None):
    """Build a Score from a PUT body: {"score": int, "playerName": str}."""
    _require_ids(game, player_id, check_player=True)
    try:
        b = json.loads(body or "")
    except ValueError as e:
        raise ValidationError(f"Failed to parse request body: {e}") from None
    if not isinstance(b, dict):
        raise ValidationError("Expected a JSON object")

    score = b.get("score")
    # bool is an int subclass
    if isinstance(score, bool) or not isinstance(score, int):
        if score is None:
            raise ValidationError("Expected a score")
        raise ValidationError("Score must be an integer")
    if score == 0:
        raise ValidationError("Expected a score")
    if score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError("Score out of range")

    name = b.get("playerName")
    if not name or not isinstance(name, str):
        raise ValidationError("Expected a playerName")
    if len(name) > MAX_PLAYER_NAME:
        raise ValidationError("Player name was too long")

    ts = int(time.time()) if now is None else int(now)
    return make_score(game, player_id, score, name, ts)


def score_request(params, game):
    _require_ids(game)
    return {"game": game, "limit": _int_param(params, "limit", 0, MAX_SCORE_LIMIT)}


def player_score_request(params, game, player_id):
    _require_ids(game, player_id, check_player=True)
    req = score_request(params, game)
    req["playerId"] = player_id
    return req


def ranks_request(params, game):
    _require_ids(game)
    # 0 -> store maximum
    return {"game": game, "limit": _int_param(params, "limit", 0, MAX_RANKS_LIMIT, default=0)}


def player_ranks_request(params, game, player_id):
    _require_ids(game, player_id, check_player=True)
    return {
        "game": game,
        "playerId": player_id,
        "around": _int_param(params, "around", 0, MAX_AROUND, default=0),
    }
