import re

from leaderboard.errors import RouteNotFound

SCORES_BY_PLAYER = "/{game}/{player_id}/scores"
RANKS_BY_PLAYER = "/{game}/{player_id}/ranks"
RANKS = "/{game}/ranks"

# (route, pattern, has player_id segment); ASCII \w and fullmatch so a
# trailing newline or non-ASCII segment is not routed
_ROUTES = [
    (SCORES_BY_PLAYER, re.compile(r"/\w+/\w+/scores/?", re.ASCII), True),
    (RANKS_BY_PLAYER, re.compile(r"/\w+/\w+/ranks/?", re.ASCII), True),
    (RANKS, re.compile(r"/\w+/ranks/?", re.ASCII), False),
]


def match_route(path):
    """Return (route, game, player_id) for an event path."""
    for route, rx, has_player in _ROUTES:
        if rx.fullmatch(path or ""):
            parts = path.split("/")
            return route, parts[1], parts[2] if has_player else ""
    raise RouteNotFound(f"No matching api for {path!r}")
