"""API Gateway (REST proxy) transport for the leaderboard."""
import json
import logging

from leaderboard import models, service
from leaderboard.errors import RouteNotFound, StoreError, ValidationError
from leaderboard.routes import RANKS, RANKS_BY_PLAYER, SCORES_BY_PLAYER, match_route

logger = logging.getLogger(__name__)


def _resp(body, code=200):
    out = {"statusCode": code, "headers": {"content-type": "application/json"}}
    out["body"] = "" if body is None else json.dumps(body)
    return out


def _not_found():
    return _resp({"error": "Resource not found"}, 404)


def _not_allowed():
    return _resp({"error": "Method not allowed"}, 405)


def _scores(store, method, event, game, player_id):
    qs = event.get("queryStringParameters") or {}
    if method == "GET":
        req = models.player_score_request(qs, game, player_id)
        return _resp(service.top_player_scores(store, req))
    if method == "PUT":
        score = models.new_score(game, player_id, event.get("body"))
        service.put_score(store, score)
        return _resp(None, 201)
    return _not_allowed()


def _player_ranks(store, method, event, game, player_id):
    if method != "GET":
        return _not_allowed()
    req = models.player_ranks_request(event.get("queryStringParameters"), game, player_id)
    return _resp(service.ranks_around_player(store, req))


def _ranks(store, method, event, game, player_id):
    if method != "GET":
        return _not_allowed()
    req = models.ranks_request(event.get("queryStringParameters"), game)
    return _resp(service.top_ranks(store, req))


_DISPATCH = {
    SCORES_BY_PLAYER: _scores,
    RANKS_BY_PLAYER: _player_ranks,
    RANKS: _ranks,
}


def make_handler(store):
    """Lambda entry point bound to an already-built score store."""

    def handler(event, ctx):
        path = event.get("path", "")
        method = (event.get("httpMethod") or "").upper()
        try:
            route, game, player_id = match_route(path)
        except RouteNotFound:
            return _not_found()

        try:
            return _DISPATCH[route](store, method, event, game, player_id)
        except ValidationError as e:
            return _resp({"error": str(e)}, 400)
        except StoreError:
            logger.exception("Unexpected error handling %s %s", method, path)
            return _resp({"error": "Internal server error"}, 500)

    return handler
