import logging

from leaderboard.models import MAX_SCORE_LIMIT
from leaderboard.ranks import assemble_ranks, locate_rank, ranks_around

logger = logging.getLogger(__name__)


def put_score(store, score):
    store.put_score(score)
    logger.info("stored score game=%s player=%s score=%d", score["game"], score["playerId"], score["score"])


def top_player_scores(store, request):
    limit = request["limit"] or MAX_SCORE_LIMIT
    return store.query_top_player_scores(request["game"], request["playerId"], limit)


def top_ranks(store, request):
    rows = store.query_top_ranks(request["game"], request["limit"])
    return assemble_ranks(rows)


def ranks_around_player(store, request):
    """Ranks surrounding the player's best score; [] when the player is unranked.

    Only the top page of the game (at most 1000 rows) is searched, so a player
    below that is reported as unranked.

    Ranks carry no playerId, so the window is centred on the first rank
    holding the player's best score. When other players tie that score the
    centre may be one of their rows, and which one comes first depends on
    the order DynamoDB returns equal GSI keys in, which it does not define.
    """
    game, player_id = request["game"], request["playerId"]

    best = store.query_top_player_scores(game, player_id, 1)
    if not best:
        # hasn't scored yet
        logger.debug("no scores for player=%s game=%s", player_id, game)
        return []
    best_score = best[0]["score"]

    ranks = assemble_ranks(store.query_top_ranks(game, 0))
    index = locate_rank(ranks, best_score)
    if index == -1:
        logger.info("player=%s score=%d not in top %d of game=%s", player_id, best_score, len(ranks), game)
        return []

    return ranks_around(ranks, index, request["around"])
