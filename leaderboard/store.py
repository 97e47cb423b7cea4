"""DynamoDB score store.

Table layout
  pk   S  "<playerId>|<game>"   (hash)
  sk   N  score                 (range)
  game S
  pname S
  ts   N  seconds since epoch
GSI "GameScoresIndex": hash game, range sk.

(pk, sk) is the primary key, so re-submitting the same score for the same
player and game overwrites that one item.
"""
import logging
from decimal import Decimal
from typing import List, Protocol

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from leaderboard.config import MAX_RANK_LIMIT
from leaderboard.errors import StoreError
from leaderboard.models import make_score

logger = logging.getLogger(__name__)

GAME_INDEX = "GameScoresIndex"


class ScoreStore(Protocol):
    def put_score(self, score: dict) -> None: ...

    def query_top_player_scores(self, game: str, player_id: str, limit: int) -> List[dict]: ...

    def query_top_ranks(self, game: str, limit: int) -> List[dict]: ...


def _pk(player_id, game):
    return f"{player_id}|{game}"


def _coerce(v):
    if isinstance(v, Decimal):
        # scores and timestamps are integers
        return int(v)
    return v


def item_to_score(item):
    pk = item.get("pk") or ""
    player_id, sep, game = pk.partition("|")
    if not sep:
        raise StoreError(f"Malformed pk on stored score: {pk!r}")
    return make_score(
        game=item.get("game", game),
        player_id=player_id,
        score=_coerce(item["sk"]),
        player_name=item.get("pname"),
        timestamp=_coerce(item.get("ts", 0)),
    )


def score_to_item(score):
    return {
        "pk": _pk(score["playerId"], score["game"]),
        "sk": score["score"],
        "game": score["game"],
        "pname": score["playerName"],
        "ts": score["timestamp"],
    }


class DynamoScoreStore:
    def __init__(self, table, rank_limit: int = MAX_RANK_LIMIT):
        # table: boto3 dynamodb Table resource, built once at startup
        self.table = table
        self.rank_limit = rank_limit

    def put_score(self, score):
        try:
            self.table.put_item(Item=score_to_item(score))
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to put score: {e}") from e

    def query_top_player_scores(self, game, player_id, limit):
        try:
            resp = self.table.query(
                KeyConditionExpression=Key("pk").eq(_pk(player_id, game)),
                ScanIndexForward=False,  # highest scores first
                Limit=limit,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to query player scores: {e}") from e
        return [item_to_score(it) for it in resp.get("Items", [])]

    def query_top_ranks(self, game, limit=0):
        limit = self.rank_limit if limit <= 0 else min(limit, self.rank_limit)
        try:
            resp = self.table.query(
                IndexName=GAME_INDEX,
                KeyConditionExpression=Key("game").eq(game),
                ScanIndexForward=False,
                Limit=limit,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Failed to query top ranks: {e}") from e
        items = resp.get("Items", [])
        logger.debug("query_top_ranks game=%s limit=%d returned=%d", game, limit, len(items))
        return [item_to_score(it) for it in items]
