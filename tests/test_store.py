from decimal import Decimal

import pytest
from boto3.dynamodb.conditions import Key

from leaderboard.errors import StoreError
from leaderboard.store import GAME_INDEX, DynamoScoreStore, item_to_score, score_to_item
from tests.conftest import FakeTable, client_error

SCORE = {"game": "Singing", "score": 505, "playerId": "123", "playerName": "David Bowie", "timestamp": 1700000000}
ITEM = {"pk": "123|Singing", "sk": Decimal(505), "game": "Singing", "pname": "David Bowie", "ts": Decimal(1700000000)}


def test_score_to_item():
    assert score_to_item(SCORE) == {
        "pk": "123|Singing", "sk": 505, "game": "Singing", "pname": "David Bowie", "ts": 1700000000,
    }


def test_item_to_score_coerces_decimals():
    got = item_to_score(ITEM)
    assert got == SCORE
    assert type(got["score"]) is int
    assert type(got["timestamp"]) is int


def test_item_to_score_bad_pk():
    with pytest.raises(StoreError, match="Malformed pk"):
        item_to_score({"pk": "nopipe", "sk": Decimal(1)})


def test_put_score():
    table = FakeTable()
    DynamoScoreStore(table).put_score(SCORE)
    assert table.put_calls == [{"Item": score_to_item(SCORE)}]


def test_query_top_player_scores():
    table = FakeTable(items=[ITEM])
    got = DynamoScoreStore(table).query_top_player_scores("Singing", "123", 5)
    assert got == [SCORE]
    call = table.query_calls[0]
    assert call["KeyConditionExpression"] == Key("pk").eq("123|Singing")
    assert call["ScanIndexForward"] is False
    assert call["Limit"] == 5
    assert "IndexName" not in call


@pytest.mark.parametrize("limit,want", [(0, 1000), (10, 10), (1000, 1000), (5000, 1000)])
def test_query_top_ranks_caps_limit(limit, want):
    table = FakeTable(items=[ITEM])
    got = DynamoScoreStore(table).query_top_ranks("Singing", limit)
    assert got == [SCORE]
    call = table.query_calls[0]
    assert call["IndexName"] == GAME_INDEX
    assert call["KeyConditionExpression"] == Key("game").eq("Singing")
    assert call["ScanIndexForward"] is False
    assert call["Limit"] == want


def test_query_top_ranks_custom_cap():
    table = FakeTable()
    assert DynamoScoreStore(table, rank_limit=50).query_top_ranks("g", 0) == []
    assert table.query_calls[0]["Limit"] == 50


@pytest.mark.parametrize("call", [
    lambda s: s.put_score(SCORE),
    lambda s: s.query_top_player_scores("g", "p", 1),
    lambda s: s.query_top_ranks("g", 0),
])
def test_client_errors_are_wrapped(call):
    with pytest.raises(StoreError) as exc:
        call(DynamoScoreStore(FakeTable(error=client_error())))
    assert exc.value.__cause__ is not None
    assert "Failed to" in str(exc.value)
