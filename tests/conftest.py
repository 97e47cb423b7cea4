import pytest
from botocore.exceptions import ClientError

from leaderboard.errors import StoreError


class MemoryScoreStore:
    """In-memory ScoreStore keyed the same way as the table: (playerId, game, score)."""

    def __init__(self):
        self.scores = {}
        self.fail = False
        self.calls = []

    def _check(self, op):
        self.calls.append(op)
        if self.fail:
            raise StoreError(f"{op} failed")

    def put_score(self, score):
        self._check("put_score")
        self.scores[(score["playerId"], score["game"], score["score"])] = dict(score)

    def _sorted(self, rows):
        return sorted(rows, key=lambda s: (-s["score"], s["timestamp"]))

    def query_top_player_scores(self, game, player_id, limit):
        self._check("query_top_player_scores")
        rows = [s for s in self.scores.values() if s["game"] == game and s["playerId"] == player_id]
        return self._sorted(rows)[:limit]

    def query_top_ranks(self, game, limit=0):
        self._check("query_top_ranks")
        limit = 1000 if limit <= 0 else min(limit, 1000)
        return self._sorted([s for s in self.scores.values() if s["game"] == game])[:limit]


class FakeTable:
    """Stands in for a boto3 Table: records calls, returns canned Items."""

    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.put_calls = []
        self.query_calls = []

    def put_item(self, **kwargs):
        if self.error:
            raise self.error
        self.put_calls.append(kwargs)
        return {}

    def query(self, **kwargs):
        if self.error:
            raise self.error
        self.query_calls.append(kwargs)
        return {"Items": list(self.items), "Count": len(self.items)}


def client_error(op="Query"):
    return ClientError({"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}}, op)


def seed(store, game, rows, ts=1700000000):
    for i, (player_id, name, score) in enumerate(rows):
        store.put_score({
            "game": game, "score": score, "playerId": player_id,
            "playerName": name, "timestamp": ts + i,
        })


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def tetris(store):
    seed(store, "tetris", [
        ("p1", "Albus", 100),
        ("p2", "Harry", 50),
        ("p3", "Potter", 20),
        ("p4", "Dobby", 10),
        ("p2", "Harry", 5),
    ])
    return store
