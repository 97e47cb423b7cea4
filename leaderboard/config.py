import os
from dataclasses import dataclass

from leaderboard.errors import ConfigError

# One DynamoDB page: ~1MB / max size of a rank item
MAX_RANK_LIMIT = 1000

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Config:
    table_name: str
    region: str
    rank_limit: int = MAX_RANK_LIMIT
    log_level: str = "INFO"


def _required(environ, name):
    v = environ.get(name)
    if not v:
        raise ConfigError(f"{name} not set in env")
    return v


def load_config(environ=None) -> Config:
    env = os.environ if environ is None else environ
    table_name = _required(env, "DDB_TABLE")
    region = _required(env, "AWS_REGION")

    raw_limit = env.get("RANK_LIMIT") or str(MAX_RANK_LIMIT)
    try:
        rank_limit = int(raw_limit)
    except ValueError:
        raise ConfigError(f"RANK_LIMIT must be an integer, got {raw_limit!r}") from None
    if not 1 <= rank_limit <= MAX_RANK_LIMIT:
        raise ConfigError(f"RANK_LIMIT must be between 1 and {MAX_RANK_LIMIT}")

    log_level = (env.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Config(
        table_name=table_name,
        region=region,
        rank_limit=rank_limit,
        log_level=log_level,
    )
