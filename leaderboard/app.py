"""Lambda module: wires config, DynamoDB and the handler once per process."""
import logging

import boto3

from leaderboard.config import load_config
from leaderboard.handlers import make_handler
from leaderboard.store import DynamoScoreStore

config = load_config()
logging.getLogger().setLevel(config.log_level)

dynamodb = boto3.resource("dynamodb", region_name=config.region)
store = DynamoScoreStore(dynamodb.Table(config.table_name), rank_limit=config.rank_limit)

handler = make_handler(store)
