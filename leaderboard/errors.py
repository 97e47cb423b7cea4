class LeaderboardError(Exception):
    pass


class ValidationError(LeaderboardError):
    """The request was malformed; the message goes back to the caller as-is."""


class StoreError(LeaderboardError):
    """The score store failed. Never retried here."""


class RouteNotFound(LeaderboardError):
    pass


class ConfigError(LeaderboardError):
    pass
