"""Error types raised while building leaderboards."""


class LeaderboardError(Exception):
    """Base leaderboard error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class SourceUnavailable(LeaderboardError):
    """Upstream metrics could not be retrieved (transport error, bad status, missing file)."""


class MalformedPayload(LeaderboardError):
    """Upstream metrics were retrieved but are not in the expected shape."""


class InvalidFractionLiteral(LeaderboardError):
    """A fraction-capable value contains '/' but is not '<int>/<int>'."""

    def __init__(self, value: str, reason: str = "expected '<integer>/<integer>'"):
        self.value = value
        super().__init__(f"Invalid fraction literal {value!r}: {reason}")
