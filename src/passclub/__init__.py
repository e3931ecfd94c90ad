"""Password leaderboard service: register unique passwords, compete on count."""

__version__ = "1.0.0"
