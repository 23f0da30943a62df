"""Stopwatch Game API: player accounts, bearer authentication and a top-5 leaderboard."""

__version__ = "1.0.0"
