"""Route modules for the Stopwatch Game API."""
from . import root, scores, users

__all__ = ["root", "users", "scores"]
