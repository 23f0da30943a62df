"""SQLAlchemy models exposed for table creation and imports."""
from .score import Score
from .user import User

__all__ = ["User", "Score"]
