"""SQLAlchemy ORM models."""

from app.models.club import Base, Club
from app.models.financial import Financial

__all__ = ["Base", "Club", "Financial"]
