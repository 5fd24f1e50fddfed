"""Club ORM model."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Identity columns are BIGINT on Postgres; SQLite only autoincrements INTEGER keys.
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Shared declarative base for all models."""

    pass


class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    company_overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(80), nullable=True)
    league: Mapped[str | None] = mapped_column(String(120), nullable=True)
    year_founded: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owners: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ceo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    chairman: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Loaded only on request; the services issue their own queries.
    financials = relationship(
        "Financial", back_populates="club", lazy="select", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_clubs_league", "league"),)

    def __repr__(self) -> str:
        return f"<Club {self.id} – {self.name}>"
