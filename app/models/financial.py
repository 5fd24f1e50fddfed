"""Per-season club financials ORM model.

Amounts are stored in millions of the base currency (see ``settings.base_currency``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.club import Base, BigIntPK


class Financial(Base):
    __tablename__ = "financials"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    club_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    revenue: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    # Loaded from source filings but never read: YoY is always recomputed.
    revenue_yoy: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    ebitda: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)

    wages: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    amortization: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    other_expenses: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)

    matchday_revenue: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    commercial_revenue: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)
    broadcasting_revenue: Mapped[Decimal | None] = mapped_column(Numeric(20, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    club = relationship("Club", back_populates="financials")

    __table_args__ = (
        UniqueConstraint("club_id", "year", name="uq_financials_club_year"),
        Index("ix_financials_club_id", "club_id"),
        Index("ix_financials_year", "year"),
    )

    def __repr__(self) -> str:
        return f"<Financial club={self.club_id} {self.year} revenue={self.revenue}>"
