"""Club-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ClubBrief(BaseModel):
    """Lightweight club row for selectors and lists."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    country: str | None = None
    league: str | None = None


class ClubProfile(BaseModel):
    """Full club profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    company_overview: str | None = None
    website: str | None = None
    country: str | None = None
    league: str | None = None
    year_founded: int | None = None
    location: str | None = None
    owners: str | None = None
    owner_location: str | None = None
    ceo: str | None = None
    chairman: str | None = None
    profile: str | None = None
