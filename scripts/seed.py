#!/usr/bin/env python3
"""Seed script – loads the sample clubs and their season financials.

Figures are in millions of the base currency (GBP).  ``--synthetic N`` adds
N Faker-generated clubs with random seasons for load testing.

Run after migrations:
    python -m scripts.seed
    python -m scripts.seed --synthetic 50
"""

from __future__ import annotations

import argparse
import random

from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from app.config import settings
from app.models import Base, Club, Financial

fake = Faker()
Faker.seed(42)
random.seed(42)

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

FINANCIAL_FIELDS = (
    "revenue",
    "ebitda",
    "wages",
    "amortization",
    "other_expenses",
    "matchday_revenue",
    "commercial_revenue",
    "broadcasting_revenue",
)

SAMPLE_CLUBS: list[dict] = [
    {
        "name": "Manchester United",
        "country": "England",
        "league": "Premier League",
        "year_founded": 1878,
        "website": "https://www.manutd.com",
        "owners": "Glazer Family",
        "location": "Manchester, England",
        "ceo": "Omar Berrada",
        "chairman": "Joel Glazer",
        "company_overview": (
            "Manchester United Football Club is one of the most successful and widely "
            "supported football clubs in the world, competing in the English Premier League."
        ),
        "seasons": {
            # matchday 2021 missing: behind closed doors
            2021: (494.0, 120.5, 323.0, 122.0, 49.0, None, 279.0, 215.0),
            2022: (583.0, 145.2, 384.0, 130.0, 55.0, 110.0, 312.0, 161.0),
            2023: (648.4, 158.0, 331.0, 141.0, 60.0, 136.0, 353.0, 159.4),
        },
    },
    {
        "name": "Real Madrid",
        "country": "Spain",
        "league": "La Liga",
        "year_founded": 1902,
        "website": "https://www.realmadrid.com",
        "owners": "Club Members (Socios)",
        "location": "Madrid, Spain",
        "ceo": "José Ángel Sánchez",
        "chairman": "Florentino Pérez",
        "company_overview": (
            "Real Madrid Club de Fútbol is a Spanish professional football club based in "
            "Madrid, known as one of the most successful clubs in European football history."
        ),
        "seasons": {
            2021: (640.7, 170.0, 370.0, 115.0, 65.0, 98.0, 312.0, 230.7),
            2022: (713.8, 192.0, 411.0, 118.0, 70.0, 124.0, 344.0, 245.8),
            2023: (831.0, 225.0, 454.0, 125.0, 75.0, 154.0, 403.0, 274.0),
        },
    },
    {
        "name": "FC Barcelona",
        "country": "Spain",
        "league": "La Liga",
        "year_founded": 1899,
        "website": "https://www.fcbarcelona.com",
        "owners": "Club Members (Socios)",
        "location": "Barcelona, Spain",
        "ceo": "Joan Laporta",
        "chairman": "Joan Laporta",
        "company_overview": (
            "Futbol Club Barcelona is a professional football club based in Barcelona, "
            "Catalonia, Spain, renowned for its attacking style and La Masia youth academy."
        ),
        "seasons": {
            2021: (631.0, 55.0, 560.0, 145.0, 85.0, 82.0, 283.0, 266.0),
            2022: (582.0, 48.0, 470.0, 138.0, 78.0, 98.0, 269.0, 215.0),
            2023: (800.0, 135.0, 520.0, 155.0, 90.0, 165.0, 388.0, 247.0),
        },
    },
]

LEAGUES = [
    ("England", "Championship"),
    ("Germany", "Bundesliga"),
    ("Italy", "Serie A"),
    ("France", "Ligue 1"),
    ("Netherlands", "Eredivisie"),
]


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_sample_clubs(session: Session) -> int:
    """Insert the three sample clubs and their seasons.  Returns season count."""
    count = 0
    for entry in SAMPLE_CLUBS:
        fields = {k: v for k, v in entry.items() if k != "seasons"}
        club = Club(**fields)
        session.add(club)
        session.flush()
        for year, values in sorted(entry["seasons"].items()):
            session.add(Financial(club_id=club.id, year=year, **dict(zip(FINANCIAL_FIELDS, values))))
            count += 1
    session.flush()
    return count


def seed_synthetic_clubs(session: Session, n_clubs: int) -> int:
    """Generate *n_clubs* random clubs with 3-8 consecutive seasons each."""
    count = 0
    used: set[str] = {c["name"] for c in SAMPLE_CLUBS}
    while len(used) < len(SAMPLE_CLUBS) + n_clubs:
        name = f"{fake.city()} FC"
        if name in used:
            continue
        used.add(name)

        country, league = random.choice(LEAGUES)
        club = Club(
            name=name,
            country=country,
            league=league,
            year_founded=random.randint(1870, 1960),
            location=f"{fake.city()}, {country}",
            company_overview=fake.paragraph(nb_sentences=2),
        )
        session.add(club)
        session.flush()

        revenue = random.uniform(20.0, 400.0)
        n_seasons = random.randint(3, 8)
        for year in range(2024 - n_seasons + 1, 2025):
            revenue = max(revenue * (1 + random.uniform(-0.15, 0.25)), 1.0)
            wages = revenue * random.uniform(0.5, 0.95)
            matchday = revenue * random.uniform(0.1, 0.25)
            commercial = revenue * random.uniform(0.2, 0.45)
            session.add(
                Financial(
                    club_id=club.id,
                    year=year,
                    revenue=round(revenue, 2),
                    ebitda=round(revenue * random.uniform(-0.1, 0.3), 2),
                    wages=round(wages, 2),
                    amortization=round(revenue * random.uniform(0.05, 0.25), 2),
                    other_expenses=round(revenue * random.uniform(0.05, 0.15), 2),
                    matchday_revenue=round(matchday, 2),
                    commercial_revenue=round(commercial, 2),
                    broadcasting_revenue=round(revenue - matchday - commercial, 2),
                )
            )
            count += 1
    session.flush()
    return count


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the club finance database.")
    parser.add_argument("--synthetic", type=int, default=0, help="extra random clubs to add")
    args = parser.parse_args()

    print("🌱  Seeding database …")
    engine = create_engine(settings.database_url_sync, echo=False)

    # Fallback if migrations haven't run
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        session.execute(Financial.__table__.delete())
        session.execute(Club.__table__.delete())
        session.commit()

        n_fin = seed_sample_clubs(session)
        print(f"  ✅ {len(SAMPLE_CLUBS)} sample clubs, {n_fin} seasons")

        if args.synthetic:
            n_syn = seed_synthetic_clubs(session, args.synthetic)
            print(f"  ✅ {args.synthetic} synthetic clubs, {n_syn} seasons")

        session.commit()

    print("🎉  Seeding complete!")


if __name__ == "__main__":
    main()
