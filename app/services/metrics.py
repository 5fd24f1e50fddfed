"""Pure math / metric helpers (no DB access).

Season records come in as ORM rows or ``FinancialRecord`` schemas; anything
exposing ``id``, ``club_id``, ``year``, ``revenue``, ``ebitda`` and ``wages``
works.  Amounts are normalised once via :func:`to_number` so the arithmetic
below never sees raw text.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Iterable, Sequence

from app.schemas.financial import FinancialMetric

# Plain signed decimal; no exponent, no underscores.
SIGNED_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def to_number(value: Decimal | str | float | int | None, *, default: Any = 0.0) -> float | None:
    """Normalise a stored amount to ``float``.

    Text may carry ``,`` grouping separators ("1,234,567.50") and surrounding
    whitespace.  ``None`` and blank text return *default*: revenue and EBITDA
    use ``0.0``, wages pass ``default=None`` so an absent figure stays absent.

    Raises:
        ValueError: text that is still not a finite signed decimal once the
            separators are stripped.
    """
    if value is None:
        return default
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return default
        if not SIGNED_DECIMAL.fullmatch(value):
            raise ValueError(f"Amount is not a signed decimal: {value!r}")
        value = Decimal(value)
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Amount is not a finite number: {value!r}")
    return number


def cagr(start_value: float, end_value: float, years: int) -> float | None:
    """Compound Annual Growth Rate as a fraction.

    Returns None when inputs are non-positive or years < 1.
    """
    if years < 1 or start_value <= 0 or end_value <= 0:
        return None
    return (end_value / start_value) ** (1.0 / years) - 1.0


def derive_yoy(records: Iterable[Any]) -> list[FinancialMetric]:
    """Build the year-ordered metric series for one club.

    Equal years keep their input order.  The first season has no YoY; every
    later season is compared with the one immediately before it, gaps
    included.  A zero prior revenue still yields ``yoy_change`` but no
    percentage.
    """
    ordered = sorted(records, key=lambda r: r.year)

    metrics: list[FinancialMetric] = []
    previous_revenue: float | None = None
    for record in ordered:
        revenue = to_number(record.revenue)
        yoy_change = None
        yoy_percentage = None
        if previous_revenue is not None:
            yoy_change = revenue - previous_revenue
            if previous_revenue != 0:
                yoy_percentage = yoy_change / previous_revenue * 100

        metrics.append(
            FinancialMetric(
                id=getattr(record, "id", None),
                club_id=record.club_id,
                year=record.year,
                revenue=revenue,
                ebitda=to_number(record.ebitda),
                wages=to_number(record.wages, default=None),
                yoy_change=yoy_change,
                yoy_percentage=yoy_percentage,
            )
        )
        previous_revenue = revenue
    return metrics


def _cagr_percent(points: Sequence[tuple[int, float]]) -> float | None:
    if len(points) < 2:
        return None
    ordered = sorted(points, key=lambda p: p[0])
    (first_year, first_revenue), (last_year, last_revenue) = ordered[0], ordered[-1]
    growth = cagr(first_revenue, last_revenue, last_year - first_year)
    if growth is None or not math.isfinite(growth):
        return None
    return growth * 100


def compute_cagr(records: Iterable[Any]) -> float | None:
    """Revenue CAGR in percent across raw season records.

    None for fewer than two seasons, a first or last revenue <= 0, or a zero
    year span (same club-year twice means malformed input).
    """
    return _cagr_percent([(r.year, to_number(r.revenue)) for r in records])


def compute_cagr_from_metrics(metrics: Iterable[FinancialMetric]) -> float | None:
    """Same as :func:`compute_cagr` for an already derived series."""
    return _cagr_percent([(m.year, m.revenue) for m in metrics])


def scale_metric(metric: FinancialMetric, factor: float) -> FinancialMetric:
    """Return a copy with every money amount multiplied by *factor*.

    Percentages are currency independent and are left alone.
    """
    return metric.model_copy(
        update={
            "revenue": metric.revenue * factor,
            "ebitda": metric.ebitda * factor,
            "wages": metric.wages * factor if metric.wages is not None else None,
            "yoy_change": metric.yoy_change * factor if metric.yoy_change is not None else None,
        }
    )
