"""Unit tests for the pure metric helpers (no database)."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.services.metrics import (
    cagr,
    compute_cagr,
    compute_cagr_from_metrics,
    derive_yoy,
    scale_metric,
    to_number,
)


def rec(year, revenue, ebitda=0, wages=None, club_id=1, id=None):
    return SimpleNamespace(
        id=id, club_id=club_id, year=year, revenue=revenue, ebitda=ebitda, wages=wages
    )


# ---------------------------------------------------------------------------
# to_number
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234,567.50", 1234567.5),
        ("  583 ", 583.0),
        ("-12.5", -12.5),
        ("+7", 7.0),
        (".5", 0.5),
        (Decimal("648.40"), 648.4),
        (494, 494.0),
    ],
)
def test_to_number_parses(raw, expected):
    assert to_number(raw) == pytest.approx(expected)


def test_to_number_blank_uses_default():
    assert to_number(None) == 0.0
    assert to_number("   ") == 0.0
    assert to_number("", default=None) is None


@pytest.mark.parametrize("raw", ["abc", "nan", "inf", "12..4", "1_000", "1e3", "0x1F", "- 5"])
def test_to_number_rejects_garbage(raw):
    with pytest.raises(ValueError):
        to_number(raw)


# ---------------------------------------------------------------------------
# cagr
# ---------------------------------------------------------------------------


def test_cagr_doubling_over_one_year():
    assert cagr(100.0, 200.0, 1) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "start, end, years", [(0.0, 100.0, 2), (100.0, 0.0, 2), (-5.0, 100.0, 2), (100.0, 200.0, 0)]
)
def test_cagr_undefined(start, end, years):
    assert cagr(start, end, years) is None


# ---------------------------------------------------------------------------
# derive_yoy
# ---------------------------------------------------------------------------


def test_derive_yoy_twenty_percent_growth():
    metrics = derive_yoy([rec(2020, 100_000_000), rec(2021, 120_000_000)])
    assert metrics[1].year == 2021
    assert metrics[1].yoy_change == pytest.approx(20_000_000)
    assert metrics[1].yoy_percentage == pytest.approx(20.0)


def test_derive_yoy_from_zero_revenue():
    metrics = derive_yoy([rec(2020, 0), rec(2021, 100_000_000)])
    assert metrics[1].yoy_change == pytest.approx(100_000_000)
    assert metrics[1].yoy_percentage is None


def test_derive_yoy_single_record():
    metrics = derive_yoy([rec(2022, 583)])
    assert len(metrics) == 1
    assert metrics[0].yoy_change is None
    assert metrics[0].yoy_percentage is None


def test_derive_yoy_growth():
    """100 -> 110 is +10."""
    metrics = derive_yoy([rec(2021, 100), rec(2022, 110)])
    assert metrics[0].yoy_change is None
    assert metrics[0].yoy_percentage is None
    assert metrics[1].yoy_change == pytest.approx(10.0)
    assert metrics[1].yoy_percentage == pytest.approx(10.0)


def test_derive_yoy_sorts_unordered_input():
    metrics = derive_yoy([rec(2023, 120), rec(2021, 100), rec(2022, 110)])
    assert [m.year for m in metrics] == [2021, 2022, 2023]
    assert metrics[2].yoy_change == pytest.approx(10.0)


def test_derive_yoy_zero_prior_revenue():
    """Change is still reported; the percentage is not."""
    metrics = derive_yoy([rec(2021, 0), rec(2022, 50)])
    assert metrics[1].yoy_change == pytest.approx(50.0)
    assert metrics[1].yoy_percentage is None


def test_derive_yoy_decline():
    metrics = derive_yoy([rec(2021, 200), rec(2022, 150)])
    assert metrics[1].yoy_change == pytest.approx(-50.0)
    assert metrics[1].yoy_percentage == pytest.approx(-25.0)


def test_derive_yoy_parses_text_amounts():
    metrics = derive_yoy([rec(2021, "1,000", "250"), rec(2022, "1,200.5", None, "900")])
    assert metrics[0].revenue == 1000.0
    assert metrics[0].ebitda == 250.0
    assert metrics[0].wages is None
    assert metrics[1].ebitda == 0.0
    assert metrics[1].wages == 900.0
    assert metrics[1].yoy_change == pytest.approx(200.5)


def test_derive_yoy_empty():
    assert derive_yoy([]) == []


def test_derive_yoy_keeps_input_order_for_equal_years():
    metrics = derive_yoy([rec(2022, 10, id=1), rec(2022, 30, id=2)])
    assert [m.id for m in metrics] == [1, 2]
    assert metrics[1].yoy_change == pytest.approx(20.0)


def test_derive_yoy_bad_amount_raises():
    with pytest.raises(ValueError):
        derive_yoy([rec(2021, "n/a")])


# ---------------------------------------------------------------------------
# compute_cagr
# ---------------------------------------------------------------------------


def test_compute_cagr_one_year_span():
    records = [rec(2020, 100_000_000), rec(2021, 121_000_000)]
    assert compute_cagr(records) == pytest.approx(21.0, abs=0.1)


def test_compute_cagr_two_years():
    """100 -> 121 over two years is 10% a year."""
    assert compute_cagr([rec(2021, 100), rec(2023, 121)]) == pytest.approx(10.0)


def test_compute_cagr_uses_first_and_last_year():
    records = [rec(2023, 121), rec(2022, 5), rec(2021, 100)]
    assert compute_cagr(records) == pytest.approx(10.0)


@pytest.mark.parametrize(
    "records",
    [
        [],
        [rec(2021, 100)],
        [rec(2021, 0), rec(2023, 100)],
        [rec(2021, 100), rec(2023, -1)],
        [rec(2021, 100), rec(2021, 120)],
    ],
)
def test_compute_cagr_undefined(records):
    assert compute_cagr(records) is None


def test_compute_cagr_matches_metric_path():
    records = [rec(2021, "494"), rec(2022, "583"), rec(2023, "648.4")]
    assert compute_cagr(records) == pytest.approx(compute_cagr_from_metrics(derive_yoy(records)))


# ---------------------------------------------------------------------------
# scale_metric
# ---------------------------------------------------------------------------


def test_scale_metric_leaves_percentages():
    metric = derive_yoy([rec(2021, 100, 10, 60), rec(2022, 110, 20, None)])[1]
    scaled = scale_metric(metric, 2.0)
    assert scaled.revenue == 220.0
    assert scaled.ebitda == 40.0
    assert scaled.wages is None
    assert scaled.yoy_change == pytest.approx(20.0)
    assert scaled.yoy_percentage == metric.yoy_percentage
    # input metric is unchanged
    assert metric.revenue == 110.0
