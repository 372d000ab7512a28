from datetime import date, datetime, timedelta, timezone

import pytest
from lifegrid import weeks


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("years", [1, 10, 77, 90, 150])
def test_total_weeks_and_rows(years):
    total = weeks.total_weeks(years)
    assert total == 52 * years
    assert weeks.grid_rows(total) == years


def test_rows_round_up_partial_row():
    assert weeks.grid_rows(53) == 2
    assert weeks.grid_rows(52) == 1


def test_weeks_lived_exact_boundary():
    birth = date(2020, 1, 1)
    assert weeks.weeks_lived(birth, datetime(2020, 1, 7, 23, 59, tzinfo=timezone.utc)) == 0
    assert weeks.weeks_lived(birth, datetime(2020, 1, 8, 0, 0, tzinfo=timezone.utc)) == 1


def test_weeks_lived_520_weeks():
    """Birth date exactly 520 weeks before now."""
    birth = (NOW - timedelta(weeks=520)).date()
    assert weeks.weeks_lived(birth, NOW) == 520


def test_future_birth_date_clamps_to_zero():
    assert weeks.weeks_lived(date(2030, 1, 1), NOW) == 0


def test_weeks_lived_monotonic():
    birth = date(1990, 6, 15)
    counts = [weeks.weeks_lived(birth, NOW + timedelta(hours=13 * i)) for i in range(60)]
    assert counts == sorted(counts)
    assert all(c >= 0 for c in counts)


def test_naive_datetime_is_utc():
    birth = date(2000, 1, 1)
    naive = datetime(2000, 1, 15, 0, 0)
    assert weeks.weeks_lived(birth, naive) == weeks.weeks_lived(birth, naive.replace(tzinfo=timezone.utc)) == 2


def test_date_as_now():
    assert weeks.weeks_lived(date(2000, 1, 1), date(2000, 1, 22)) == 3


def test_default_now_is_current_time():
    assert weeks.weeks_lived(date(1970, 1, 1)) > 2800


def test_percent_lived():
    assert weeks.percent_lived(0, 4004) == 0
    assert weeks.percent_lived(2002, 4004) == 50
    assert weeks.percent_lived(5000, 4004) == 100
    assert weeks.percent_lived(10, 0) == 0


def test_life_expectancy_for_country():
    assert weeks.life_expectancy_for("jp") == 84
    assert weeks.life_expectancy_for("US") == 77
    assert weeks.life_expectancy_for("XX") == 73
    assert weeks.life_expectancy_for(None) == 73
