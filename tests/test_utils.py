from datetime import date

import pytest

from hullify.core.utils import clamp, money, money_num, month_label, num, trailing_months


def test_money_string_parses_to_number():
    assert money_num("$68,500") == 68500


@pytest.mark.parametrize("raw,expected", [
    ("USD 12,000.50", 12000.5),
    ("  $1,250 ", 1250),
    (900, 900.0),
    (18500.0, 18500.0),
    ("-300", -300.0),
])
def test_money_num_tolerates_formatting(raw, expected):
    assert money_num(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "n/a", "$", True, {"amount": 1}, [1], float("inf"), float("nan"), "1.2.3"])
def test_money_num_rejects_non_amounts(raw):
    assert money_num(raw) is None


def test_money_formats_whole_dollars():
    assert money(68500) == "$68,500"
    assert money(18499.6) == "$18,500"
    assert money(0) == "$0"


def test_num_and_clamp():
    assert num(" 42 ") == 42.0
    assert num("abc", 7) == 7
    assert num(float("nan"), 1) == 1
    assert num(True, 3) == 3
    assert clamp(100, 8, 60) == 60
    assert clamp(2, 8, 60) == 8


def test_trailing_months_crosses_year_boundary():
    months = trailing_months(date(2026, 2, 10))
    assert len(months) == 12
    assert months[0] == (2025, 3)
    assert months[-1] == (2026, 2)
    assert month_label(months[-1][1]) == "Feb"
    assert [m for _, m in months] == [3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 1, 2]
