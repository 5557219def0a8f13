import math
import os
import sys
import pytest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from render.formatting import format_money, format_monthly, format_percent, format_year_diff, format_years, format_yen


@pytest.mark.parametrize("value,expected", [
    (0, "0万円"),
    (2.5, "3万円"),
    (7740, "7,740万円"),
    (9999, "9,999万円"),
    (10000, "1.0億円"),
    (12500, "1.2億円"),
    (math.inf, "∞"),
])
def test_format_money(value, expected):
    assert format_money(value) == expected


def test_format_percent():
    assert format_percent(0.04) == "4.0%"
    assert format_percent(0.024) == "2.4%"


@pytest.mark.parametrize("diff,expected", [
    (None, "ー"),
    (0, "変化なし"),
    (-3, "3年短縮"),
    (2, "2年延長"),
])
def test_format_year_diff(diff, expected):
    assert format_year_diff(diff) == expected


def test_format_years_and_yen():
    assert format_years(None) == "未達成"
    assert format_years(12) == "12年"
    assert format_yen(3_850_000) == "3,850,000円"
    assert format_monthly(22.5) == "22.5万円"
