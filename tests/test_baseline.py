import pytest

from hullify.models.baseline import (
    baseline_breakdown,
    baseline_guard,
    depreciation_factor,
    hours_factor,
    size_base,
    trailer_adjustment,
)
from hullify.services.normalize import normalize

SCENARIO_A = {"length": 24, "year": 2015, "condition": "Good", "runs": "Yes",
              "engineHours": 150, "trailer": "Yes", "titleStatus": "Clean"}
SCENARIO_B = {"condition": "Needs Work", "runs": "No", "outOfWaterYearPlus": True,
              "titleStatus": "Bill of Sale only", "length": 20, "year": 1995}


def test_guard_is_deterministic(today):
    first = baseline_guard(normalize(SCENARIO_A, today=today))
    second = baseline_guard(normalize(dict(SCENARIO_A), today=today))
    assert first == second


def test_scenario_a_guard_matches_hand_calculation(today):
    # 11 years old, Good, low hours bonus, trailer credit 40% of 1500
    dep = 1 - (0.35 + 0.04 * 6)
    expected = round(1200 * 24 ** 1.22 * dep * 1.03 + 600)
    assert abs(baseline_guard(normalize(SCENARIO_A, today=today)) - expected) <= 1


def test_size_base_never_decreases_with_length():
    values = [size_base(float(length)) for length in range(8, 61)]
    assert values == sorted(values)
    assert size_base(30) > size_base(20) > size_base(12)


@pytest.mark.parametrize("age,expected", [(0, 1.0), (5, 0.65), (10, 0.45), (20, 0.05), (45, 0.05)])
def test_depreciation_schedule(age, expected):
    assert depreciation_factor(age) == pytest.approx(expected)


def test_depreciation_never_below_five_percent():
    assert min(depreciation_factor(a) for a in range(0, 80)) == pytest.approx(0.05)


def test_condition_ordering(today):
    guards = [
        baseline_guard(normalize({"length": 22, "year": 2020, "condition": c}, today=today))
        for c in ("Excellent", "Good", "Fair", "Needs Work")
    ]
    assert guards == sorted(guards, reverse=True)
    assert len(set(guards)) == 4


def test_hours_factor():
    assert hours_factor(150, "Good") == pytest.approx(1.03)
    assert hours_factor(150, "Fair") == 1.0
    assert hours_factor(0, "Excellent") == 1.0
    assert hours_factor(800, "Good") == 1.0
    assert hours_factor(1800, "Good") == pytest.approx(0.75)
    assert hours_factor(50_000, "Good") == pytest.approx(0.60)


def test_trailer_is_additive_and_tiered():
    assert trailer_adjustment("Yes", 22) == 600
    assert trailer_adjustment("No", 22) == -1500
    assert trailer_adjustment("No", 16) == -800
    assert trailer_adjustment("Yes", 40) == 1400
    assert trailer_adjustment(None, 22) == 0


def test_hull_material_penalties(today):
    base = {"length": 26, "year": 2018, "condition": "Good"}
    glass = baseline_guard(normalize({**base, "hullMaterial": "Fiberglass"}, today=today))
    wood = baseline_guard(normalize({**base, "hullMaterial": "WOOD"}, today=today))
    steel = baseline_guard(normalize({**base, "hullMaterial": "steel"}, today=today))
    assert wood < steel < glass


def test_scenario_b_compounds_all_negative_factors(today):
    b = baseline_breakdown(normalize(SCENARIO_B, today=today))
    assert (b.condition, b.runs, b.storage, b.title) == (0.45, 0.55, 0.90, 0.85)
    assert b.depreciation == pytest.approx(0.05)
    raw = b.size_base * b.depreciation * 0.45 * 0.55 * 0.90 * 0.85
    assert b.value == max(500, round(raw))


def test_compounding_visible_above_floor(today):
    clean = normalize({"length": 20, "year": 2020}, today=today)
    rough = normalize({**SCENARIO_B, "year": 2020}, today=today)
    b = baseline_breakdown(rough)
    expected = round(b.size_base * b.depreciation * 0.45 * 0.55 * 0.90 * 0.85)
    assert expected > 500
    assert abs(baseline_guard(rough) - expected) <= 1
    assert baseline_guard(rough) < baseline_guard(clean) * 0.2


def test_guard_is_floored(today):
    worst = {"length": 8, "year": 1950, "condition": "Needs Work", "runs": "No", "trailer": "No",
             "engineHours": 9000, "outOfWaterYearPlus": True, "titleStatus": "Bill of Sale only", "hullMaterial": "wood"}
    assert baseline_guard(normalize(worst, today=today)) == 500
