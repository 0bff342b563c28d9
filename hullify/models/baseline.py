"""Deterministic rule-based vessel pricing (the guard value)."""

from dataclasses import dataclass

from ..services.normalize import NormalizedPayload

SIZE_COEFFICIENT = 1200.0
SIZE_EXPONENT = 1.22
SIZE_LENGTH_BOUNDS = (10.0, 55.0)
MAX_DEPRECIATION = 0.95
PRICE_FLOOR = 500

CONDITION_FACTORS = {"Excellent": 1.12, "Good": 1.0, "Fair": 0.70, "Needs Work": 0.45}
RUNS_FACTORS = {"Yes": 1.0, "Starts but stalls": 0.75, "No": 0.55}
TITLE_FACTORS = {"Clean": 1.0, "Bill of Sale only": 0.85, "Other": 0.95, "Loan/Lien": 0.98}
HULL_FACTORS = {"wood": 0.85, "steel": 0.92}

HIGH_HOURS = 800
LOW_HOURS = 200
LOW_HOURS_BONUS = 1.03
MAX_HOURS_PENALTY = 0.40
OUT_OF_WATER_FACTOR = 0.90
TRAILER_CREDIT_SHARE = 0.4


@dataclass(frozen=True)
class BaselineBreakdown:
    size_base: float
    depreciation: float
    condition: float
    runs: float
    hours: float
    storage: float
    trailer_adjustment: int
    title: float
    hull: float

    @property
    def value(self) -> int:
        # Trailer is additive and lands before the title/hull multipliers
        v = self.size_base * self.depreciation * self.condition * self.runs * self.hours * self.storage
        v = (v + self.trailer_adjustment) * self.title * self.hull
        return max(PRICE_FLOOR, int(round(v)))


def size_base(length: float) -> float:
    lo, hi = SIZE_LENGTH_BOUNDS
    return SIZE_COEFFICIENT * max(lo, min(length, hi)) ** SIZE_EXPONENT


def depreciation_factor(age: int) -> float:
    if age <= 5:
        dep = 0.07 * age
    elif age <= 20:
        dep = 0.35 + 0.04 * (age - 5)
    else:
        dep = MAX_DEPRECIATION
    return 1 - min(dep, MAX_DEPRECIATION)


def hours_factor(hours: float, condition: str | None) -> float:
    if hours > HIGH_HOURS:
        return 1 - min(MAX_HOURS_PENALTY, (hours - HIGH_HOURS) / 1000 * 0.25)
    if 0 < hours < LOW_HOURS and condition in ("Excellent", "Good"):
        return LOW_HOURS_BONUS
    return 1.0


def trailer_value(length: float) -> int:
    """Typical trailer value for a hull of this size."""
    if length <= 18:
        return 800
    if length <= 24:
        return 1500
    if length <= 30:
        return 2500
    return 3500


def trailer_adjustment(trailer: str | None, length: float) -> int:
    tier = trailer_value(length)
    if trailer == "Yes":
        return int(round(tier * TRAILER_CREDIT_SHARE))
    if trailer == "No":
        return -tier
    return 0


def baseline_breakdown(p: NormalizedPayload) -> BaselineBreakdown:
    """Every factor the guard value is built from, in application order."""
    return BaselineBreakdown(
        size_base=size_base(p.length),
        depreciation=depreciation_factor(p.age),
        condition=CONDITION_FACTORS.get(p.condition, 1.0),
        runs=RUNS_FACTORS.get(p.runs, 1.0),
        hours=hours_factor(p.engine_hours, p.condition),
        storage=OUT_OF_WATER_FACTOR if p.out_of_water_year_plus else 1.0,
        trailer_adjustment=trailer_adjustment(p.trailer, p.length),
        title=TITLE_FACTORS.get(p.title_status, 1.0),
        hull=HULL_FACTORS.get(p.hull_material, 1.0),
    )


def baseline_guard(p: NormalizedPayload) -> int:
    """Guard value in whole USD, never below $500. Pure and deterministic."""
    return baseline_breakdown(p).value
