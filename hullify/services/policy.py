"""
Reconciliation rules between the baseline guard and the external estimate:
clamp band, confidence label and range width.
"""

import logging
import math
from dataclasses import dataclass, field

from ..core.config import Settings, settings
from ..models.base import ExternalEstimate, ExternalRange
from .normalize import NormalizedPayload

logger = logging.getLogger(__name__)

CONFIDENCE_LABELS = ("low", "medium", "high")


@dataclass(frozen=True)
class PricingPolicy:
    band_low: float = 0.50
    band_high: float = 1.60
    range_width: dict[str, float] = field(
        default_factory=lambda: {"high": 0.08, "medium": 0.12, "low": 0.18}
    )
    min_spread_dollars: int = 800
    min_range_pct: float = 0.04
    price_floor: int = 500

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "PricingPolicy":
        return cls(
            band_low=s.CLAMP_BAND_LOW,
            band_high=s.CLAMP_BAND_HIGH,
            range_width={
                "high": s.RANGE_WIDTH_HIGH,
                "medium": s.RANGE_WIDTH_MEDIUM,
                "low": s.RANGE_WIDTH_LOW,
            },
            min_spread_dollars=s.ABS_MIN_SPREAD_DOLLARS,
            min_range_pct=s.MIN_RANGE_PCT,
            price_floor=s.PRICE_FLOOR_DOLLARS,
        )

    def target_width(self, confidence: str) -> float:
        return self.range_width.get(confidence, self.range_width["medium"])


DEFAULT_POLICY = PricingPolicy()


def band(guard: int, policy: PricingPolicy = DEFAULT_POLICY) -> tuple[int, int]:
    """Whole-dollar band that always sits inside [guard*band_low, guard*band_high]."""
    lo = max(policy.price_floor, math.ceil(guard * policy.band_low))
    hi = math.floor(guard * policy.band_high)
    return min(lo, guard), max(hi, guard)


def reconcile(guard: int, external: ExternalEstimate | None, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    """External estimate clamped into the band, or the guard itself when there is none."""
    if external is None or not math.isfinite(external.estimate) or external.estimate <= 0:
        return guard
    lo, hi = band(guard, policy)
    est = int(round(external.estimate))
    if not lo <= est <= hi:
        logger.info("clamping external estimate %d into [%d, %d]", est, lo, hi)
    return max(lo, min(hi, est))


def is_ugly(p: NormalizedPayload) -> bool:
    """Red flags that make any price for this boat a rough one."""
    return (
        p.condition == "Needs Work"
        or p.runs != "Yes"
        or p.out_of_water_year_plus
        or p.title_status == "Bill of Sale only"
    )


def classify(p: NormalizedPayload, external: ExternalEstimate | None) -> str:
    label = (external.confidence or "").strip().lower() if external else ""
    if label in CONFIDENCE_LABELS:
        return label
    return "low" if is_ugly(p) else "medium"


def enforce_range(
    estimate: int,
    external_range: ExternalRange | None,
    confidence: str,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> tuple[int, int]:
    """
    Keep the estimator's own range when it is sane and at most as wide as
    the target for this confidence; otherwise build a symmetric one.
    Width follows the confidence label alone, so an estimator that says
    "high" for a boat with red flags still gets the narrow target.
    """
    target = policy.target_width(confidence)
    if external_range is not None and external_range.low is not None and external_range.high is not None:
        low, high = int(round(external_range.low)), int(round(external_range.high))
        if low <= estimate <= high and estimate > 0:
            min_allowed = max(policy.min_spread_dollars / estimate, policy.min_range_pct)
            below = (estimate - low) / estimate
            above = (high - estimate) / estimate
            if min_allowed <= below <= target and min_allowed <= above <= target:
                return low, high
        logger.info("discarding external range [%s, %s] around %d", external_range.low, external_range.high, estimate)

    half = max(int(round(estimate * target)), policy.min_spread_dollars)
    return max(policy.price_floor, estimate - half), estimate + half
