import logging
from datetime import date
from typing import Any, Mapping

from ..core.config import Settings, settings
from ..core.utils import money
from ..models.base import Estimator
from ..models.baseline import baseline_guard
from ..models.null_model import NullEstimator
from ..schemas import Range, Valuation, VesselPayload
from . import listing
from .normalize import normalize
from .policy import PricingPolicy, classify, enforce_range, reconcile
from .synthesize import fill_comps, fill_trend

logger = logging.getLogger(__name__)


def estimator_from_settings(s: Settings = settings) -> Estimator:
    """
    Factory picks the external estimator from env flags; no key or an
    explicit "null" provider means baseline-only valuations.
    """
    if s.ESTIMATOR_PROVIDER == "openai" and s.OPENAI_API_KEY:
        from ..models.openai_model import OpenAIEstimator
        return OpenAIEstimator(api_key=s.OPENAI_API_KEY, model=s.OPENAI_MODEL,
                               timeout=s.ESTIMATOR_TIMEOUT_SECONDS, temperature=s.OPENAI_TEMPERATURE)
    if s.ESTIMATOR_PROVIDER == "openai":
        logger.warning("OPENAI_API_KEY not set; valuations will use the baseline model only")
    return NullEstimator()


class ValuationService:
    """
    Orchestrates:
      payload → normalize → baseline guard → external estimate (one try)
      → clamp → confidence → range → comps/trend → listing copy
    Holds no per-request state, so one instance can serve concurrent calls.
    """
    def __init__(self, estimator: Estimator | None = None, policy: PricingPolicy | None = None):
        self.estimator = estimator or NullEstimator()
        self.policy = policy or PricingPolicy.from_settings()

    async def compute(
        self,
        payload: VesselPayload | Mapping[str, Any] | None,
        include_trend: bool = False,
        today: date | None = None,
    ) -> Valuation:
        today = today or date.today()
        p = normalize(payload, today=today)

        # 1) Baseline guard (always)
        guard = baseline_guard(p)

        # 2) One best-effort external attempt; None means unavailable
        try:
            external = await self.estimator.estimate(p, include_trend)
        except Exception:
            logger.warning("estimator %s raised; using baseline", getattr(self.estimator, "name", "?"), exc_info=True)
            external = None

        # 3) Estimate clamped to the band around the guard
        est = reconcile(guard, external, self.policy)

        # 4) Confidence + range
        confidence = classify(p, external)
        low, high = enforce_range(est, external.range if external else None, confidence, self.policy)

        # 5) Comps and trend (estimator's or synthetic)
        comps = fill_comps(est, p, external.comps if external else None)
        trend = fill_trend(est, external.trend if external else None, include_trend, today)

        rationale = (external.rationale or "").strip() if external else ""
        logger.info(
            "valuation guard=%d estimate=%d range=[%d, %d] confidence=%s source=%s",
            guard, est, low, high, confidence, "external" if external else "baseline",
        )
        return Valuation(
            currency=settings.DEFAULT_CURRENCY,
            estimate=money(est),
            estimate_value=est,
            range=Range(low=low, high=high),
            confidence=confidence,
            rationale=rationale or listing.rationale_from(p),
            comps=comps,
            trend=trend,
            source="external" if external else "baseline",
            listing_title=listing.listing_title(p),
            listing_description=listing.listing_description(p),
            negotiation_bullets=listing.negotiation_bullets(p),
            prep_checklist=list(listing.PREP_CHECKLIST),
            upgrade_tips=list(listing.UPGRADE_TIPS),
        )


async def compute_valuation(
    payload: VesselPayload | Mapping[str, Any] | None,
    *,
    include_trend: bool = False,
    estimator: Estimator | None = None,
    policy: PricingPolicy | None = None,
    today: date | None = None,
) -> Valuation:
    """Single entry point: a fully bounded Valuation for any payload."""
    return await ValuationService(estimator, policy).compute(payload, include_trend, today)
