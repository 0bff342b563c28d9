from .base import Estimator, ExternalEstimate
from ..services.normalize import NormalizedPayload

class NullEstimator(Estimator):
    """
    Always unavailable. Used when no external provider is configured and in
    tests, so every valuation is the deterministic baseline path.
    """
    name = "null"

    async def estimate(self, payload: NormalizedPayload, include_trend: bool) -> ExternalEstimate | None:
        return None
