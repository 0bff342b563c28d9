import math
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from ..core.utils import money_num, num
from ..services.normalize import NormalizedPayload


class EstimatorUnavailable(RuntimeError):
    """External estimator could not produce a usable answer (network, timeout, decode)."""


def _money(v: Any) -> float | None:
    if v is None:
        return None
    n = money_num(v)
    if n is None:
        raise ValueError(f"not a money value: {v!r}")
    return n


def _loose(v: Any) -> float | None:
    # "22 ft" or "2015-ish" should not sink the whole comp; drop the detail instead
    return None if v is None else num(money_num(v))


Money = Annotated[float, BeforeValidator(_money)]
OptionalMoney = Annotated[float | None, BeforeValidator(_money)]
LooseNumber = Annotated[float | None, BeforeValidator(_loose)]


class ExternalRange(BaseModel):
    model_config = ConfigDict(extra="ignore")

    low: OptionalMoney = None
    high: OptionalMoney = None


class ExternalComp(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    price: Money
    year: LooseNumber = None
    length: LooseNumber = None
    location: str | None = None
    url: str | None = None


class ExternalTrendPoint(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    label: str
    price: Money


class ExternalEstimate(BaseModel):
    """
    Shape we demand from the external estimator. Anything that does not
    decode into this model is treated as no answer at all.
    """
    model_config = ConfigDict(extra="ignore")

    estimate: float
    range: ExternalRange | None = None
    confidence: str | None = None
    rationale: str | None = None
    comps: list[ExternalComp] = Field(default_factory=list)
    trend: list[ExternalTrendPoint] | None = None

    @field_validator("estimate", mode="before")
    @classmethod
    def _estimate(cls, v):
        n = money_num(v)
        if n is None or not math.isfinite(n) or n <= 0:
            raise ValueError(f"estimate must be a positive amount, got {v!r}")
        return n

    @field_validator("comps", mode="before")
    @classmethod
    def _comps(cls, v):
        return v if v is not None else []

    @field_validator("confidence", "rationale", mode="before")
    @classmethod
    def _text(cls, v):
        return v if isinstance(v, str) else None


def decode_estimate(content: str | bytes | None) -> ExternalEstimate:
    """Strict decode of the estimator's JSON document; raises EstimatorUnavailable."""
    if not content:
        raise EstimatorUnavailable("empty response")
    try:
        return ExternalEstimate.model_validate_json(content)
    except ValidationError as exc:
        raise EstimatorUnavailable(f"malformed response: {exc.error_count()} error(s)") from exc


class Estimator(Protocol):
    name: str

    async def estimate(self, payload: NormalizedPayload, include_trend: bool) -> ExternalEstimate | None:
        """
        One bounded attempt at a richer estimate. Returns None when the
        estimator is unavailable for any reason; never raises (cancellation aside).
        """
        ...
