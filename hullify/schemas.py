from typing import Annotated, Any, Literal
from pydantic import BaseModel, ConfigDict, Field

Confidence = Literal["low", "medium", "high"]

class VesselPayload(BaseModel):
    """
    Raw seller input. Every field is optional and loosely typed; the
    normalizer is the only place that interprets these values.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    make: str | None = None
    model: str | None = None
    year: Any = None
    length: Any = None
    condition: str | None = None
    runs: str | None = None
    engine_hours: Any = Field(default=None, alias="engineHours")
    engine: str | None = None
    trailer: str | None = None
    title_status: str | None = Field(default=None, alias="titleStatus")
    hull_material: str | None = Field(default=None, alias="hullMaterial")
    out_of_water_year_plus: Any = Field(default=None, alias="outOfWaterYearPlus")
    location: str | None = None
    aftermarket: str | None = None

class Range(BaseModel):
    low: int = Field(ge=0)
    high: int = Field(ge=0)

class Comp(BaseModel):
    title: str
    price: str                 # display string, e.g. "$18,500"
    price_value: int = Field(ge=0)
    year: int | None = None
    length: float | None = None
    location: str | None = None
    url: str | None = None

class TrendPoint(BaseModel):
    label: str                 # short month name, e.g. "Oct"
    price: int = Field(ge=0)

class Valuation(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency: str = "USD"
    estimate: str
    estimate_value: int = Field(ge=0)
    range: Range
    confidence: Confidence
    rationale: str
    comps: list[Comp] = Field(max_length=8)
    trend: Annotated[list[TrendPoint], Field(min_length=12, max_length=12)] | None = None
    source: Literal["external", "baseline"] = "baseline"

    # Seller-facing listing copy
    listing_title: str = ""
    listing_description: str = ""
    negotiation_bullets: list[str] = []
    prep_checklist: list[str] = []
    upgrade_tips: list[str] = []
