from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from pydantic import ValidationError

from ..core.utils import clamp, normalize_text, num
from ..schemas import VesselPayload

CONDITIONS = ("Excellent", "Good", "Fair", "Needs Work")
RUNS = ("Yes", "Starts but stalls", "No")
TRAILER = ("Yes", "No")
TITLE_STATUSES = ("Clean", "Bill of Sale only", "Loan/Lien", "Other")

LENGTH_DEFAULT, LENGTH_MIN, LENGTH_MAX = 20.0, 8.0, 60.0
YEAR_DEFAULT, YEAR_MIN = 2005, 1950

_TRUTHY = {"true", "yes", "y", "1", "on"}

@dataclass(frozen=True)
class NormalizedPayload:
    """Fully defaulted vessel description; enumerations are None when unknown."""
    make: str | None
    model: str | None
    year: int
    length: float
    age: int
    current_year: int
    condition: str | None = None
    runs: str | None = None
    engine_hours: float = 0.0
    engine: str | None = None
    trailer: str | None = None
    title_status: str | None = None
    hull_material: str = ""
    out_of_water_year_plus: bool = False
    location: str | None = None
    aftermarket: str | None = None
    # Whether the seller actually gave these (vs. defaults)
    year_specified: bool = False
    length_specified: bool = False

    def to_request(self) -> dict[str, Any]:
        """Camel-cased view sent to the external estimator."""
        return {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "length": self.length,
            "condition": self.condition,
            "runs": self.runs,
            "engineHours": self.engine_hours,
            "engine": self.engine,
            "trailer": self.trailer,
            "titleStatus": self.title_status,
            "hullMaterial": self.hull_material or None,
            "outOfWaterYearPlus": self.out_of_water_year_plus,
            "location": self.location,
            "aftermarket": self.aftermarket,
        }

def _text(v: Any) -> str | None:
    if v is None:
        return None
    s = " ".join(str(v).split())
    return s or None

def _choice(v: Any, options: tuple[str, ...]) -> str | None:
    """Canonical spelling of `v` if it names one of `options` (case-insensitive)."""
    if v is None:
        return None
    key = normalize_text(v)
    for opt in options:
        if opt.lower() == key:
            return opt
    return None

def _flag(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        return normalize_text(v) in _TRUTHY
    return False

def _lenient_payload(data: dict[str, Any]) -> VesselPayload:
    """Validate a plain mapping, dropping any key whose value has the wrong shape."""
    try:
        return VesselPayload.model_validate(data)
    except ValidationError as exc:
        bad = {str(e["loc"][0]) for e in exc.errors() if e["loc"]}
    for name, field in VesselPayload.model_fields.items():
        if name in bad or field.alias in bad:
            bad.update({name, field.alias})
    return VesselPayload.model_validate({k: v for k, v in data.items() if k not in bad})

def normalize(raw: VesselPayload | Mapping[str, Any] | None, today: date | None = None) -> NormalizedPayload:
    """
    Coerce and clamp seller input into bounded domains. Unparseable or
    out-of-domain fields fall back to their neutral default; never raises.
    """
    if raw is None:
        raw = VesselPayload()
    elif not isinstance(raw, VesselPayload):
        raw = _lenient_payload(dict(raw))
    now_year = (today or date.today()).year

    length_n = num(raw.length)
    length = clamp(length_n, LENGTH_MIN, LENGTH_MAX) if length_n is not None else LENGTH_DEFAULT
    year_n = num(raw.year)
    year = int(clamp(round(year_n), YEAR_MIN, now_year + 1)) if year_n is not None else YEAR_DEFAULT
    hours = num(raw.engine_hours, 0.0)

    return NormalizedPayload(
        make=_text(raw.make),
        model=_text(raw.model),
        year=year,
        length=length,
        age=max(0, now_year - year),
        current_year=now_year,
        condition=_choice(raw.condition, CONDITIONS),
        runs=_choice(raw.runs, RUNS),
        engine_hours=max(0.0, hours),
        engine=_text(raw.engine),
        trailer=_choice(raw.trailer, TRAILER),
        title_status=_choice(raw.title_status, TITLE_STATUSES),
        hull_material=normalize_text(raw.hull_material) if raw.hull_material else "",
        out_of_water_year_plus=_flag(raw.out_of_water_year_plus),
        location=_text(raw.location),
        aftermarket=_text(raw.aftermarket),
        year_specified=year_n is not None,
        length_specified=length_n is not None,
    )
