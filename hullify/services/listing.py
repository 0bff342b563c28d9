from .normalize import NormalizedPayload
from .synthesize import comp_title

PREP_CHECKLIST = [
    "Deep clean hull & deck; remove personal items",
    "Fresh photos: bow, helm, engine(s), trailer (if any)",
    "Have maintenance receipts handy",
]
UPGRADE_TIPS = [
    "Address inexpensive mechanical issues before listing",
    "Detailing & minor upholstery fixes often 2–5× ROI",
]


def _fmt_number(n: float) -> str:
    return f"{n:g}"


def rationale_from(p: NormalizedPayload) -> str:
    """One-line explanation used when the estimator gives none."""
    bits = [
        f"{p.age}-yr age",
        f"{_fmt_number(p.length)} ft" if p.length_specified else "— ft",
        f"condition: {p.condition or 'unknown'}",
        f"runs: {p.runs.lower()}" if p.runs else None,
        f"{_fmt_number(p.engine_hours)} hours" if p.engine_hours else None,
        f"trailer: {p.trailer}" if p.trailer else None,
        "stored out of water 1+ yr" if p.out_of_water_year_plus else None,
        f"title: {p.title_status}" if p.title_status else None,
    ]
    return f"Valuation adjusted for {', '.join(b for b in bits if b)}."


def listing_title(p: NormalizedPayload) -> str:
    year = str(p.year) if p.year_specified else ""
    return " ".join(f"{year} {comp_title(p)} • {_fmt_number(p.length)} ft".split())


def listing_description(p: NormalizedPayload) -> str:
    parts = []
    if p.length_specified:
        parts.append(f"Approximately {_fmt_number(p.length)}’")
    if p.make:
        parts.append(p.make)
    if p.model:
        parts.append(p.model)
    if p.year_specified:
        parts.append(f"({p.year})")
    parts.append(f"{p.condition or 'Good'} condition.")
    if p.runs:
        parts.append(f"Runs: {p.runs}.")
    if p.engine_hours:
        parts.append(f"Engine hours: {_fmt_number(p.engine_hours)}.")
    if p.engine:
        parts.append(f"Engine: {p.engine}.")
    if p.trailer == "Yes":
        parts.append("Trailer included.")
    if p.aftermarket:
        parts.append(f"Upgrades: {p.aftermarket}.")
    if p.out_of_water_year_plus:
        parts.append("Stored out of water 1+ year.")
    return " ".join(parts)


def negotiation_bullets(p: NormalizedPayload) -> list[str]:
    return [
        "Adjusted for age, running status & hours",
        "Trailer included" if p.trailer == "Yes" else "No trailer — price reflects",
        "Local-market comparable pricing",
    ]
