from datetime import date

from ..core.config import settings
from ..core.utils import money, month_label, trailing_months
from ..models.base import ExternalComp, ExternalTrendPoint
from ..schemas import Comp, TrendPoint
from .normalize import NormalizedPayload

MAX_COMPS = 8
SYNTHETIC_COMPS = 6
TREND_MONTHS = 12
MIN_EXTERNAL_TREND = 6
DEFAULT_LOCATION = "Local Market"


def comp_title(p: NormalizedPayload) -> str:
    return f"{p.make or 'Boat'} {p.model or ''}".strip()


def _from_external(c: ExternalComp, fallback_title: str) -> Comp:
    price = max(0, int(round(c.price)))
    return Comp(
        title=c.title or fallback_title,
        price=money(price),
        price_value=price,
        year=int(round(c.year)) if c.year is not None else None,
        length=c.length,
        location=c.location,
        url=c.url,
    )


def fill_comps(estimate: int, p: NormalizedPayload, external: list[ExternalComp] | None) -> list[Comp]:
    """Up to 8 estimator comps as given, else 6 synthetic ones ramping 0.90x..1.05x."""
    title = comp_title(p)
    if external:
        return [_from_external(c, title) for c in external[:MAX_COMPS]]

    comps = []
    for i in range(SYNTHETIC_COMPS):
        price = int(round(estimate * (0.90 + i * 0.03)))
        comps.append(Comp(
            title=title,
            price=money(price),
            price_value=price,
            year=p.year if p.year_specified else p.current_year - (SYNTHETIC_COMPS - i),
            length=p.length,
            location=p.location or DEFAULT_LOCATION,
            url=settings.COMPS_URL,
        ))
    return comps


def synthetic_trend(estimate: int, today: date) -> list[TrendPoint]:
    """Trailing 12 months ending this month, ramping 0.90x -> 1.05x of the estimate."""
    last = TREND_MONTHS - 1
    return [
        TrendPoint(label=month_label(month), price=int(round(estimate * (0.90 + (i / last) * 0.15))))
        for i, (_, month) in enumerate(trailing_months(today, TREND_MONTHS))
    ]


def fill_trend(
    estimate: int,
    external: list[ExternalTrendPoint] | None,
    requested: bool,
    today: date | None = None,
) -> list[TrendPoint] | None:
    if not requested:
        return None
    synthetic = synthetic_trend(estimate, today or date.today())
    if not external or len(external) < MIN_EXTERNAL_TREND:
        return synthetic

    # Estimator series is aligned to the most recent months; gaps at the
    # start are filled from the synthetic ramp.
    recent = [
        TrendPoint(label=pt.label, price=max(0, int(round(pt.price))))
        for pt in external[-TREND_MONTHS:]
    ]
    return synthetic[: TREND_MONTHS - len(recent)] + recent
