"""OpenAI-backed external estimator."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import httpx

from .base import Estimator, EstimatorUnavailable, ExternalEstimate, decode_estimate
from ..core.config import settings
from ..core.metrics import record_estimator_call
from ..services.normalize import NormalizedPayload

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You price used recreational boats. Reply with one JSON object only, keys:
- estimate: string like "$18,500"
- range: {"low": "$xx,xxx", "high": "$yy,yyy"} with low <= estimate <= high
- confidence: "low" | "medium" | "high"
- rationale: one short sentence
- comps: up to 8 objects {title, price, year, length, location, url}
- trend: 12 monthly objects {label, price}, only when requestTrend is true

Push the price down for: condition "Fair" or "Needs Work"; runs "No" or
"Starts but stalls"; engineHours above 800 (more above 1500);
outOfWaterYearPlus true; trailer "No" (subtract a typical trailer for the
size); titleStatus "Bill of Sale only" (strong) or "Other" (mild); boats
older than 20 years.

Keep the range tight, high/low usually at most 1.25, and roughly symmetric
around the estimate."""


class OpenAIEstimator(Estimator):
    """
    Single-shot chat completion in JSON mode. Retries are disabled on the SDK
    client and the whole call is bounded by `timeout` seconds; any failure is
    logged and reported as None so callers fall back to the baseline.
    """
    name = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 timeout: float | None = None, temperature: float | None = None,
                 client: Any = None):
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.ESTIMATOR_TIMEOUT_SECONDS
        self.temperature = temperature if temperature is not None else settings.OPENAI_TEMPERATURE
        if client is None:
            key = api_key or settings.OPENAI_API_KEY
            if not key:
                raise RuntimeError("OPENAI_API_KEY missing from settings")
            from openai import AsyncOpenAI  # lazy: only the network estimator needs the SDK
            timeout = httpx.Timeout(self.timeout, connect=min(self.timeout, 2.0))
            client = AsyncOpenAI(api_key=key, timeout=timeout, max_retries=0)
        self.client = client

    def _messages(self, payload: NormalizedPayload, include_trend: bool) -> list[dict]:
        request = {**payload.to_request(), "requestTrend": include_trend}
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": json.dumps(request)},
        ]

    async def _complete(self, payload: NormalizedPayload, include_trend: bool) -> str | None:
        resp = await self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            response_format={"type": "json_object"},
            messages=self._messages(payload, include_trend),
        )
        if not resp.choices:
            raise EstimatorUnavailable("no choices in completion")
        return resp.choices[0].message.content

    async def estimate(self, payload: NormalizedPayload, include_trend: bool) -> ExternalEstimate | None:
        start = time.perf_counter()
        outcome = "ok"
        result = None
        try:
            content = await asyncio.wait_for(self._complete(payload, include_trend), timeout=self.timeout)
            result = decode_estimate(content)
        except asyncio.TimeoutError:
            outcome = "timeout"
            logger.warning("estimator timed out after %.1fs", self.timeout)
        except EstimatorUnavailable as exc:
            outcome = "invalid"
            logger.warning("estimator response rejected: %s", exc)
        except Exception:
            outcome = "unavailable"
            logger.warning("estimator call failed", exc_info=True)
        record_estimator_call(self.name, outcome, time.perf_counter() - start)
        return result
