"""Shared test configuration and fakes."""

import os

# Never reach a real estimator or require keys from the test environment
os.environ["ESTIMATOR_PROVIDER"] = "null"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("API_KEY", None)

import asyncio
from datetime import date
from types import SimpleNamespace

import pytest

from hullify.core.cache import cache
from hullify.models.base import ExternalEstimate

TODAY = date(2026, 6, 15)


class StaticEstimator:
    """Returns the same decoded document for every call (None = unavailable)."""
    name = "static"

    def __init__(self, document: dict | None):
        self.document = document
        self.calls = []

    async def estimate(self, payload, include_trend):
        self.calls.append((payload, include_trend))
        if self.document is None:
            return None
        return ExternalEstimate.model_validate(self.document)


class _FakeCompletions:
    def __init__(self, content=None, exc=None, delay=0.0, choices=True):
        self.content = content
        self.exc = exc
        self.delay = delay
        self.choices = choices
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc:
            raise self.exc
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


class FakeOpenAIClient:
    """Just enough of AsyncOpenAI for `client.chat.completions.create`."""

    def __init__(self, **kwargs):
        self.completions = _FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def static_estimator():
    return StaticEstimator


@pytest.fixture
def fake_openai():
    return FakeOpenAIClient


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    cache.clear()
    yield
    cache.clear()
