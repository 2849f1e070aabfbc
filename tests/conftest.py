"""Shared test configuration."""

import os
import random

import pytest
from hypothesis import HealthCheck, settings

settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def rng() -> random.Random:
    """A seeded generator so statistical tests are reproducible."""
    return random.Random(0x5EED)


@pytest.fixture
def greeting_entries() -> list[tuple[str, float]]:
    return [
        ("hello", 0.3),
        ("wicker", 10.0),
        ("this", 3.0),
        ("world", 1.0),
        ("is", 5.0),
    ]
