"""Standardized Hypothesis settings profiles for property tests.

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(data=records)
    @STANDARD_SETTINGS
    def test_something(data):
        ...

Tiers:
- STANDARD_SETTINGS: 100 examples - Regular property tests
- SLOW_SETTINGS: 50 examples - Whole-pipeline tests over many lines
"""

from hypothesis import HealthCheck, settings

STANDARD_SETTINGS = settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])

SLOW_SETTINGS = settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.too_slow])
