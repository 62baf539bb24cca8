"""
tests/conftest.py
~~~~~~~~~~~~~~~~~
Shared pytest fixtures for the saastax test suite.
"""

from __future__ import annotations

import pytest

from saastax.config import Config
from saastax.tax.pipeline import DeductionResult, Options, compute_deduction_pipeline


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> Config:
    return Config(_env_file=None)  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------

@pytest.fixture
def no_exclusions() -> Options:
    return Options()


@pytest.fixture
def all_exclusions() -> Options:
    return Options(exclude_app_store_provision=True, exclude_payment_service=True)


@pytest.fixture
def result_70k(no_exclusions) -> DeductionResult:
    """70 000 gross revenue with every optional deduction applied."""
    return compute_deduction_pipeline(70_000, no_exclusions)


@pytest.fixture
def result_70k_excluded(all_exclusions) -> DeductionResult:
    """70 000 gross revenue without app store commission and payment fees."""
    return compute_deduction_pipeline(70_000, all_exclusions)
