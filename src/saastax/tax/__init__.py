"""
saastax.tax
~~~~~~~~~~~
Tax and contribution computations.

  - ``income_tax`` - progressive Einkommensteuer tariff
  - ``pipeline``   - ordered deduction ledger from gross revenue to net income
"""

from .income_tax import average_income_tax_rate, clamped_income_tax, income_tax
from .pipeline import (
    STEP_IDS,
    DeductionResult,
    DeductionStep,
    Options,
    compute_deduction_pipeline,
)

__all__ = [
    "income_tax",
    "clamped_income_tax",
    "average_income_tax_rate",
    "STEP_IDS",
    "Options",
    "DeductionStep",
    "DeductionResult",
    "compute_deduction_pipeline",
]
