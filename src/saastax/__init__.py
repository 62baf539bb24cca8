"""
saastax
~~~~~~~
Rough German tax and contribution breakdown for SaaS revenue.

Typical usage::

    from saastax import Options, compute_deduction_pipeline, format_currency

    result = compute_deduction_pipeline(70_000, Options(exclude_payment_service=True))
    for step in result.steps:
        print(step.id, format_currency(step.amount, "de"))
    print(format_currency(result.net_income, "de"))

The figures are a rough approximation and no substitute for tax advice.
"""

from .config import Config, ScenarioDefaults, cfg
from .exceptions import SaasTaxError, UnsupportedLocaleError
from .planning import (
    LivingCostCheck,
    ScenarioReport,
    check_living_costs,
    plan_scenario,
    subscribers_needed,
)
from .tax.income_tax import average_income_tax_rate, clamped_income_tax, income_tax
from .tax.pipeline import (
    STEP_IDS,
    DeductionResult,
    DeductionStep,
    Options,
    compute_deduction_pipeline,
)
from .translations import TRANSLATIONS, get_translations, step_label
from .utils import (
    SUPPORTED_LOCALES,
    clamp_to_zero,
    format_currency,
    format_percent,
    parse_amount,
)

__all__ = [
    # Core calculation
    "compute_deduction_pipeline",
    "clamped_income_tax",
    "income_tax",
    "average_income_tax_rate",
    "Options",
    "DeductionStep",
    "DeductionResult",
    "STEP_IDS",
    # Planning
    "plan_scenario",
    "subscribers_needed",
    "check_living_costs",
    "ScenarioReport",
    "LivingCostCheck",
    # Formatting / parsing
    "format_currency",
    "format_percent",
    "parse_amount",
    "clamp_to_zero",
    # Translations
    "SUPPORTED_LOCALES",
    "TRANSLATIONS",
    "get_translations",
    "step_label",
    # Configuration
    "Config",
    "ScenarioDefaults",
    "cfg",
    # Exceptions
    "SaasTaxError",
    "UnsupportedLocaleError",
]
