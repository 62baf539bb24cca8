"""
saastax.planning
~~~~~~~~~~~~~~~~
Scenario planning around the deduction pipeline.

Given a revenue target and a monthly subscription price, work out how many
subscribers that takes, run the deduction pipeline for it, and compare the
resulting monthly net income with the monthly living costs.

Usage::

    from saastax.planning import plan_scenario

    report = plan_scenario(70_000, monthly_price=10, monthly_living_cost=2_000)
    print(report.subscribers)                      # 584
    print(report.living_costs.can_make_it)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .tax.pipeline import DeductionResult, Options, compute_deduction_pipeline
from .utils import clamp_to_zero


def subscribers_needed(revenue: Any, monthly_price: Any) -> int:
    """Subscribers paying ``monthly_price`` needed to reach a yearly ``revenue``."""
    revenue = clamp_to_zero(revenue)
    monthly_price = clamp_to_zero(monthly_price)
    if revenue <= 0 or monthly_price <= 0:
        return 0
    return math.ceil(revenue / 12 / monthly_price)


@dataclass(frozen=True)
class LivingCostCheck:
    """
    Monthly net income against monthly living costs.

    ``difference > 0`` is a surplus, ``difference < 0`` a shortfall.
    """

    monthly_living_cost: float
    monthly_net_income:  float

    @property
    def can_make_it(self) -> bool:
        return self.monthly_net_income >= self.monthly_living_cost

    @property
    def difference(self) -> float:
        return self.monthly_net_income - self.monthly_living_cost

    def to_dict(self) -> dict:
        return {
            "monthly_living_cost": self.monthly_living_cost,
            "monthly_net_income":  self.monthly_net_income,
            "can_make_it":         self.can_make_it,
            "difference":          self.difference,
        }


def check_living_costs(net_income: float, monthly_living_cost: Any) -> LivingCostCheck:
    return LivingCostCheck(
        monthly_living_cost=clamp_to_zero(monthly_living_cost),
        monthly_net_income=net_income / 12,
    )


@dataclass(frozen=True)
class ScenarioReport:
    """Everything the calculator shows for one set of inputs."""

    revenue:       float
    monthly_price: float
    subscribers:   int
    options:       Options
    result:        DeductionResult
    living_costs:  Optional[LivingCostCheck] = None

    def to_dict(self) -> dict:
        return {
            "revenue":       self.revenue,
            "monthly_price": self.monthly_price,
            "subscribers":   self.subscribers,
            "options":       self.options.to_dict(),
            "result":        self.result.to_dict(),
            "living_costs":  self.living_costs.to_dict() if self.living_costs else None,
        }


def plan_scenario(
    revenue: Any,
    monthly_price: Any = 0,
    monthly_living_cost: Any = 0,
    include_app_store_provision: bool = False,
    include_payment_service: bool = False,
) -> ScenarioReport:
    """
    Build a ``ScenarioReport``.

    The living-cost comparison is only made when both the revenue and the
    living costs are positive.
    """
    revenue = clamp_to_zero(revenue)
    monthly_price = clamp_to_zero(monthly_price)
    monthly_living_cost = clamp_to_zero(monthly_living_cost)

    subscribers = subscribers_needed(revenue, monthly_price)
    options = Options(
        exclude_app_store_provision=not include_app_store_provision,
        exclude_payment_service=not include_payment_service,
        subscribers=subscribers,
    )
    result = compute_deduction_pipeline(revenue, options)

    living_costs = None
    if revenue > 0 and monthly_living_cost > 0:
        living_costs = check_living_costs(result.net_income, monthly_living_cost)

    return ScenarioReport(
        revenue=result.revenue,
        monthly_price=monthly_price,
        subscribers=subscribers,
        options=options,
        result=result,
        living_costs=living_costs,
    )
