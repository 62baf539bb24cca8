"""
tests/test_pipeline.py
~~~~~~~~~~~~~~~~~~~~~~
Tests for saastax.tax.pipeline - compute_deduction_pipeline, DeductionResult,
DeductionStep, Options.
"""

from __future__ import annotations

import json
import math

import pytest

from saastax.tax.income_tax import income_tax
from saastax.tax.pipeline import (
    BUSINESS_TAX_ALLOWANCE,
    HEALTH_INSURANCE_MAX_MONTHLY,
    HEALTH_INSURANCE_MIN_MONTHLY,
    HEALTH_INSURANCE_RATE,
    STEP_IDS,
    DeductionResult,
    Options,
    compute_deduction_pipeline,
)


def _chain_holds(result: DeductionResult) -> bool:
    prev = result.revenue
    for i, s in enumerate(result.steps):
        if i == 0:
            if s.rest != s.base or s.amount != 0:
                return False
        elif s.rest != pytest.approx(prev - s.amount, abs=1e-9):
            return False
        prev = s.rest
    return True


# ---------------------------------------------------------------------------
# Zero / invalid revenue
# ---------------------------------------------------------------------------

class TestEmptyResult:
    @pytest.mark.parametrize("revenue", [0, -1, -70_000, math.nan, -math.inf, math.inf, None, "abc"])
    def test_returns_all_zero_structure(self, revenue):
        result = compute_deduction_pipeline(revenue, Options())
        assert result == DeductionResult(revenue=0.0)
        assert result.steps == ()
        assert result.total_taxes == 0
        assert result.net_income == 0
        assert result.effective_rate == 0

    def test_options_default_to_none(self):
        assert compute_deduction_pipeline(0) == DeductionResult(revenue=0.0)


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------

class TestStructure:
    def test_nine_steps_in_order(self, result_70k):
        assert len(result_70k.steps) == 9
        assert tuple(s.id for s in result_70k.steps) == STEP_IDS

    def test_step_count_is_fixed_when_excluded(self, result_70k_excluded):
        assert tuple(s.id for s in result_70k_excluded.steps) == STEP_IDS

    def test_anchor_step(self, result_70k):
        first = result_70k.steps[0]
        assert first.base == 70_000
        assert first.amount == 0
        assert first.rest == 70_000

    @pytest.mark.parametrize("revenue", [1, 500, 12_000, 70_000, 250_000, 5_000_000])
    def test_rest_chain(self, revenue):
        result = compute_deduction_pipeline(revenue, Options(subscribers=100))
        assert _chain_holds(result)

    @pytest.mark.parametrize("revenue", [1, 500, 12_000, 70_000, 250_000, 5_000_000])
    def test_total_equals_revenue_minus_net(self, revenue):
        result = compute_deduction_pipeline(revenue, Options())
        assert result.total_taxes == pytest.approx(result.revenue - result.net_income, abs=1e-9)

    @pytest.mark.parametrize("revenue", [1, 500, 70_000, 5_000_000])
    def test_bases_and_amounts_non_negative(self, revenue):
        result = compute_deduction_pipeline(revenue, Options(subscribers=10_000))
        for s in result.steps:
            assert s.base >= 0
            assert s.amount >= 0

    def test_labels_are_translation_keys(self, result_70k):
        assert [s.label for s in result_70k.steps] == [
            "revenue", "vat", "app_store_provision", "payment_service_provision",
            "business_tax", "income_tax", "solidarity_surcharge",
            "health_insurance", "care_insurance",
        ]

    def test_step_lookup(self, result_70k):
        assert result_70k.step("vat").amount == pytest.approx(13_300)
        assert result_70k.step("unknown") is None


# ---------------------------------------------------------------------------
# Reference scenario: 70 000, nothing excluded
# ---------------------------------------------------------------------------

class TestReferenceScenario:
    def test_vat(self, result_70k):
        vat = result_70k.step("vat")
        assert vat.base == 70_000
        assert vat.amount == pytest.approx(13_300.00)
        assert vat.rest == pytest.approx(56_700.00)
        assert vat.rate_label == "19%"

    def test_app_store(self, result_70k):
        store = result_70k.step("app-store")
        assert store.base == pytest.approx(56_700)
        assert store.amount == pytest.approx(8_505.00)
        assert store.rate_label == "15%"

    def test_payment_service_percentage_only_without_subscribers(self, result_70k):
        pay = result_70k.step("payment-service")
        assert pay.base == pytest.approx(48_195)
        assert pay.amount == pytest.approx(48_195 * 0.015)

    def test_business_tax_base_is_rest_after_fees(self, result_70k):
        pay = result_70k.step("payment-service")
        biz = result_70k.step("business-tax")
        assert biz.base == pytest.approx(pay.rest)
        assert biz.amount == pytest.approx((pay.rest - BUSINESS_TAX_ALLOWANCE) * 0.076)

    def test_income_tax_uses_running_rest(self, result_70k):
        biz = result_70k.step("business-tax")
        est = result_70k.step("income-tax")
        assert est.base == pytest.approx(biz.rest)
        assert est.amount == pytest.approx(income_tax(biz.rest))
        assert est.rate_label == f"~{est.amount / est.base * 100:.1f}%"

    def test_solidarity_based_on_income_tax(self, result_70k):
        est = result_70k.step("income-tax")
        soli = result_70k.step("solidarity-surcharge")
        assert soli.base == est.amount
        assert soli.amount == pytest.approx(est.amount * 0.055)
        assert soli.rest == pytest.approx(est.rest - soli.amount)

    def test_insurances_based_on_after_vat(self, result_70k):
        health = result_70k.step("health-insurance")
        care = result_70k.step("care-insurance")
        assert health.base == pytest.approx(56_700)
        assert care.base == pytest.approx(56_700)
        assert health.amount == pytest.approx(4_725 * 0.166 * 12)
        assert care.amount == pytest.approx(2_381.40)

    def test_effective_rate_in_range(self, result_70k):
        assert 0 < result_70k.effective_rate < 1
        assert result_70k.effective_rate == pytest.approx(result_70k.total_taxes / 70_000)

    def test_net_income_is_last_rest(self, result_70k):
        assert result_70k.net_income == result_70k.steps[-1].rest


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class TestOptions:
    def test_excluded_app_store(self, result_70k_excluded):
        store = result_70k_excluded.step("app-store")
        assert store.amount == 0
        assert store.rate_label == "0%"
        assert store.rest == pytest.approx(56_700)

    def test_excluded_payment_service(self, result_70k_excluded):
        pay = result_70k_excluded.step("payment-service")
        assert pay.amount == 0
        assert pay.rate_label == "0%"

    def test_excluded_business_tax(self, result_70k_excluded):
        biz = result_70k_excluded.step("business-tax")
        assert biz.amount == pytest.approx((56_700 - 24_500) * 0.076)

    def test_per_charge_fee_scales_with_subscribers(self):
        opts = Options(exclude_app_store_provision=True, subscribers=584)
        pay = compute_deduction_pipeline(70_000, opts).step("payment-service")
        assert pay.amount == pytest.approx(56_700 * 0.015 + 584 * 12 * 0.25)
        assert pay.rate_label == "1.5% + 0.25/tx"

    def test_payment_fee_capped_at_base(self):
        result = compute_deduction_pipeline(100, Options(subscribers=1_000))
        pay = result.step("payment-service")
        assert pay.amount == pytest.approx(pay.base)
        assert pay.rest == pytest.approx(0)

    def test_income_tax_placeholder_label_for_zero_base(self):
        result = compute_deduction_pipeline(100, Options(subscribers=1_000))
        est = result.step("income-tax")
        assert est.base == 0
        assert est.amount == 0
        assert est.rate_label == "progressive"

    def test_subscribers_normalised(self):
        assert Options(subscribers=-5).subscribers == 0
        assert Options(subscribers=3.9).subscribers == 3
        assert Options(subscribers=math.nan).subscribers == 0

    def test_options_frozen(self):
        with pytest.raises(Exception):
            Options().subscribers = 4  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------

class TestEdgeCases:
    def test_business_tax_zero_below_allowance(self):
        result = compute_deduction_pipeline(20_000, Options())
        assert result.step("business-tax").amount == 0

    def test_health_minimum_base(self):
        result = compute_deduction_pipeline(1_000, Options())
        health = result.step("health-insurance")
        assert health.base == pytest.approx(810)
        assert health.amount == pytest.approx(HEALTH_INSURANCE_MIN_MONTHLY * HEALTH_INSURANCE_RATE * 12)

    def test_health_maximum_base(self):
        result = compute_deduction_pipeline(1_000_000, Options())
        health = result.step("health-insurance")
        assert health.amount == pytest.approx(HEALTH_INSURANCE_MAX_MONTHLY * HEALTH_INSURANCE_RATE * 12)

    @pytest.mark.parametrize("revenue", [1, 10_000, 100_000, 10_000_000])
    def test_health_monthly_base_within_limits(self, revenue):
        health = compute_deduction_pipeline(revenue, Options()).step("health-insurance")
        monthly_base = health.amount / 12 / HEALTH_INSURANCE_RATE
        assert HEALTH_INSURANCE_MIN_MONTHLY - 1e-9 <= monthly_base <= HEALTH_INSURANCE_MAX_MONTHLY + 1e-9

    def test_small_revenue_can_end_negative(self):
        # the minimum health contribution exceeds what is left
        result = compute_deduction_pipeline(1_000, Options())
        assert result.net_income < 0
        assert result.effective_rate > 1

    def test_idempotent(self):
        opts = Options(subscribers=250)
        assert compute_deduction_pipeline(83_456.78, opts) == compute_deduction_pipeline(83_456.78, opts)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

class TestExport:
    def test_to_dict_keys(self, result_70k):
        d = result_70k.to_dict()
        assert set(d) == {"revenue", "steps", "total_taxes", "net_income", "effective_rate"}
        assert set(d["steps"][0]) == {"id", "label", "base", "rate_label", "amount", "rest"}

    def test_to_json_roundtrip(self, result_70k):
        data = json.loads(result_70k.to_json())
        assert data["revenue"] == 70_000
        assert len(data["steps"]) == 9

    def test_to_json_writes_file(self, result_70k, tmp_path):
        out = tmp_path / "ledger.json"
        result_70k.to_json(out)
        assert json.loads(out.read_text(encoding="utf-8"))["net_income"] == pytest.approx(result_70k.net_income)

    def test_summary_en(self, result_70k):
        text = result_70k.summary("en")
        assert "Calculation" in text
        assert "App Store Commission" in text
        assert "$70,000" in text
        assert "$13,300" in text

    def test_summary_de(self, result_70k):
        text = result_70k.summary("de")
        assert "Gewerbesteuer" in text
        assert "70.000 €" in text
        assert "Netto nach allen Abzügen" in text

    def test_summary_empty(self):
        text = DeductionResult(revenue=0.0).summary("en")
        assert "Enter your yearly revenue" in text
