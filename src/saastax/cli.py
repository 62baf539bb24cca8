"""
saastax.cli
~~~~~~~~~~~
Command-line interface for saastax.

Entry point registered in pyproject.toml::

    [project.scripts]
    saastax = "saastax.cli:main"

Usage examples
--------------
    saastax --version

    # Ledger for 70 000 gross revenue, German formatting
    saastax --revenue 70000 --locale de

    # With app store commission and payment fees for a 9.99 subscription
    saastax --revenue 70000 --app-store --payment-service --monthly-price 9.99

    # JSON export
    saastax --revenue 70000 --json --output scenario.json

    # Income tax only
    saastax --income-tax 45000

    # Web UI
    saastax --ui --port 8080
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from saastax.config import Config, cfg
from saastax.planning import ScenarioReport, plan_scenario
from saastax.tax.income_tax import average_income_tax_rate, income_tax
from saastax.translations import get_translations
from saastax.utils import SUPPORTED_LOCALES, format_currency, format_percent, parse_amount

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI class
# ---------------------------------------------------------------------------

class SaasTaxCLI:

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or cfg

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def print_version(self) -> None:
        try:
            print(f"saastax version: {version('saastax')}")
        except PackageNotFoundError:
            print("saastax version: unknown")

    # ------------------------------------------------------------------
    # Scenario
    # ------------------------------------------------------------------

    def calculate(
        self,
        revenue: str | float,
        locale: str | None = None,
        monthly_price: str | float | None = None,
        monthly_living_cost: str | float | None = None,
        include_app_store_provision: bool | None = None,
        include_payment_service: bool | None = None,
        as_json: bool = False,
        output: Path | None = None,
    ) -> int:
        """Print the deduction ledger for ``revenue``. Returns exit code."""
        defaults = self.config.get_scenario_defaults()
        locale = locale or defaults.locale

        amount = parse_amount(revenue)
        if amount <= 0:
            print(
                f"[error] {get_translations(locale)['calculation']['enter_revenue']} "
                f"(got {revenue!r}).",
                file=sys.stderr,
            )
            return 1

        report = plan_scenario(
            amount,
            monthly_price=defaults.monthly_price if monthly_price is None else parse_amount(monthly_price),
            monthly_living_cost=(
                defaults.monthly_living_cost if monthly_living_cost is None
                else parse_amount(monthly_living_cost)
            ),
            include_app_store_provision=(
                defaults.include_app_store_provision if include_app_store_provision is None
                else include_app_store_provision
            ),
            include_payment_service=(
                defaults.include_payment_service if include_payment_service is None
                else include_payment_service
            ),
        )
        logger.debug("Scenario: %s", report.options)

        if as_json:
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(report.result.summary(locale))
            self._print_planning(report, locale)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(json.dumps(report.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
            print(f"Report saved to {output}")

        return 0

    def _print_planning(self, report: ScenarioReport, locale: str) -> None:
        p = get_translations(locale)["planning"]
        W = 78

        if report.subscribers:
            print(f"  {p['subscribers_needed']:<50} {report.subscribers:>8,} {p['users']}")

        check = report.living_costs
        if check is None:
            return

        print(f"  {p['monthly_living_costs']:<50} {format_currency(check.monthly_living_cost, locale):>14}")
        print(f"  {p['monthly_net_income']:<50} {format_currency(check.monthly_net_income, locale):>14}")
        print("─" * W)
        if check.can_make_it:
            print(f"  {p['will_make_it']}")
            print(f"  {p['surplus'].format(amount=format_currency(check.difference, locale))}")
        else:
            print(f"  {p['wont_make_it']}")
            print(f"  {p['shortfall'].format(amount=format_currency(-check.difference, locale))}")
        print("=" * W)

    # ------------------------------------------------------------------
    # Income tax
    # ------------------------------------------------------------------

    def show_income_tax(self, income: str | float, locale: str | None = None) -> int:
        locale = locale or self.config.locale
        amount = parse_amount(income)
        tax = income_tax(amount)
        steps = get_translations(locale)["steps"]
        print(f"  {'zvE':<26} {format_currency(amount, locale):>14}")
        print(f"  {steps['income_tax']:<26} {format_currency(tax, locale):>14}")
        print(f"  {'Ø':<26} {format_percent(average_income_tax_rate(amount), locale):>14}")
        return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser(config: Config | None = None) -> argparse.ArgumentParser:
    config = config or cfg
    parser = argparse.ArgumentParser(
        description="saastax: rough German tax and contribution breakdown for SaaS revenue.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--version", action="store_true",
        help="Show package version and exit.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose output.",
    )
    parser.add_argument(
        "--locale", default=config.locale, choices=list(SUPPORTED_LOCALES),
        help="Display locale: de = EUR, en = USD.",
    )

    # -- Calculation ------------------------------------------------------
    calc_group = parser.add_argument_group("Calculation")
    calc_group.add_argument(
        "--revenue", default=None, metavar="AMOUNT",
        help="Yearly gross revenue, e.g. 70000 or '70000 €'.",
    )
    calc_group.add_argument(
        "--monthly-price", default=None, metavar="AMOUNT",
        help=f"Monthly subscription price (config default: {config.monthly_price}).",
    )
    calc_group.add_argument(
        "--living-cost", default=None, metavar="AMOUNT",
        help=f"Monthly living costs (config default: {config.monthly_living_cost}).",
    )
    calc_group.add_argument(
        "--app-store", action=argparse.BooleanOptionalAction, default=None,
        help="Deduct the 15 %% app store commission (default from config).",
    )
    calc_group.add_argument(
        "--payment-service", action=argparse.BooleanOptionalAction, default=None,
        help="Deduct the payment service fee (default from config).",
    )
    calc_group.add_argument(
        "--income-tax", default=None, metavar="INCOME",
        help="Only compute the income tax for this taxable income.",
    )

    # -- Output -----------------------------------------------------------
    out_group = parser.add_argument_group("Output")
    out_group.add_argument(
        "--json", action="store_true",
        help="Print the scenario as JSON instead of a table.",
    )
    out_group.add_argument(
        "--output", default=None, metavar="FILE",
        help="Also write the scenario JSON to this file.",
    )

    # -- Web UI -----------------------------------------------------------
    ui_group = parser.add_argument_group("Web UI")
    ui_group.add_argument(
        "--ui", action="store_true",
        help="Start the web UI server (requires: pip install saastax[ui]).",
    )
    ui_group.add_argument(
        "--host", default=config.ui_host, metavar="HOST",
        help="UI server bind address.",
    )
    ui_group.add_argument(
        "--port", default=config.ui_port, type=int, metavar="PORT",
        help="UI server port.",
    )
    ui_group.add_argument(
        "--no-browser", action="store_true",
        help="Do not open the browser when starting the UI.",
    )
    ui_group.add_argument(
        "--reload", action="store_true",
        help="Enable hot-reload (development mode).",
    )
    ui_group.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["debug", "info", "warning", "error"],
        metavar="LEVEL",
        help="Log level for the UI server (debug, info, warning, error).",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args   = parser.parse_args(argv)
    cli    = SaasTaxCLI()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)-8s %(name)s - %(message)s",
        )

    if args.version:
        cli.print_version()
        return 0

    # -- Income tax only --------------------------------------------------
    if args.income_tax is not None:
        return cli.show_income_tax(args.income_tax, locale=args.locale)

    # -- Scenario ---------------------------------------------------------
    if args.revenue is not None:
        return cli.calculate(
            revenue=args.revenue,
            locale=args.locale,
            monthly_price=args.monthly_price,
            monthly_living_cost=args.living_cost,
            include_app_store_provision=args.app_store,
            include_payment_service=args.payment_service,
            as_json=args.json,
            output=Path(args.output) if args.output else None,
        )

    # -- Web UI ----------------------------------------------------------
    if args.ui:
        from saastax.ui.server import launch
        launch(
            host=args.host,
            port=args.port,
            reload=args.reload,
            open_browser=not args.no_browser,
            log_level=args.log_level,
        )
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
