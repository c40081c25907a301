#!/usr/bin/env python3
"""
Platform Fee Drag Analysis - Main Entry Point

This script runs the full platform comparison workflow:
1. Load the investment plan from params.py
2. Load the platform catalog (platforms.json or the path given as argument)
3. Project every eligible platform with and without fees
4. Display the ranking and recommendations
5. Save charts as PNG files

Usage: python main.py [catalog.json]
"""

from __future__ import annotations
import os
import sys
import logging
from datetime import datetime
from typing import List, Optional, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from comparison import (
    Recommendations,
    ReferenceResults,
    calculate_savings,
    compare_platforms,
    recommend,
    reference_results,
    results_table,
)
from formatting import format_currency, format_percent
from params import Params
from plan import InvestmentPlan
from platforms import FeeSchedule, load_catalog
from simulation import PlatformResult
from visualizations import FeeDragVisualizer

logger = logging.getLogger(__name__)

CATALOG_DIRS = (
    os.path.dirname(os.path.abspath(__file__)),
    os.path.join(sys.prefix, "share", "platform-fee-drag"),
)


def default_catalog_path(name: str) -> str:
    """Find the bundled catalog when it is not in the working directory."""
    if os.path.isabs(name) or os.path.exists(name):
        return name
    for directory in CATALOG_DIRS:
        candidate = os.path.join(directory, name)
        if os.path.exists(candidate):
            return candidate
    return name


def configure_logging(log_file: str) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


class FeeDragAnalyzer:
    """Runs the platform comparison and reports the results"""

    def __init__(self, params: Optional[Params] = None, catalog_path: Optional[str] = None) -> None:
        self.params = params or Params()
        self.catalog_path = catalog_path or default_catalog_path(self.params.catalog_path)
        self.plan: Optional[InvestmentPlan] = None
        self.platforms: Tuple[FeeSchedule, ...] = ()
        self.results: List[PlatformResult] = []
        self.references: Optional[ReferenceResults] = None
        self.recommendations: Optional[Recommendations] = None

    def load_plan(self) -> bool:
        """Build and validate the investment plan from params.py"""
        try:
            print("🔧 Loading investment plan from params.py...")
            self.plan = InvestmentPlan.from_params(self.params)

            print(f"   📊 Starting portfolio: {format_currency(self.plan.starting_portfolio)}")
            print(f"   📊 Monthly contribution: {format_currency(self.plan.monthly_contribution)}")
            print(f"   📊 Expected return: {format_percent(self.plan.expected_return, 1)}")
            print(f"   📊 Horizon: {self.plan.years} years")
            print(f"   📊 Trades per year: {self.plan.trades_per_year} ({self.plan.investment_type})")
            print(f"   📊 Accounts: {', '.join(sorted(self.plan.account_types)) or 'any'}")
            return True

        except ValueError as e:
            print(f"❌ Invalid investment plan: {e}")
            logger.error(f"Plan validation failed: {e}")
            return False

    def load_platforms(self) -> bool:
        """Load the platform catalog"""
        try:
            print(f"\n📂 Loading platform catalog from {self.catalog_path}...")
            self.platforms = load_catalog(self.catalog_path)
            print(f"   ✅ {len(self.platforms)} platforms loaded")
            return True

        except (OSError, ValueError) as e:
            print(f"❌ Could not load platform catalog: {e}")
            logger.error(f"Catalog loading failed: {e}")
            return False

    def run_comparison(self) -> bool:
        """Project every eligible platform and derive recommendations"""
        assert self.plan is not None
        print("\n📈 Projecting platforms...")

        self.results = compare_platforms(self.platforms, self.plan, self.params)
        skipped = len(self.platforms) - len(self.results)
        if skipped:
            print(f"   ⏭️  {skipped} platform(s) skipped: no matching account type")

        if not self.results:
            print("❌ No platform supports the requested account types")
            logger.error("No eligible platforms for accounts %s", sorted(self.plan.account_types))
            return False

        self.references = reference_results(self.plan, self.params)
        self.recommendations = recommend(self.results)
        print(f"   ✅ {len(self.results)} platforms compared")
        return True

    def display_results(self) -> None:
        """Print the ranking table and recommendations"""
        assert self.plan is not None and self.recommendations is not None
        print("\n" + "=" * 80)
        print("📋 LIFETIME FEE IMPACT")
        print("=" * 80)
        print(f"🕐 Generated: {datetime.now().strftime('%d/%m/%Y %H:%M:%S')}")

        table = results_table(self.results)
        view = table[["name", "year1_fee", "total_fees_paid", "opportunity_cost",
                      "total_fee_drag", "final_value"]].copy()
        for column in view.columns[1:]:
            view[column] = view[column].map(format_currency)
        view["effective_fee_rate"] = table["effective_fee_rate"].map(format_percent)
        print()
        print(view.to_string(index=False))

        rec = self.recommendations
        savings = calculate_savings(rec.cheapest, rec.most_expensive)

        print("\n💡 RECOMMENDATIONS:")
        print(f"   🏆 Cheapest: {rec.cheapest.platform.name} "
              f"(fee drag {format_currency(rec.cheapest.summary.total_fee_drag)})")
        print(f"   💎 Best value: {rec.best_value.platform.name}")
        print(f"   🔴 Most expensive: {rec.most_expensive.platform.name} "
              f"(fee drag {format_currency(rec.most_expensive.summary.total_fee_drag)})")
        print(f"   💰 Max potential savings: {format_currency(savings)}")

        if self.references is not None:
            current = self.references.current_fee.summary
            industry = self.references.industry_average.summary
            print("\n📏 BENCHMARKS:")
            print(f"   Current fees: final value {format_currency(current.final_value)}, "
                  f"fee drag {format_currency(current.total_fee_drag)}")
            print(f"   Industry average: final value {format_currency(industry.final_value)}, "
                  f"fee drag {format_currency(industry.total_fee_drag)}")

        shown = [rec.cheapest] if rec.best_value is rec.cheapest else [rec.cheapest, rec.best_value]
        for r in shown:
            if r.platform.has_restrictions:
                print(f"\n   ⚠️  {r.platform.name}: {r.platform.restrictions}")

        print(f"\n   {rec.cheapest.platform.risk_warning}")
        print("   Does not include fund charges, stamp duty or dealing spreads.")
        print("=" * 80)

    def generate_visualizations(self) -> bool:
        """Save all charts as PNG files"""
        print("\n📊 Creating charts...")
        visualizer = FeeDragVisualizer(self.params)

        charts = [
            ("Balance trajectories", "fee_drag_balances.png",
             lambda: visualizer.create_balance_chart(self.results, self.references)),
            ("Final values", "fee_drag_final_values.png",
             lambda: visualizer.create_final_value_chart(self.results, self.references)),
            ("Comparison table", "fee_drag_table.png",
             lambda: visualizer.create_metrics_table_chart(self.results)),
        ]

        ok = True
        for chart_name, filename, chart_function in charts:
            try:
                fig = chart_function()
                fig.savefig(filename, dpi=150, bbox_inches='tight', facecolor='white')
                plt.close(fig)
                print(f"   ✅ {chart_name} saved as {filename}")
            except (OSError, ValueError) as e:
                print(f"   ❌ Failed to create {chart_name}: {e}")
                logger.error(f"Chart generation failed for {chart_name}: {e}")
                ok = False
        return ok

    def run_complete_analysis(self) -> bool:
        print("🚀 PLATFORM FEE DRAG ANALYSIS")
        print("=" * 60)

        if not self.load_plan():
            return False
        if not self.load_platforms():
            return False
        if not self.run_comparison():
            return False

        self.display_results()
        return self.generate_visualizations()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    params = Params()
    configure_logging(params.log_file)

    analyzer = FeeDragAnalyzer(params, catalog_path=argv[0] if argv else None)
    try:
        success = analyzer.run_complete_analysis()
    except KeyboardInterrupt:
        print("\n\n⏹️  Analysis cancelled.")
        return 1
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
