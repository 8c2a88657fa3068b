#!/usr/bin/env python3
"""
Matched Savings Pension Projection - Main Entry Point

This script runs the complete projection workflow:
1. Load inputs from the command line or saved preferences
2. Project the account month by month until retirement
3. Generate charts as PNG files
4. Display the year-by-year ledger and the monthly pension

Usage: python main.py --age 30 --savings 500 --rate 2.5
"""

from __future__ import annotations
import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from params import Params
from preferences import PreferenceStore
from projection import ProjectionInput, ProjectionResult, project
from validation import validate_inputs
from visualizations import (
    ProjectionVisualizer,
    VisualizationData,
    create_projection_report,
    format_currency,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('projection_analysis.log'),
            logging.StreamHandler(sys.stdout)
        ]
    )


class ProjectionAnalyzer:
    """Runs one projection end to end: inputs, engine, charts, report"""

    def __init__(self, store: PreferenceStore, params: Optional[Params] = None) -> None:
        self.params = params or store.params
        self.store = store
        self.inputs: Optional[ProjectionInput] = None
        self.result: Optional[ProjectionResult] = None
        self.chart_files: List[str] = []

    def load_parameters(self, start_age=None, monthly_savings=None,
                        annual_return_rate=None) -> bool:
        """Merge explicit arguments over saved preferences and validate them"""
        try:
            saved = self.store.load()
            self.inputs = validate_inputs(
                saved.start_age if start_age is None else start_age,
                saved.monthly_savings if monthly_savings is None else monthly_savings,
                saved.annual_return_rate if annual_return_rate is None else annual_return_rate,
                self.params,
            )
            print("🔧 Inputs:")
            print(f"   📊 Start age: {self.inputs.start_age} years")
            print(f"   📊 Monthly savings: {format_currency(self.inputs.monthly_savings)}")
            print(f"   📊 Annual return rate: {self.inputs.annual_return_rate:.2f}%")
            return True

        except ValueError as e:
            print(f"❌ Invalid input: {e}")
            logger.error(f"Input validation failed: {e}")
            return False

    def save_preferences(self) -> bool:
        assert self.inputs is not None
        try:
            self.store.save(self.inputs)
            return True
        except OSError as e:
            print(f"⚠️  Could not save preferences: {e}")
            logger.error(f"Saving preferences to {self.store.path} failed: {e}")
            return False

    def run_projection(self) -> bool:
        try:
            assert self.inputs is not None
            self.result = project(
                self.inputs.start_age,
                self.inputs.monthly_savings,
                self.inputs.annual_return_rate,
                params=self.params,
            )
            return True

        except Exception as e:
            print(f"❌ Projection failed: {e}")
            logger.error(f"Projection failed: {e}")
            return False

    def generate_visualizations(self, output_dir: str = ".") -> bool:
        try:
            assert self.inputs is not None and self.result is not None
            if not self.result.details_by_year:
                print("ℹ️  Nothing to chart: no years before retirement")
                return True

            print("\n📊 Creating charts...")
            data = VisualizationData(result=self.result, inputs=self.inputs)
            self.chart_files = create_projection_report(data, self.params, output_dir)
            for path in self.chart_files:
                print(f"   ✅ Saved {path}")
            return True

        except Exception as e:
            print(f"❌ Chart generation failed: {e}")
            logger.error(f"Visualization generation failed: {e}")
            return False

    def display_analysis(self) -> None:
        assert self.inputs is not None and self.result is not None
        res = self.result

        print("\n" + "=" * 80)
        print("📋 PENSION PROJECTION")
        print("=" * 80)
        print(f"🕐 Created: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        self._display_ledger()

        print("\n💰 SUMMARY:")
        print(f"   Member savings:        {format_currency(res.total_member_savings):>20}")
        print(f"   Government match:      {format_currency(res.total_govt_contribution):>20}")
        print(f"   Interest:              {format_currency(res.total_interest):>20}")
        print(f"   Balance at {self.params.retirement_age}:         "
              f"{format_currency(res.total_balance_at_retirement):>20}")
        print(f"   Monthly pension ({self.params.payout_years}y):  "
              f"{format_currency(res.monthly_pension):>20}")

        notice = ProjectionVisualizer(self.params).pension_notice(res)
        if notice:
            print(f"\n   ⚠️  {notice}")
        print("=" * 80)

    def _display_ledger(self) -> None:
        assert self.result is not None
        if not self.result.details_by_year:
            print("\n   No years to simulate before the retirement age.")
            return

        print(f"\n{'Age':<5} {'Member savings':>16} {'Govt match':>16} {'Interest (yr)':>16} {'Balance':>18}")
        print("-" * 75)
        for entry in self.result.details_by_year:
            print(f"{entry.age:<5} {entry.member_savings_accumulated:>16,.2f} "
                  f"{entry.govt_contribution_accumulated:>16,.2f} "
                  f"{entry.interest_earned_year:>16,.2f} {entry.total_balance:>18,.2f}")

    def run_complete_analysis(self, start_age=None, monthly_savings=None,
                              annual_return_rate=None, output_dir: str = ".",
                              charts: bool = True, save: bool = True) -> bool:
        if not self.load_parameters(start_age, monthly_savings, annual_return_rate):
            return False
        if save:
            self.save_preferences()
        if not self.run_projection():
            return False
        if charts and not self.generate_visualizations(output_dir):
            return False
        self.display_analysis()
        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Project a matched savings account and the resulting monthly pension."
    )
    parser.add_argument("--age", type=int, help="start age (15-59)")
    parser.add_argument("--savings", type=float, help="monthly savings amount")
    parser.add_argument("--rate", type=float, help="annual return rate in percent (default 2.5)")
    parser.add_argument("--output-dir", default=".", help="directory for PNG charts")
    parser.add_argument("--no-charts", action="store_true", help="skip chart generation")
    parser.add_argument("--no-save", action="store_true", help="do not remember the inputs")
    parser.add_argument("--reset", action="store_true", help="forget saved inputs first")
    parser.add_argument("--preferences", help="path of the preferences file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point, returns the process exit code"""
    args = build_parser().parse_args(argv)
    configure_logging()

    store = PreferenceStore(args.preferences)
    if args.reset:
        store.clear()

    try:
        analyzer = ProjectionAnalyzer(store)
        ok = analyzer.run_complete_analysis(
            start_age=args.age,
            monthly_savings=args.savings,
            annual_return_rate=args.rate,
            output_dir=args.output_dir,
            charts=not args.no_charts,
            save=not args.no_save,
        )
    except Exception as e:
        print(f"\n❌ CRITICAL ERROR: {e}")
        logger.error(f"Complete analysis failed: {e}")
        return 1

    if analyzer.inputs is None:
        return 2
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
