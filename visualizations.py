"""
Charts for a single savings projection.
Read-only consumers of ProjectionResult: nothing here changes the numbers.
"""

from __future__ import annotations
import logging
import math
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from params import Params
from projection import ProjectionInput, ProjectionResult, project

logger = logging.getLogger(__name__)

COLORS = {
    'member': '#1f77b4',     # Blue - member deposits
    'govt': '#ff7f0e',       # Orange - government match
    'interest': '#2ca02c',   # Green - interest
    'total': '#17becf',      # Cyan - total balance
    'benchmark': '#bcbd22',  # Olive - minimum pension line
    'neutral': '#7f7f7f'     # Gray - reference
}

plt.rcParams.update({
    'font.size': 10,
    'font.family': 'sans-serif',
    'axes.labelsize': 11,
    'axes.titlesize': 12,
    'xtick.labelsize': 9,
    'ytick.labelsize': 9,
    'legend.fontsize': 9,
    'figure.titlesize': 14,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'axes.axisbelow': True
})


def format_currency(amount: float, suffix: str = "฿") -> str:
    if not math.isfinite(amount):
        return "N/A"
    return f"{amount:,.2f} {suffix}"


@dataclass
class VisualizationData:
    """Container for one projection and the inputs that produced it"""
    result: ProjectionResult
    inputs: ProjectionInput
    label: str = "Projection"


class ProjectionVisualizer:
    """Builds matplotlib figures for a projection"""

    def __init__(self, params: Optional[Params] = None) -> None:
        self.params = params or Params()
        self.fig_size = (12, 6)

    def _validate_ledger(self, data: VisualizationData, method_name: str) -> None:
        if not data.result.details_by_year:
            raise ValueError(f"{method_name}: projection has no simulated years")

    def _short_currency(self, amount: float) -> str:
        if abs(amount) >= 1_000_000:
            return f"{amount/1_000_000:.1f}M"
        elif abs(amount) >= 1_000:
            return f"{amount/1_000:.0f}K"
        return f"{amount:,.0f}"

    def pension_notice(self, result: ProjectionResult) -> Optional[str]:
        """Notice shown when the computed pension is below the guaranteed minimum."""
        minimum = self.params.minimum_guaranteed_pension
        if 0 < result.monthly_pension < minimum:
            return (
                f"Computed pension {format_currency(result.monthly_pension)} is below "
                f"the guaranteed minimum; {format_currency(minimum)} per month is "
                f"paid until the balance is depleted."
            )
        return None

    def create_balance_growth_chart(self, data: VisualizationData) -> plt.Figure:
        """Stacked composition of the balance (deposits, match, interest) by age."""
        self._validate_ledger(data, "create_balance_growth_chart")
        cols = data.result.to_arrays()

        fig, ax = plt.subplots(figsize=self.fig_size)
        ax.stackplot(cols['age'],
                     cols['member_savings'],
                     cols['govt_contribution'],
                     cols['cumulative_interest'],
                     labels=['Member savings', 'Government match', 'Interest'],
                     colors=[COLORS['member'], COLORS['govt'], COLORS['interest']],
                     alpha=0.85)
        ax.plot(cols['age'], cols['total_balance'], color='black', linewidth=2,
                label='Total balance', alpha=0.8)

        ax.set_xlabel("Age (years)")
        ax.set_ylabel("Balance at year end")
        ax.set_title(f"{data.label}: balance growth until {self.params.retirement_age}",
                     fontweight='bold')
        ax.legend(loc='upper left')
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: self._short_currency(x)))

        plt.tight_layout()
        return fig

    def create_annual_interest_chart(self, data: VisualizationData) -> plt.Figure:
        self._validate_ledger(data, "create_annual_interest_chart")
        cols = data.result.to_arrays()

        fig, ax = plt.subplots(figsize=self.fig_size)
        ax.bar(cols['age'], cols['interest_earned'], color=COLORS['interest'],
               alpha=0.8, edgecolor='black', linewidth=0.5)
        ax.set_xlabel("Age (years)")
        ax.set_ylabel("Interest credited in year")
        ax.set_title(f"{data.label}: interest earned per year "
                     f"at {data.inputs.annual_return_rate:.2f}%", fontweight='bold')
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: self._short_currency(x)))
        ax.grid(axis='y', alpha=0.3)

        plt.tight_layout()
        return fig

    def create_contribution_breakdown_chart(self, data: VisualizationData) -> plt.Figure:
        """Share of member savings, government match and interest in the final balance."""
        self._validate_ledger(data, "create_contribution_breakdown_chart")
        res = data.result

        # Negative interest (loss scenario) cannot be drawn as a wedge
        parts = [
            ('Member savings', res.total_member_savings, COLORS['member']),
            ('Government match', res.total_govt_contribution, COLORS['govt']),
            ('Interest', res.total_interest, COLORS['interest']),
        ]
        parts = [(name, value, color) for name, value, color in parts if value > 0]

        fig, ax = plt.subplots(figsize=(8, 8))
        if parts:
            ax.pie([v for _, v, _ in parts],
                   labels=[f"{name}\n{format_currency(value)}" for name, value, _ in parts],
                   colors=[c for _, _, c in parts],
                   autopct='%1.1f%%', startangle=90,
                   wedgeprops={'edgecolor': 'white', 'linewidth': 1.5})
        else:
            ax.text(0.5, 0.5, 'Nothing accumulated', ha='center', va='center',
                    transform=ax.transAxes)
        ax.set_title(f"{data.label}: balance at {self.params.retirement_age} = "
                     f"{format_currency(res.total_balance_at_retirement)}", fontweight='bold')
        ax.axis('equal')

        plt.tight_layout()
        return fig

    def create_rate_sensitivity_chart(self, inputs: ProjectionInput,
                                      rates: Sequence[float]) -> plt.Figure:
        """Monthly pension for the same contributions under different return rates."""
        if not rates:
            raise ValueError("create_rate_sensitivity_chart: rates cannot be empty")

        pensions = np.array([
            project(inputs.start_age, inputs.monthly_savings, r, params=self.params).monthly_pension
            for r in rates
        ])

        fig, ax = plt.subplots(figsize=self.fig_size)
        ax.plot(rates, pensions, marker='o', color=COLORS['total'], linewidth=2.5)
        ax.axhline(y=self.params.minimum_guaranteed_pension, color=COLORS['benchmark'],
                   linestyle='--', linewidth=2, alpha=0.7, label='Guaranteed minimum')
        ax.axvline(x=inputs.annual_return_rate, color=COLORS['neutral'], linestyle=':',
                   linewidth=1.5, label='Selected rate')

        ax.set_xlabel("Annual return rate (%)")
        ax.set_ylabel("Monthly pension")
        ax.set_title(f"Monthly pension vs. return rate (start age {inputs.start_age}, "
                     f"{format_currency(inputs.monthly_savings)}/month)", fontweight='bold')
        ax.legend(loc='upper left')

        plt.tight_layout()
        return fig


def create_projection_report(data: VisualizationData, params: Params,
                             output_dir: str = ".") -> List[str]:
    """
    Save every chart for ``data`` as PNG files.

    Args:
        data: Projection to visualise
        params: Parameters object
        output_dir: Directory for the PNG files, created if missing

    Returns:
        list of written file paths
    """
    visualizer = ProjectionVisualizer(params)
    os.makedirs(output_dir, exist_ok=True)

    rate = data.inputs.annual_return_rate
    rates = sorted({0.0, 1.0, 2.0, 2.5, 3.0, 4.0, 5.0, rate})

    charts = [
        ("balance_growth.png", lambda: visualizer.create_balance_growth_chart(data)),
        ("annual_interest.png", lambda: visualizer.create_annual_interest_chart(data)),
        ("contribution_breakdown.png", lambda: visualizer.create_contribution_breakdown_chart(data)),
        ("rate_sensitivity.png", lambda: visualizer.create_rate_sensitivity_chart(data.inputs, rates)),
    ]

    written = []
    for filename, build in charts:
        path = os.path.join(output_dir, filename)
        fig = build()
        try:
            fig.savefig(path, dpi=150, bbox_inches='tight', facecolor='white')
        finally:
            plt.close(fig)
        logger.info(f"Saved chart {path}")
        written.append(path)
    return written
