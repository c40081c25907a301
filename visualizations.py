"""
Charts for the platform fee comparison.
Balance trajectories, final-value comparison and a summary metrics table.
"""

from __future__ import annotations
import matplotlib.pyplot as plt
import numpy as np
from typing import List, Optional, Sequence, Tuple

from formatting import format_currency, format_percent
from params import Params
from comparison import ReferenceResults
from simulation import PlatformResult

COLORS = {
    'baseline': '#10b981',   # Green - no fees
    'current': '#f59e0b',    # Amber - user's current fee
    'industry': '#94a3b8',   # Slate - industry average
    'lowest': '#3b82f6',     # Blue - cheapest platform
    'highest': '#ef4444',    # Red - most expensive platform
    'other': '#8b5cf6',      # Purple - any other platform
}

plt.rcParams.update({
    'font.size': 10,
    'font.family': 'sans-serif',
    'axes.labelsize': 11,
    'axes.titlesize': 12,
    'legend.fontsize': 9,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'axes.axisbelow': True
})


class FeeDragVisualizer:
    """Matplotlib figures for ranked PlatformResults"""

    def __init__(self, params: Params) -> None:
        self.params = params
        self.fig_size: Tuple[int, int] = (12, 7)

    def format_currency(self, amount: float) -> str:
        return format_currency(amount, self.params.currency_symbol)

    def drag_label(self, drag: float) -> str:
        """Fee drag as a loss, e.g. -£1,234; nothing to lose shows as £0."""
        label = self.format_currency(drag)
        return label if drag < 0.5 else f"-{label}"

    def _validate_results(self, results: Sequence[PlatformResult], method_name: str) -> None:
        if not results:
            raise ValueError(f"{method_name}: results cannot be empty")

    def _currency_axis(self, axis) -> None:
        axis.set_major_formatter(plt.FuncFormatter(lambda x, p: self.format_currency(x)))

    def create_balance_chart(
        self,
        results: Sequence[PlatformResult],
        references: Optional[ReferenceResults] = None,
        show: Optional[Sequence[str]] = None,
    ) -> plt.Figure:
        """
        Fee-free balance against each shown platform's balance, year by year.

        `show` holds platform ids; by default the cheapest and the most
        expensive platform are drawn.
        """
        self._validate_results(results, "create_balance_chart")

        fig, ax = plt.subplots(figsize=self.fig_size)

        years, _, no_fees = results[0].balances()
        ax.plot(years, no_fees, color=COLORS['baseline'], linewidth=2.5, label="No fees")

        if show is None:
            shown = [results[0]] if len(results) == 1 else [results[0], results[-1]]
        else:
            shown = [r for r in results if r.platform.id in set(show)]

        for r in shown:
            if r is results[0]:
                color = COLORS['lowest']
            elif r is results[-1]:
                color = COLORS['highest']
            else:
                color = COLORS['other']
            years, with_fees, _ = r.balances()
            ax.plot(years, with_fees, color=color, linewidth=2.0, label=r.platform.name)

        if references is not None:
            for ref, color in ((references.current_fee, COLORS['current']),
                               (references.industry_average, COLORS['industry'])):
                years, with_fees, _ = ref.balances()
                ax.plot(years, with_fees, color=color, linewidth=1.5, linestyle='--',
                        label=ref.platform.name)

        ax.set_xlabel("Year")
        ax.set_ylabel("Portfolio value")
        ax.set_title("Projected portfolio value with and without fees", fontweight='bold', pad=20)
        ax.legend(loc='upper left')
        self._currency_axis(ax.yaxis)

        plt.tight_layout()
        return fig

    def create_final_value_chart(
        self,
        results: Sequence[PlatformResult],
        references: Optional[ReferenceResults] = None,
    ) -> plt.Figure:
        """Final value for cheapest, reference and most expensive, labelled with fee drag."""
        self._validate_results(results, "create_final_value_chart")

        bars_data: List[Tuple[str, PlatformResult, str]] = [("Cheapest", results[0], COLORS['lowest'])]
        if references is not None:
            bars_data.append(("Current", references.current_fee, COLORS['current']))
            bars_data.append(("Industry avg", references.industry_average, COLORS['industry']))
        bars_data.append(("Most expensive", results[-1], COLORS['highest']))

        fig, ax = plt.subplots(figsize=(10, 6))

        labels = [label for label, _, _ in bars_data]
        values = np.array([r.summary.final_value for _, r, _ in bars_data])
        colors = [color for _, _, color in bars_data]

        bars = ax.bar(labels, values, color=colors, alpha=0.85, edgecolor='black', linewidth=1.0)

        for bar, (_, r, _) in zip(bars, bars_data):
            ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                    self.drag_label(r.summary.total_fee_drag),
                    ha='center', va='bottom', fontsize=10, fontweight='bold')

        ax.axhline(y=results[0].summary.final_value_no_fees, color=COLORS['baseline'],
                   linestyle='--', linewidth=2, label="No fees")

        ax.set_ylabel("Final portfolio value")
        ax.set_title("Final value after fees", fontweight='bold', pad=20)
        ax.legend(loc='lower right')
        self._currency_axis(ax.yaxis)

        plt.tight_layout()
        return fig

    def create_metrics_table_chart(self, results: Sequence[PlatformResult]) -> plt.Figure:
        """Table figure of the summary metrics, one row per platform."""
        self._validate_results(results, "create_metrics_table_chart")

        fig, ax = plt.subplots(figsize=(14, 2 + 0.5 * len(results)))
        ax.axis('off')

        headers = ['Platform', 'Year 1 fee', 'Fees paid', 'Lost growth',
                   'Fee drag', 'Final value', 'Effective rate']
        table_data = [
            [
                r.platform.name,
                self.format_currency(r.summary.year1_fee),
                self.format_currency(r.summary.total_fees_paid),
                self.format_currency(r.summary.opportunity_cost),
                self.format_currency(r.summary.total_fee_drag),
                self.format_currency(r.summary.final_value),
                format_percent(r.summary.effective_fee_rate, self.params.percent_decimals),
            ]
            for r in results
        ]

        table = ax.table(cellText=table_data, colLabels=headers,
                         cellLoc='center', loc='center')
        table.auto_set_font_size(False)
        table.set_fontsize(10)
        table.scale(1, 1.8)

        for i in range(len(headers)):
            cell = table[(0, i)]
            cell.set_facecolor(COLORS['lowest'])
            cell.set_text_props(weight='bold', color='white')

        for i in range(len(table_data)):
            row_color = '#f0f0f0' if i % 2 == 0 else 'white'
            for j in range(len(headers)):
                table[(i + 1, j)].set_facecolor(row_color)

        ax.set_title("Platform comparison", fontsize=14, fontweight='bold', pad=20)
        return fig
