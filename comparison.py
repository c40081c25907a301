"""
Cross-platform comparison: eligibility, ranking and recommendations.
"""

from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from params import Params
from plan import InvestmentPlan
from platforms import FeeSchedule, single_rate_platform
from simulation import PlatformResult, project_platform

logger = logging.getLogger(__name__)

SORT_FIELDS = (
    "name",
    "year1_fee",
    "total_fees_paid",
    "opportunity_cost",
    "total_fee_drag",
    "final_value",
)

PLATFORM_SUMMARY_COLUMNS = (
    "final_value",
    "final_value_no_fees",
    "total_fees_paid",
    "opportunity_cost",
    "total_fee_drag",
    "year1_fee",
    "avg_annual_fee",
    "effective_fee_rate",
)


@dataclass(frozen=True)
class Recommendations:
    cheapest: PlatformResult
    best_value: PlatformResult
    most_expensive: PlatformResult


@dataclass(frozen=True)
class ReferenceResults:
    current_fee: PlatformResult
    industry_average: PlatformResult


def is_eligible(platform: FeeSchedule, plan: InvestmentPlan) -> bool:
    """True if the platform offers at least one of the requested account types."""
    if not plan.account_types:
        return True
    return bool(plan.account_types & platform.accounts)


def compare_platforms(
    platforms: Iterable[FeeSchedule], plan: InvestmentPlan, p: Optional[Params] = None
) -> List[PlatformResult]:
    """
    Project every eligible platform and rank by total fee drag, cheapest first.

    Ties keep catalog order.
    """
    results = []
    for platform in platforms:
        if not is_eligible(platform, plan):
            logger.debug("Skipping %s: no account in %s", platform.id, sorted(plan.account_types))
            continue
        results.append(project_platform(platform, plan, p))

    # sorted() is stable
    return sorted(results, key=lambda r: r.summary.total_fee_drag)


def recommend(results: Sequence[PlatformResult]) -> Recommendations:
    """Derive cheapest, best-value and most-expensive from ranked results."""
    if not results:
        raise ValueError("no eligible platforms to recommend from")

    cheapest = results[0]
    best_value = next((r for r in results if not r.platform.has_restrictions), cheapest)
    return Recommendations(
        cheapest=cheapest,
        best_value=best_value,
        most_expensive=results[-1],
    )


def calculate_savings(cheapest: PlatformResult, most_expensive: PlatformResult) -> float:
    return most_expensive.summary.total_fee_drag - cheapest.summary.total_fee_drag


def reference_results(plan: InvestmentPlan, p: Optional[Params] = None) -> ReferenceResults:
    """Project the user's current fee rate and the industry average as synthetic platforms."""
    p = p or Params()
    current_rate = plan.current_fee_percentage
    if current_rate is None:
        current_rate = p.default_current_fee

    current = single_rate_platform(
        "current-fee-reference", "Current Fees", current_rate, plan.account_types
    )
    industry = single_rate_platform(
        "industry-avg-reference", "Industry Average", p.industry_average_fee, plan.account_types
    )
    return ReferenceResults(
        current_fee=project_platform(current, plan, p),
        industry_average=project_platform(industry, plan, p),
    )


def sort_results(
    results: Sequence[PlatformResult], field: str = "total_fee_drag", direction: str = "asc"
) -> List[PlatformResult]:
    """Order results for the comparison table. Unknown fields sort by fee drag."""
    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")
    if field not in SORT_FIELDS:
        field = "total_fee_drag"

    def key(r: PlatformResult):
        if field == "name":
            return r.platform.name.casefold()
        return getattr(r.summary, field)

    return sorted(results, key=key, reverse=(direction == "desc"))


def results_table(results: Sequence[PlatformResult]) -> pd.DataFrame:
    """One row per platform with its summary metrics."""
    rows = []
    for r in results:
        row = {"id": r.platform.id, "name": r.platform.name}
        row.update(asdict(r.summary))
        row["restricted"] = r.platform.has_restrictions
        rows.append(row)
    columns = ["id", "name", *PLATFORM_SUMMARY_COLUMNS, "restricted"]
    return pd.DataFrame(rows, columns=columns)


def yearly_table(result: PlatformResult) -> pd.DataFrame:
    """Year-by-year breakdown for one platform, indexed by year."""
    df = pd.DataFrame([asdict(r) for r in result.yearly])
    if df.empty:
        return df
    return df.set_index("year")

