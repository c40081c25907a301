from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from fees import fx_cost, platform_fee, trading_cost
from params import Params
from plan import InvestmentPlan
from platforms import FeeSchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Balances:
    """Running state of the two parallel portfolios for one platform."""

    with_fees: float = 0.0
    no_fees: float = 0.0
    cumulative_fees: float = 0.0


@dataclass(frozen=True)
class YearlyRecord:
    year: int
    start_balance: float
    contributions: float
    platform_fee: float
    trading_fees: float
    fx_fees: float
    total_fees: float
    growth: float
    end_balance: float
    end_balance_no_fees: float
    cumulative_fees: float
    cumulative_opportunity_cost: float


@dataclass(frozen=True)
class PlatformSummary:
    final_value: float
    final_value_no_fees: float
    total_fees_paid: float
    opportunity_cost: float
    total_fee_drag: float
    year1_fee: float
    avg_annual_fee: float
    effective_fee_rate: float  # % of the fee-free final value


@dataclass(frozen=True)
class PlatformResult:
    platform: FeeSchedule
    yearly: Tuple[YearlyRecord, ...]
    summary: PlatformSummary

    def balances(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(years, end balance with fees, end balance without fees) as arrays."""
        years = np.array([r.year for r in self.yearly])
        with_fees = np.array([r.end_balance for r in self.yearly])
        no_fees = np.array([r.end_balance_no_fees for r in self.yearly])
        return years, with_fees, no_fees


def simulate_year(
    balances: Balances,
    year: int,
    platform: FeeSchedule,
    plan: InvestmentPlan,
    p: Optional[Params] = None,
) -> Tuple[YearlyRecord, Balances]:
    """
    Advance both balances by one year.

    Contributions land first, fees are charged on the post-contribution
    balance, then both balances grow. The fee-free balance never pays fees.
    """
    p = p or Params()
    contributions = plan.annual_contributions
    rate = plan.return_rate

    with_fees = balances.with_fees + contributions
    no_fees = balances.no_fees + contributions

    p_fee = platform_fee(platform, with_fees, plan.investment_type)
    t_fee = trading_cost(
        platform,
        plan.trades_per_year,
        plan.investment_type,
        regular_trades=p.regular_investing_trades,
        mixed_etf_share=p.mixed_etf_share,
    )
    f_fee = fx_cost(
        platform,
        contributions,
        plan.international_trading,
        international_share=p.international_share,
    )
    total_fees = p_fee + t_fee + f_fee

    with_fees -= total_fees
    cumulative_fees = balances.cumulative_fees + total_fees

    growth = with_fees * rate
    with_fees += growth
    no_fees += no_fees * rate

    record = YearlyRecord(
        year=year,
        start_balance=balances.with_fees,
        contributions=contributions,
        platform_fee=p_fee,
        trading_fees=t_fee,
        fx_fees=f_fee,
        total_fees=total_fees,
        growth=growth,
        end_balance=with_fees,
        end_balance_no_fees=no_fees,
        cumulative_fees=cumulative_fees,
        cumulative_opportunity_cost=(no_fees - with_fees) - cumulative_fees,
    )
    return record, replace(
        balances, with_fees=with_fees, no_fees=no_fees, cumulative_fees=cumulative_fees
    )


def summarize(yearly: Tuple[YearlyRecord, ...], years: int) -> PlatformSummary:
    last = yearly[-1]
    final_value = last.end_balance
    final_value_no_fees = last.end_balance_no_fees
    total_fees_paid = last.cumulative_fees
    total_fee_drag = final_value_no_fees - final_value

    # Zero only for an all-zero plan; report 0% instead of dividing by zero
    if final_value_no_fees != 0:
        effective_fee_rate = total_fee_drag / final_value_no_fees * 100
    else:
        effective_fee_rate = 0.0

    return PlatformSummary(
        final_value=final_value,
        final_value_no_fees=final_value_no_fees,
        total_fees_paid=total_fees_paid,
        opportunity_cost=total_fee_drag - total_fees_paid,
        total_fee_drag=total_fee_drag,
        year1_fee=yearly[0].total_fees,
        avg_annual_fee=total_fees_paid / years,
        effective_fee_rate=effective_fee_rate,
    )


def project_platform(
    platform: FeeSchedule, plan: InvestmentPlan, p: Optional[Params] = None
) -> PlatformResult:
    """Run the yearly simulation over the whole horizon for one platform."""
    p = p or Params()
    balances = Balances(with_fees=plan.starting_portfolio, no_fees=plan.starting_portfolio)
    records = []
    for year in range(1, plan.years + 1):
        record, balances = simulate_year(balances, year, platform, plan, p)
        records.append(record)

    yearly = tuple(records)
    summary = summarize(yearly, plan.years)
    logger.debug(
        "Projected %s over %d years: fee drag %.2f",
        platform.id, plan.years, summary.total_fee_drag,
    )
    return PlatformResult(platform=platform, yearly=yearly, summary=summary)
