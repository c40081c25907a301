from __future__ import annotations
from typing import Sequence

from params import Params
from platforms import FeeSchedule, FeeTier


def tiered_fee(tiers: Sequence[FeeTier], value: float) -> float:
    """Sum of each tier's marginal rate applied to the slice of value inside it."""
    total = 0.0
    for tier in tiers:
        if value <= tier.start:
            break
        in_tier = min(value, tier.end) - tier.start
        total += in_tier * tier.rate
    return total


def platform_fee(schedule: FeeSchedule, portfolio_value: float, investment_type: str) -> float:
    """Annual platform (custody) fee on portfolio_value."""
    fee = 0.0

    if schedule.fee_type == "flat":
        fee = schedule.base_fee
    elif schedule.fee_type == "trading":
        fee = 0.0
    elif schedule.fee_type == "percentage":
        if schedule.base_fee > 0 and schedule.tiers:
            first = schedule.tiers[0]
            below_first = portfolio_value < first.start
            free_first = first.rate == 0 and portfolio_value <= first.end
            if below_first or free_first:
                # Minimum fee replaces the tiered charge
                fee = schedule.base_fee
            else:
                fee = tiered_fee(schedule.tiers, portfolio_value)
        else:
            fee = tiered_fee(schedule.tiers, portfolio_value)

    if schedule.fee_cap is not None and fee > schedule.fee_cap:
        if not schedule.cap_etfs_shares_only or investment_type in ("etfs", "shares"):
            fee = schedule.fee_cap

    return fee


def fee_per_trade(
    schedule: FeeSchedule, investment_type: str, mixed_etf_share: float = Params.mixed_etf_share
) -> float:
    if investment_type == "funds":
        return schedule.trading_fee_funds
    if investment_type == "etfs":
        return schedule.trading_fee_etfs
    if investment_type == "shares":
        return schedule.trading_fee_shares
    # mixed
    return (
        mixed_etf_share * schedule.trading_fee_etfs
        + (1 - mixed_etf_share) * schedule.trading_fee_funds
    )


def trading_cost(
    schedule: FeeSchedule,
    trades_per_year: int,
    investment_type: str,
    regular_trades: int = Params.regular_investing_trades,
    mixed_etf_share: float = Params.mixed_etf_share,
) -> float:
    """Annual dealing charges, with the regular-investing discount where offered."""
    per_trade = fee_per_trade(schedule, investment_type, mixed_etf_share)

    regular_fee = schedule.regular_investing_fee
    if regular_fee is not None and regular_fee >= 0 and trades_per_year >= regular_trades:
        ad_hoc = max(0, trades_per_year - regular_trades)
        return regular_trades * regular_fee + ad_hoc * per_trade

    return trades_per_year * per_trade


def fx_cost(
    schedule: FeeSchedule,
    annual_contributions: float,
    international_trading: bool,
    international_share: float = Params.international_share,
) -> float:
    """FX charge on the share of the year's contributions invested abroad."""
    if not international_trading or schedule.fx_fee_rate == 0:
        return 0.0
    return annual_contributions * international_share * schedule.fx_fee_rate
