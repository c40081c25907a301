from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from params import Params


@dataclass(frozen=True)
class InvestmentPlan:
    """User investment plan. Immutable for the duration of a comparison run."""

    starting_portfolio: float
    monthly_contribution: float
    expected_return: float  # % per year, e.g. 7 for 7%
    years: int
    trades_per_year: int
    investment_type: str
    international_trading: bool = False
    account_types: FrozenSet[str] = field(default_factory=frozenset)
    current_fee_percentage: Optional[float] = None  # display/reference only

    def __post_init__(self) -> None:
        # Accept any iterable of account types
        object.__setattr__(self, "account_types", frozenset(self.account_types))
        self.validate()

    @property
    def return_rate(self) -> float:
        return self.expected_return / 100

    @property
    def annual_contributions(self) -> float:
        return self.monthly_contribution * 12

    def validate(self) -> None:
        if self.starting_portfolio < 0:
            raise ValueError(f"starting_portfolio must be >= 0, got {self.starting_portfolio}")
        if self.monthly_contribution < 0:
            raise ValueError(f"monthly_contribution must be >= 0, got {self.monthly_contribution}")
        if int(self.years) != self.years or self.years < 1:
            raise ValueError(f"years must be a whole number >= 1, got {self.years}")
        if self.trades_per_year not in Params.trade_cadences:
            raise ValueError(
                f"trades_per_year must be one of {Params.trade_cadences}, got {self.trades_per_year}"
            )
        if self.investment_type not in Params.investment_types:
            raise ValueError(
                f"investment_type must be one of {Params.investment_types}, got {self.investment_type!r}"
            )
        unknown = self.account_types - set(Params.account_types)
        if unknown:
            raise ValueError(f"unknown account types: {sorted(unknown)}")
        if self.current_fee_percentage is not None and self.current_fee_percentage < 0:
            raise ValueError(
                f"current_fee_percentage must be >= 0, got {self.current_fee_percentage}"
            )

    @classmethod
    def from_params(cls, p: Params) -> "InvestmentPlan":
        """Build the default plan from a Params instance."""
        return cls(
            starting_portfolio=p.starting_portfolio,
            monthly_contribution=p.monthly_contribution,
            expected_return=p.expected_return,
            years=p.years,
            trades_per_year=p.trades_per_year,
            investment_type=p.investment_type,
            international_trading=p.international_trading,
            account_types=frozenset(p.required_accounts),
            current_fee_percentage=p.current_fee_percentage,
        )
