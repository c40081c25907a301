"""
Platform catalog: fee schedule records and the JSON loader for them.
"""

from __future__ import annotations
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

FEE_TYPES = ("flat", "percentage", "trading")

DEFAULT_RISK_WARNING = "Capital at risk. The value of investments can fall as well as rise."


@dataclass(frozen=True)
class FeeTier:
    """A contiguous portfolio-value band charged at a marginal rate."""

    start: float
    end: float  # math.inf for an unbounded top tier
    rate: float  # decimal, 0.0025 = 0.25%


@dataclass(frozen=True)
class FeeSchedule:
    """A brokerage platform and its published fee structure."""

    id: str
    name: str
    fee_type: str
    base_fee: float = 0.0
    tiers: Tuple[FeeTier, ...] = ()
    fee_cap: Optional[float] = None
    cap_etfs_shares_only: bool = False
    trading_fee_funds: float = 0.0
    trading_fee_etfs: float = 0.0
    trading_fee_shares: float = 0.0
    regular_investing_fee: Optional[float] = None
    fx_fee_rate: float = 0.0
    accounts: FrozenSet[str] = field(default_factory=frozenset)
    restrictions: str = ""
    fee_notes: str = ""
    fx_fee_notes: str = ""
    good_for: str = ""
    risk_warning: str = DEFAULT_RISK_WARNING
    entry_fee: float = 0.0
    exit_fee: float = 0.0

    @property
    def has_restrictions(self) -> bool:
        return bool(self.restrictions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeeSchedule":
        """Parse one catalog entry. Raises ValueError on malformed data."""
        name = data.get("name", data.get("id", "<unnamed>"))
        for key in ("id", "name", "fee_type"):
            if key not in data:
                raise ValueError(f"platform {name!r}: missing required field {key!r}")

        fee_type = data["fee_type"]
        if fee_type not in FEE_TYPES:
            raise ValueError(f"platform {name!r}: unknown fee_type {fee_type!r}")

        tiers = tuple(
            FeeTier(
                start=float(t["start"]),
                end=math.inf if t.get("end") is None else float(t["end"]),
                rate=float(t["rate"]),
            )
            for t in data.get("tiers", [])
        )
        _check_tiers(name, tiers)
        if fee_type == "percentage" and not tiers:
            raise ValueError(f"platform {name!r}: percentage fee_type requires tiers")

        fee_cap = data.get("fee_cap")
        regular = data.get("regular_investing_fee")

        schedule = cls(
            id=data["id"],
            name=data["name"],
            fee_type=fee_type,
            base_fee=float(data.get("base_fee", 0.0)),
            tiers=tiers,
            fee_cap=float(fee_cap) if fee_cap is not None else None,
            cap_etfs_shares_only=bool(data.get("cap_etfs_shares_only", False)),
            trading_fee_funds=float(data.get("trading_fee_funds", 0.0)),
            trading_fee_etfs=float(data.get("trading_fee_etfs", 0.0)),
            trading_fee_shares=float(data.get("trading_fee_shares", 0.0)),
            regular_investing_fee=float(regular) if regular is not None else None,
            fx_fee_rate=float(data.get("fx_fee_rate", 0.0)),
            accounts=frozenset(data.get("accounts", [])),
            restrictions=data.get("restrictions", "") or "",
            fee_notes=data.get("fee_notes", "") or "",
            fx_fee_notes=data.get("fx_fee_notes", "") or "",
            good_for=data.get("good_for", "") or "",
            risk_warning=data.get("risk_warning", DEFAULT_RISK_WARNING),
            entry_fee=float(data.get("entry_fee", 0.0)),
            exit_fee=float(data.get("exit_fee", 0.0)),
        )
        if not schedule.accounts:
            logger.warning("Platform %s lists no supported account types", schedule.id)
        return schedule


def _check_tiers(name: str, tiers: Tuple[FeeTier, ...]) -> None:
    prev_end = None
    for tier in tiers:
        if tier.end <= tier.start:
            raise ValueError(f"platform {name!r}: tier {tier.start}-{tier.end} is empty")
        if tier.rate < 0:
            raise ValueError(f"platform {name!r}: negative tier rate {tier.rate}")
        if prev_end is not None and tier.start != prev_end:
            raise ValueError(
                f"platform {name!r}: tiers must be contiguous, gap or overlap at {tier.start}"
            )
        prev_end = tier.end


def load_catalog(path: str) -> Tuple[FeeSchedule, ...]:
    """
    Load a platform catalog from a JSON file.

    The file holds either a list of platform objects or an object with a
    "platforms" list. File order is preserved.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return parse_catalog(raw)


def parse_catalog(raw: Any) -> Tuple[FeeSchedule, ...]:
    if isinstance(raw, dict):
        raw = raw.get("platforms", [])
    if not isinstance(raw, list):
        raise ValueError("catalog must be a list of platforms")

    platforms = tuple(FeeSchedule.from_dict(entry) for entry in raw)
    seen = set()
    for platform in platforms:
        if platform.id in seen:
            raise ValueError(f"duplicate platform id {platform.id!r}")
        seen.add(platform.id)

    logger.debug("Loaded %d platforms", len(platforms))
    return platforms


def single_rate_platform(
    platform_id: str, name: str, rate_percent: float, accounts: Iterable[str]
) -> FeeSchedule:
    """Synthetic platform charging one flat percentage with no trading or FX costs."""
    return FeeSchedule(
        id=platform_id,
        name=name,
        fee_type="percentage",
        tiers=(FeeTier(0.0, math.inf, rate_percent / 100),),
        regular_investing_fee=0.0,
        accounts=frozenset(accounts),
    )
