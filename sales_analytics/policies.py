"""Revenue and bonus policies plugged into the sales analysis.

A policy is a strategy object with a single method. The analysis never
hard-codes a formula: callers hand in whichever policies apply to them.
Plain functions with the matching signature are accepted too and wrapped
with :class:`FunctionRevenuePolicy` / :class:`FunctionBonusPolicy`.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

from sales_analytics.config import Settings, settings as default_settings
from sales_analytics.models import LineItem, Product, SellerStats


@runtime_checkable
class RevenuePolicy(Protocol):
    def compute_item_revenue(self, item: LineItem, product: Product) -> float: ...


@runtime_checkable
class BonusPolicy(Protocol):
    def compute_bonus(self, rank: int, total: int, seller: SellerStats) -> float: ...


class SimpleRevenuePolicy:
    """``sale_price * quantity`` less the line's percentage discount."""

    def compute_item_revenue(self, item: LineItem, product: Product) -> float:
        discount_factor = 1 - (item.discount / 100)
        return item.sale_price * item.quantity * discount_factor


@dataclass(frozen=True)
class ProfitRankBonusPolicy:
    """Bonus as a share of profit, chosen by the seller's profit rank.

    Rank 0 earns ``top_rate``, ranks 1-2 ``podium_rate``, the last rank
    ``last_rate`` and everyone else ``default_rate``. The top-three rules are
    checked first, so with three sellers or fewer nobody falls to the
    last-place rate.
    """

    top_rate: float = 0.15
    podium_rate: float = 0.10
    default_rate: float = 0.05
    last_rate: float = 0.0

    @classmethod
    def from_settings(cls, config: Settings) -> "ProfitRankBonusPolicy":
        return cls(
            top_rate=config.top_bonus_rate,
            podium_rate=config.podium_bonus_rate,
            default_rate=config.default_bonus_rate,
            last_rate=config.last_place_bonus_rate,
        )

    def compute_bonus(self, rank: int, total: int, seller: SellerStats) -> float:
        if rank == 0:
            rate = self.top_rate
        elif rank in (1, 2):
            rate = self.podium_rate
        elif rank == total - 1:
            rate = self.last_rate
        else:
            rate = self.default_rate
        return seller.profit * rate


@dataclass(frozen=True)
class FunctionRevenuePolicy:
    """Wraps ``func(item, product)`` or, for one-argument functions, ``func(item)``."""

    func: Callable[..., float]
    takes_product: bool = True

    def compute_item_revenue(self, item: LineItem, product: Product) -> float:
        if self.takes_product:
            return self.func(item, product)
        return self.func(item)


@dataclass(frozen=True)
class FunctionBonusPolicy:
    func: Callable[[int, int, SellerStats], float]

    def compute_bonus(self, rank: int, total: int, seller: SellerStats) -> float:
        return self.func(rank, total, seller)


def _accepts_positional(func: Callable, count: int) -> bool:
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        # builtins without an introspectable signature get the full call
        return True
    positional = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= count


def as_revenue_policy(candidate: object) -> Optional[RevenuePolicy]:
    """Return ``candidate`` as a revenue policy, or ``None`` if it is not one."""
    if isinstance(candidate, RevenuePolicy):
        return candidate
    if callable(candidate):
        return FunctionRevenuePolicy(candidate, takes_product=_accepts_positional(candidate, 2))
    return None


def as_bonus_policy(candidate: object) -> Optional[BonusPolicy]:
    """Return ``candidate`` as a bonus policy, or ``None`` if it is not one."""
    if isinstance(candidate, BonusPolicy):
        return candidate
    if callable(candidate):
        return FunctionBonusPolicy(candidate)
    return None


@dataclass(frozen=True)
class AnalysisOptions:
    """The two policies every analysis run needs."""

    calculate_revenue: object = None
    calculate_bonus: object = None


def default_options(config: Optional[Settings] = None) -> AnalysisOptions:
    config = config or default_settings
    return AnalysisOptions(
        calculate_revenue=SimpleRevenuePolicy(),
        calculate_bonus=ProfitRankBonusPolicy.from_settings(config),
    )
