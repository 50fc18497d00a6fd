import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


class OptionKind(str, Enum):
    CALL = "call"
    PUT = "put"


class Side(str, Enum):
    LONG = "long"
    SHORT = "short"


class InvalidInput(ValueError):
    """Raised when legs or a price range cannot be evaluated."""


@dataclass(frozen=True)
class OptionLeg:
    kind: OptionKind
    strike: float
    premium: float
    side: Side = Side.LONG


@dataclass(frozen=True)
class PriceRange:
    minimum: Number = 0
    maximum: Number = 200
    step: Number = 1


@dataclass(frozen=True)
class PricePoint:
    underlying_price: Number
    total_profit: float


@dataclass(frozen=True)
class StrategyResult:
    series: List[PricePoint]
    max_profit: float
    max_loss: float
    break_even_points: List[Number] = field(default_factory=list)
    net_premium: float = 0.0


def intrinsic_value(kind: OptionKind, strike: float, price: Number) -> float:
    if kind == OptionKind.CALL:
        return max(price - strike, 0)
    if kind == OptionKind.PUT:
        return max(strike - price, 0)
    raise InvalidInput("kind must be 'call' or 'put'")


def leg_profit(leg: OptionLeg, price: Number) -> float:
    payoff = intrinsic_value(leg.kind, leg.strike, price)
    # Long pays premium, Short receives premium
    if leg.side == Side.LONG:
        return payoff - leg.premium
    if leg.side == Side.SHORT:
        return leg.premium - payoff
    raise InvalidInput("side must be 'long' or 'short'")


def _check_legs(legs: Sequence[OptionLeg]) -> None:
    if not legs:
        raise InvalidInput("legs must be a non-empty list")
    for i, leg in enumerate(legs):
        if not math.isfinite(leg.strike):
            raise InvalidInput(f"leg {i}: strike must be a finite number")
        if not math.isfinite(leg.premium):
            raise InvalidInput(f"leg {i}: premium must be a finite number")


def _check_range(price_range: PriceRange) -> None:
    values = (price_range.minimum, price_range.maximum, price_range.step)
    if not all(math.isfinite(v) for v in values):
        raise InvalidInput("price range bounds must be finite numbers")
    if price_range.step <= 0:
        raise InvalidInput("price range step must be > 0")
    if price_range.maximum < price_range.minimum:
        raise InvalidInput("price range maximum must be >= minimum")


def grid_size(price_range: PriceRange = PriceRange()) -> int:
    """Number of prices price_grid() would sample, without building them."""
    _check_range(price_range)
    span = (price_range.maximum - price_range.minimum) / price_range.step
    if not math.isfinite(span):
        raise InvalidInput("price range step is too small for its span")
    return int(math.floor(span + 1e-9)) + 1


def price_grid(price_range: PriceRange = PriceRange()) -> List[Number]:
    """Sampled underlying prices, both endpoints included when the step divides the span."""
    count = grid_size(price_range)
    lo, step = price_range.minimum, price_range.step
    # index-based to avoid accumulating float error across the sweep
    return [lo + i * step for i in range(count)]


def strategy_profit_at(legs: Sequence[OptionLeg], price: Number) -> float:
    _check_legs(legs)
    return sum(leg_profit(leg, price) for leg in legs)


def net_premium(legs: Sequence[OptionLeg]) -> float:
    """
    Signed premium cashflow at entry:
      + means cash received (credit)
      - means cash paid (debit)
    """
    _check_legs(legs)
    total = 0.0
    for leg in legs:
        total += leg.premium if leg.side == Side.SHORT else -leg.premium
    return total


def interpolated_break_evens(series: Sequence[PricePoint]) -> List[float]:
    """
    Exact zeros plus linearly interpolated zero-crossings between adjacent
    samples. Opt-in only; evaluate() reports exact zeros.
    """
    bes: List[float] = []
    for a, b in zip(series, series[1:]):
        ya, yb = a.total_profit, b.total_profit
        if ya == 0:
            bes.append(a.underlying_price)
            continue
        if ya * yb < 0:
            x0, x1 = a.underlying_price, b.underlying_price
            bes.append(x0 + (-ya) * (x1 - x0) / (yb - ya))
    if series and series[-1].total_profit == 0:
        bes.append(series[-1].underlying_price)

    out: List[float] = []
    for x in sorted(bes):
        if not out or abs(x - out[-1]) > 1e-6:
            out.append(x)
    return out


def evaluate(legs: Sequence[OptionLeg], price_range: PriceRange = PriceRange()) -> StrategyResult:
    _check_legs(legs)
    prices = price_grid(price_range)

    series = [PricePoint(underlying_price=p, total_profit=strategy_profit_at(legs, p)) for p in prices]
    profits = [pt.total_profit for pt in series]
    # exact equality at sampled prices; crossings between samples are not reported
    break_evens = [pt.underlying_price for pt in series if pt.total_profit == 0]

    logger.debug(
        "evaluated %d leg(s) over %d prices [%s..%s]",
        len(legs), len(series), prices[0], prices[-1],
    )
    return StrategyResult(
        series=series,
        max_profit=max(profits),
        max_loss=min(profits),
        break_even_points=break_evens,
        net_premium=net_premium(legs),
    )
