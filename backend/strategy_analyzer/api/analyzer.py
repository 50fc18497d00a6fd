import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

from strategy_analyzer.core.config import settings
from strategy_analyzer.options.payoff import (
    OptionKind as CoreKind,
    OptionLeg as CoreLeg,
    PriceRange,
    Side as CoreSide,
    StrategyResult,
    evaluate,
    grid_size,
    interpolated_break_evens,
)
from strategy_analyzer.options.legs import check_leg_count

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyzer", tags=["analyzer"])

OptionKind = Literal["call", "put"]
Side = Literal["long", "short"]
BreakevenMode = Literal["exact", "interpolated"]
Number = Union[int, float]

class OptionLeg(BaseModel):
    kind: OptionKind
    strike: float = Field(..., ge=0, allow_inf_nan=False)
    premium: float = Field(..., allow_inf_nan=False)
    side: Side = "long"

class PriceRangeSpec(BaseModel):
    minimum: Number = 0
    maximum: Number = 200
    step: Number = 1

class EvaluateRequest(BaseModel):
    legs: List[OptionLeg] = Field(..., min_length=1)
    price_range: Optional[PriceRangeSpec] = None  # defaults from settings
    breakeven_mode: BreakevenMode = "exact"

class CurvePoint(BaseModel):
    underlying_price: Number
    total_profit: float

class ChartData(BaseModel):
    labels: List[Number]
    data: List[float]

class EvaluateResponse(BaseModel):
    max_profit: float
    max_loss: float
    break_even_points: List[Number]
    break_even_text: str
    net_premium: float
    series: List[CurvePoint]
    chart: ChartData
    price_range: PriceRangeSpec  # echo the range used (including defaults)

def default_range() -> PriceRangeSpec:
    return PriceRangeSpec(minimum=settings.price_min, maximum=settings.price_max, step=settings.price_step)

def _to_core(leg: OptionLeg) -> CoreLeg:
    return CoreLeg(kind=CoreKind(leg.kind), strike=leg.strike, premium=leg.premium, side=CoreSide(leg.side))

def _format_number(x: Number) -> str:
    # 105.0 -> "105", 105.5 -> "105.5", shortest round-trip otherwise
    if isinstance(x, float):
        return str(int(x)) if x.is_integer() else repr(x)
    return str(x)

def render(result: StrategyResult, bounds: PriceRangeSpec, mode: BreakevenMode = "exact") -> EvaluateResponse:
    if mode == "interpolated":
        bes = interpolated_break_evens(result.series)
    else:
        bes = list(result.break_even_points)

    series = [CurvePoint(underlying_price=p.underlying_price, total_profit=p.total_profit) for p in result.series]
    return EvaluateResponse(
        max_profit=result.max_profit,
        max_loss=result.max_loss,
        break_even_points=bes,
        break_even_text=", ".join(_format_number(x) for x in bes),
        net_premium=result.net_premium,
        series=series,
        chart=ChartData(labels=[p.underlying_price for p in series], data=[p.total_profit for p in series]),
        price_range=bounds,
    )

def evaluate_legs(legs: List[CoreLeg], bounds: Optional[PriceRangeSpec], mode: BreakevenMode = "exact") -> EvaluateResponse:
    check_leg_count(legs, settings.max_legs)
    bounds = bounds or default_range()
    price_range = PriceRange(minimum=bounds.minimum, maximum=bounds.maximum, step=bounds.step)
    points = grid_size(price_range)
    if points > settings.max_points:
        raise ValueError(f"price range yields {points} points; at most {settings.max_points} allowed")
    result = evaluate(legs, price_range)
    return render(result, bounds, mode)

@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate_strategy(req: EvaluateRequest):
    try:
        core_legs = [_to_core(l) for l in req.legs]
        return evaluate_legs(core_legs, req.price_range, req.breakeven_mode)
    except ValueError as e:
        logger.warning("rejected evaluate request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
