import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from strategy_analyzer.api.analyzer import (
    BreakevenMode,
    EvaluateResponse,
    OptionLeg,
    PriceRangeSpec,
    evaluate_legs,
    _to_core,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/strategies", tags=["strategies"])

class TemplateParam(BaseModel):
    name: str
    type: str
    required: bool = True
    description: str

class StrategyTemplate(BaseModel):
    name: str
    description: str
    params: List[TemplateParam]

def _number(name: str, description: str) -> TemplateParam:
    return TemplateParam(name=name, type="number", description=description)

TEMPLATES: List[StrategyTemplate] = [
    StrategyTemplate(
        name="long_straddle",
        description="Long call + long put at the same strike.",
        params=[
            _number("strike", "Shared strike"),
            _number("call_premium", "Call premium paid"),
            _number("put_premium", "Put premium paid"),
        ],
    ),
    StrategyTemplate(
        name="long_strangle",
        description="Long OTM put + long OTM call.",
        params=[
            _number("put_strike", "Put strike bought (lower)"),
            _number("put_premium", "Put premium paid"),
            _number("call_strike", "Call strike bought (higher)"),
            _number("call_premium", "Call premium paid"),
        ],
    ),
    StrategyTemplate(
        name="bull_call_spread",
        description="Long lower-strike call + short higher-strike call (debit).",
        params=[
            _number("long_strike", "Call strike bought (lower)"),
            _number("long_premium", "Premium paid"),
            _number("short_strike", "Call strike sold (higher)"),
            _number("short_premium", "Premium received"),
        ],
    ),
    StrategyTemplate(
        name="bear_put_spread",
        description="Long higher-strike put + short lower-strike put (debit).",
        params=[
            _number("long_strike", "Put strike bought (higher)"),
            _number("long_premium", "Premium paid"),
            _number("short_strike", "Put strike sold (lower)"),
            _number("short_premium", "Premium received"),
        ],
    ),
    StrategyTemplate(
        name="long_call_butterfly",
        description="Long 1 lower call, short 2 middle calls, long 1 upper call.",
        params=[
            _number("lower_strike", "Lower call strike bought"),
            _number("lower_premium", "Lower call premium paid"),
            _number("middle_strike", "Middle call strike sold twice"),
            _number("middle_premium", "Middle call premium received (per contract)"),
            _number("upper_strike", "Upper call strike bought"),
            _number("upper_premium", "Upper call premium paid"),
        ],
    ),
    StrategyTemplate(
        name="iron_condor",
        description="Short put spread + short call spread (credit), four legs.",
        params=[
            _number("long_put_strike", "Put strike bought (lowest)"),
            _number("long_put_premium", "Premium paid"),
            _number("short_put_strike", "Put strike sold"),
            _number("short_put_premium", "Premium received"),
            _number("short_call_strike", "Call strike sold"),
            _number("short_call_premium", "Premium received"),
            _number("long_call_strike", "Call strike bought (highest)"),
            _number("long_call_premium", "Premium paid"),
        ],
    ),
]

@router.get("/templates", response_model=List[StrategyTemplate])
def templates():
    return TEMPLATES

class BuildRequest(BaseModel):
    name: str
    params: Dict[str, Any] = Field(default_factory=dict)

class BuildResponse(BaseModel):
    name: str
    legs: List[OptionLeg]

class TemplateEvaluateRequest(BuildRequest):
    price_range: Optional[PriceRangeSpec] = None
    breakeven_mode: BreakevenMode = "exact"

def _num(p: Dict[str, Any], k: str) -> float:
    if k not in p:
        raise ValueError(f"Missing param: {k}")
    try:
        return float(p[k])
    except (TypeError, ValueError):
        raise ValueError(f"Param '{k}' must be a number")

def _leg(kind: str, side: str, p: Dict[str, Any], strike_key: str, premium_key: str) -> OptionLeg:
    return OptionLeg(kind=kind, side=side, strike=_num(p, strike_key), premium=_num(p, premium_key))

def _build(name: str, p: Dict[str, Any]) -> List[OptionLeg]:
    name = name.strip()

    if name == "long_straddle":
        return [
            _leg("call", "long", p, "strike", "call_premium"),
            _leg("put",  "long", p, "strike", "put_premium"),
        ]

    if name == "long_strangle":
        return [
            _leg("put",  "long", p, "put_strike",  "put_premium"),
            _leg("call", "long", p, "call_strike", "call_premium"),
        ]

    if name == "bull_call_spread":
        return [
            _leg("call", "long",  p, "long_strike",  "long_premium"),
            _leg("call", "short", p, "short_strike", "short_premium"),
        ]

    if name == "bear_put_spread":
        return [
            _leg("put", "long",  p, "long_strike",  "long_premium"),
            _leg("put", "short", p, "short_strike", "short_premium"),
        ]

    if name == "long_call_butterfly":
        middle = _leg("call", "short", p, "middle_strike", "middle_premium")
        return [
            _leg("call", "long", p, "lower_strike", "lower_premium"),
            middle,
            middle,
            _leg("call", "long", p, "upper_strike", "upper_premium"),
        ]

    if name == "iron_condor":
        return [
            _leg("put",  "long",  p, "long_put_strike",   "long_put_premium"),
            _leg("put",  "short", p, "short_put_strike",  "short_put_premium"),
            _leg("call", "short", p, "short_call_strike", "short_call_premium"),
            _leg("call", "long",  p, "long_call_strike",  "long_call_premium"),
        ]

    raise ValueError(f"Unknown template name: {name}")

@router.post("/build", response_model=BuildResponse)
def build(req: BuildRequest):
    try:
        legs = _build(req.name, req.params)
        return BuildResponse(name=req.name, legs=legs)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate_template(req: TemplateEvaluateRequest):
    try:
        legs = _build(req.name, req.params)
        return evaluate_legs([_to_core(l) for l in legs], req.price_range, req.breakeven_mode)
    except ValueError as e:
        logger.warning("rejected template %r: %s", req.name, e)
        raise HTTPException(status_code=400, detail=str(e))
