from dataclasses import fields, replace
from typing import Any, Sequence, Tuple

from strategy_analyzer.options.payoff import InvalidInput, OptionKind, OptionLeg, Side

MIN_LEGS = 1
MAX_LEGS = 4

DEFAULT_LEG = OptionLeg(kind=OptionKind.CALL, strike=100.0, premium=5.0, side=Side.LONG)

Legs = Tuple[OptionLeg, ...]

_LEG_FIELDS = {f.name for f in fields(OptionLeg)}


class LegLimitError(InvalidInput):
    pass


def new_strategy() -> Legs:
    return (DEFAULT_LEG,)


def check_leg_count(legs: Sequence[OptionLeg], max_legs: int = MAX_LEGS) -> None:
    if len(legs) < MIN_LEGS:
        raise LegLimitError(f"a strategy needs at least {MIN_LEGS} leg")
    if len(legs) > max_legs:
        raise LegLimitError(f"a strategy holds at most {max_legs} legs")


def add_leg(legs: Legs, leg: OptionLeg = DEFAULT_LEG, max_legs: int = MAX_LEGS) -> Legs:
    check_leg_count(tuple(legs) + (leg,), max_legs)
    return tuple(legs) + (leg,)


def remove_leg(legs: Legs, index: int) -> Legs:
    if not 0 <= index < len(legs):
        raise IndexError(f"no leg at index {index}")
    if len(legs) <= MIN_LEGS:
        raise LegLimitError(f"a strategy needs at least {MIN_LEGS} leg")
    return tuple(leg for i, leg in enumerate(legs) if i != index)


def _coerce(name: str, value: Any) -> Any:
    if name == "kind":
        try:
            return OptionKind(str(value).lower().strip())
        except ValueError:
            raise InvalidInput("kind must be 'call' or 'put'")
    if name == "side":
        try:
            return Side(str(value).lower().strip())
        except ValueError:
            raise InvalidInput("side must be 'long' or 'short'")
    # form fields arrive as text
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number")


def update_leg(legs: Legs, index: int, **changes: Any) -> Legs:
    """Return a copy of ``legs`` with the leg at ``index`` replaced by an edited one."""
    if not 0 <= index < len(legs):
        raise IndexError(f"no leg at index {index}")
    unknown = set(changes) - _LEG_FIELDS
    if unknown:
        raise InvalidInput(f"unknown leg field(s): {', '.join(sorted(unknown))}")

    edited = replace(legs[index], **{k: _coerce(k, v) for k, v in changes.items()})
    return tuple(edited if i == index else leg for i, leg in enumerate(legs))
