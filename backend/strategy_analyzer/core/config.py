from pydantic import BaseModel, Field, model_validator
from typing import List, Union
import os
from dotenv import load_dotenv

load_dotenv()

Number = Union[int, float]

def _csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]

def _number(value: str) -> Number:
    # "2" -> 2, "0.5" -> 0.5; integer settings keep integer prices on the grid
    f = float(value)
    return int(f) if f.is_integer() else f

class Settings(BaseModel):
    app_env: str = os.getenv("APP_ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = _csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))

    # default price sweep for payoff curves
    price_min: Number = _number(os.getenv("PRICE_MIN", "0"))
    price_max: Number = _number(os.getenv("PRICE_MAX", "200"))
    price_step: Number = _number(os.getenv("PRICE_STEP", "1"))
    max_points: int = Field(int(os.getenv("MAX_POINTS", "2001")), ge=2)

    max_legs: int = Field(int(os.getenv("MAX_LEGS", "4")), ge=1)

    @model_validator(mode="after")
    def _check_price_sweep(self):
        if self.price_min < 0:
            raise ValueError("price_min must be >= 0")
        if self.price_step <= 0:
            raise ValueError("price_step must be > 0")
        if self.price_max < self.price_min:
            raise ValueError("price_max must be >= price_min")
        return self

settings = Settings()
