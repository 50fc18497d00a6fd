import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from strategy_analyzer.api import analyzer, health, strategies
from strategy_analyzer.core.config import settings
from strategy_analyzer.core.logging import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Options Strategy Analyzer API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(analyzer.router)
app.include_router(strategies.router)

logger.info("analyzer app ready (env=%s, max_legs=%d)", settings.app_env, settings.max_legs)
