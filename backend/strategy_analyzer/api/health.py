from fastapi import APIRouter

from strategy_analyzer.core.config import settings

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    return {"status": "ok", "env": settings.app_env}
