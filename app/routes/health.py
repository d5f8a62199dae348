import redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app import db
from app.config import settings
from app.redis_client import get_redis, redis_ping

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness: the task store and the login limiter backend must both answer
@router.get("/ready")
def ready(rl: redis.Redis = Depends(get_redis)) -> JSONResponse:
    checks = {
        "db": db.db_ping(),
        "redis": redis_ping(rl),
    }
    ok = all(checks.values())

    body = {
        "status": "ok" if ok else "unready",
        "env": settings.app_env,
        "checks": checks,
        "failing": sorted(name for name, up in checks.items() if not up),
    }
    return JSONResponse(status_code=200 if ok else 503, content=body)
