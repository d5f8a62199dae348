from __future__ import annotations

import hashlib
import logging

import redis
from fastapi import HTTPException, Request

from app.auth.credentials import normalize_email
from app.config import settings

logger = logging.getLogger(__name__)

def _hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()[:24]

def client_ip(request: Request) -> str:
    return (request.client.host if request.client else "unknown").strip()

def login_subject(request: Request, email: str) -> str:
    # per ip and per account, so guessing one mailbox trips the limit early
    return f"{client_ip(request)}|{normalize_email(email)}"

# fixed window: INCR, and start the TTL on the first hit of the window
def hit(client: redis.Redis, name: str, subject: str, limit_per_window: int, window_seconds: int) -> None:
    if not settings.rate_limit_enabled:
        return

    key = f"rl:{name}:{_hash(subject)}"
    try:
        count = int(client.incr(key))
        if count == 1:
            client.expire(key, window_seconds)
    except redis.RedisError:
        # fail-open if redis is down
        logger.warning("rate limiter unavailable for %s; allowing request", name)
        return

    if count > limit_per_window:
        raise HTTPException(status_code=429, detail="rate_limited")

def enforce_login_limit(client: redis.Redis, request: Request, email: str) -> None:
    hit(
        client,
        "auth:login",
        login_subject(request, email),
        limit_per_window=settings.rate_limit_auth_login_per_min,
        window_seconds=60,
    )
