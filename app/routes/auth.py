from __future__ import annotations

import redis
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.audit.sink import AuditSink, get_audit_sink
from app.auth.claims import Principal
from app.auth.credentials import verify_credentials
from app.auth.tokens import issue_access_token
from app.db import get_db
from app.errors import Unauthenticated
from app.ratelimit import enforce_login_limit
from app.rbac.deps import require_route
from app.redis_client import get_redis
from app.schemas.auth import AccessTokenOut, LoginIn, LoginUserOut

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginIn,
    request: Request,
    _public: None = Depends(require_route("auth:login")),
    db: Session = Depends(get_db),
    audit: AuditSink = Depends(get_audit_sink),
    rl: redis.Redis = Depends(get_redis),
) -> AccessTokenOut:
    # counted before the password check so failed attempts use up the window
    enforce_login_limit(rl, request, payload.email)

    user = verify_credentials(db, payload.email, payload.password)
    if user is None:
        raise Unauthenticated("invalid credentials")

    audit.append(
        Principal(user_id=user.id, email=user.email, role=user.role, org_id=user.org_id),
        "USER_LOGIN",
        {"user_id": str(user.id)},
    )
    return AccessTokenOut(
        access_token=issue_access_token(user),
        user=LoginUserOut(id=user.id, email=user.email, role=user.role, org_id=user.org_id),
    )
