from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.audit.sink import AuditSink, get_audit_sink
from app.auth.claims import Principal
from app.db import get_db
from app.rbac.deps import require_route
from app.schemas.users import (
    ChangePasswordIn,
    ChangePasswordOut,
    ProfileUpdateIn,
    SeedOrgOut,
    SeedOut,
    UserCreatedOut,
    UserCreateIn,
    UserOut,
)
from app.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])

def get_user_service(
    db: Session = Depends(get_db),
    audit: AuditSink = Depends(get_audit_sink),
) -> UserService:
    return UserService(db, audit)

# root org + default owner, open so a fresh install can log in
@router.post("/seed", response_model=SeedOut)
def seed(
    _public: None = Depends(require_route("users:seed")),
    svc: UserService = Depends(get_user_service),
) -> SeedOut:
    owner, org = svc.seed_owner()
    return SeedOut(owner=UserOut.model_validate(owner), org=SeedOrgOut(id=org.id, name=org.name))

@router.get("", response_model=list[UserOut])
def list_users(
    principal: Principal = Depends(require_route("users:list")),
    svc: UserService = Depends(get_user_service),
) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in svc.list_for_org(principal)]

@router.post("", response_model=UserCreatedOut)
def create_user(
    payload: UserCreateIn,
    principal: Principal = Depends(require_route("users:create")),
    svc: UserService = Depends(get_user_service),
) -> UserCreatedOut:
    u, password = svc.create_for_org(principal, payload)
    return UserCreatedOut(user=UserOut.model_validate(u), password=password)

@router.get("/me", response_model=UserOut)
def get_me(
    principal: Principal = Depends(require_route("users:me")),
    svc: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(svc.get_me(principal))

@router.put("/me", response_model=UserOut)
def update_me(
    payload: ProfileUpdateIn,
    principal: Principal = Depends(require_route("users:update_me")),
    svc: UserService = Depends(get_user_service),
) -> UserOut:
    return UserOut.model_validate(svc.update_profile(principal, payload))

@router.post("/change-password", response_model=ChangePasswordOut)
def change_password(
    payload: ChangePasswordIn,
    principal: Principal = Depends(require_route("users:change_password")),
    svc: UserService = Depends(get_user_service),
) -> ChangePasswordOut:
    svc.change_password(principal, payload)
    return ChangePasswordOut()
