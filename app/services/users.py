import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.audit.sink import AuditSink
from app.auth.claims import Principal
from app.auth.credentials import find_user_by_email, normalize_email
from app.auth.passwords import generate_password, hash_password, verify_password
from app.config import settings
from app.errors import Forbidden, InvalidState, NotFound, Unauthenticated
from app.models.enums import Permission, Role
from app.models.org import Org
from app.models.user import User
from app.rbac.guard import authorize
from app.schemas.users import ChangePasswordIn, ProfileUpdateIn, UserCreateIn

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: Session, audit: AuditSink):
        self.db = db
        self.audit = audit

    def seed_owner(self) -> tuple[User, Org]:
        """Ensure the root organization and its owner exist.

        Re-running resets the owner's password, role and organization.
        """
        org = self.db.scalar(
            select(Org).where(Org.name == settings.seed_org_name, Org.parent_id.is_(None))
        )
        if org is None:
            org = Org(name=settings.seed_org_name, parent_id=None)
            self.db.add(org)
            self.db.flush()

        password_hash = hash_password(settings.seed_owner_password)
        owner = find_user_by_email(self.db, settings.seed_owner_email)
        if owner is None:
            owner = User(
                email=normalize_email(settings.seed_owner_email),
                name="Default Owner",
                password_hash=password_hash,
                role=Role.owner,
                org_id=org.id,
            )
            self.db.add(owner)
        else:
            owner.password_hash = password_hash
            owner.role = Role.owner
            owner.org_id = org.id

        self.db.commit()
        self.db.refresh(owner)
        self.db.refresh(org)

        logger.info("seed owner ensured: %s in org %s", owner.email, org.name)
        return owner, org

    def list_for_org(self, principal: Principal) -> list[User]:
        self._ensure_can_manage_users(principal)

        q = select(User).where(User.org_id == principal.org_id).order_by(User.created_at.asc())
        return list(self.db.scalars(q).all())

    def create_for_org(self, principal: Principal, payload: UserCreateIn) -> tuple[User, str]:
        """Create a user in the caller's organization.

        Returns the user and the generated plain password, which is not kept.
        """
        self._ensure_can_manage_users(principal)

        if payload.role == Role.owner:
            raise InvalidState("cannot create additional owner users")

        if find_user_by_email(self.db, payload.email) is not None:
            raise InvalidState("user with this email already exists")

        org = self.db.get(Org, principal.org_id)
        if org is None:
            raise InvalidState("organization not found")

        plain = generate_password()
        u = User(
            email=normalize_email(payload.email),
            name=payload.name,
            role=payload.role,
            password_hash=hash_password(plain),
            org_id=org.id,
        )
        self.db.add(u)
        self.db.commit()
        self.db.refresh(u)

        self.audit.append(
            principal,
            "USER_CREATED",
            {"new_user_id": str(u.id), "new_user_role": u.role.value, "org_id": str(org.id)},
        )
        return u, plain

    def get_me(self, principal: Principal) -> User:
        u = self.db.get(User, principal.user_id)
        if u is None:
            raise NotFound("user not found")
        return u

    def update_profile(self, principal: Principal, payload: ProfileUpdateIn) -> User:
        u = self.get_me(principal)

        if payload.name is not None:
            u.name = payload.name

        self.db.add(u)
        self.db.commit()
        self.db.refresh(u)

        self.audit.append(principal, "PROFILE_UPDATED", {"user_id": str(u.id)})
        return u

    def change_password(self, principal: Principal, payload: ChangePasswordIn) -> None:
        u = self.get_me(principal)

        if not verify_password(payload.current_password, u.password_hash):
            raise Unauthenticated("current password is incorrect")

        u.password_hash = hash_password(payload.new_password)
        self.db.add(u)
        self.db.commit()

        self.audit.append(principal, "PASSWORD_CHANGED", {"user_id": str(u.id)})

    def _ensure_can_manage_users(self, principal: Principal) -> None:
        if not authorize(principal, [Permission.manage_users]):
            raise Forbidden("you are not allowed to manage users")
        if principal.org_id is None:
            raise InvalidState("user is not attached to an organization")
