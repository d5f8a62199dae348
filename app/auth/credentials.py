from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.passwords import verify_password
from app.models.user import User

def normalize_email(email: str) -> str:
    return email.lower().strip()

def find_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == normalize_email(email)))

def verify_credentials(db: Session, email: str, password: str) -> User | None:
    user = find_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
