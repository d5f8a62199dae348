import secrets

import bcrypt

from app.config import settings

# bcrypt only looks at the first 72 bytes and current releases refuse longer input
MAX_PASSWORD_BYTES = 72

def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES

def hash_password(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    # nothing that long was ever hashed, so it cannot match
    if password_too_long(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

def generate_password() -> str:
    return secrets.token_urlsafe(12)
