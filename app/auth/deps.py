from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.claims import Principal, principal_from_claims
from app.auth.tokens import decode_access_token
from app.errors import Unauthenticated

bearer = HTTPBearer(auto_error=False)

def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Principal:
    if creds is None or creds.scheme.lower() != "bearer":
        raise Unauthenticated("missing bearer token")

    try:
        payload = decode_access_token(creds.credentials)
        return principal_from_claims(payload)
    except Exception:
        raise Unauthenticated("invalid token")
