# liftlog/deps/auth.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose.exceptions import ExpiredSignatureError, JWTError

from liftlog.errors import Unauthorized
from liftlog.security import decode_token

# Bearer auth in Swagger; tokens are obtained from the identity provider.
# auto_error=False so a missing header goes through the same Unauthorized path.
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Opaque subject of the authenticated caller."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    try:
        payload = decode_token(credentials.credentials)
    except ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except JWTError:
        raise Unauthorized()

    sub = payload.get("sub")
    if not sub:
        raise Unauthorized()
    return str(sub)
