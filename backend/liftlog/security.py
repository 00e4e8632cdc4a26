from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import jwt
from jose.exceptions import JWTError
from liftlog.settings import get_settings

# Tokens come from the external identity provider. create_access_token only
# exists so local runs and tests can mint a token the provider would have issued.

def create_access_token(
    sub: str,
    *,
    expires_minutes: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes or s.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if s.AUTH_ISSUER:
        payload["iss"] = s.AUTH_ISSUER
    if s.AUTH_AUDIENCE:
        payload["aud"] = s.AUTH_AUDIENCE
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.AUTH_SECRET_KEY, algorithm=s.AUTH_ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature, expiry and (when configured) issuer/audience.
    Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(
        token,
        s.AUTH_SECRET_KEY,
        algorithms=[s.AUTH_ALGORITHM],
        issuer=s.AUTH_ISSUER,
        audience=s.AUTH_AUDIENCE,
        options={
            "verify_signature": True,
            "verify_exp": True,
            "verify_aud": s.AUTH_AUDIENCE is not None,
        },
    )
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload
