# roundvote/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from roundvote.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES


# Create JWT access token for a caller account
def create_access_token(account: str, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
                        secret_key: str = SECRET_KEY) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": account, "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


# Return the caller account a token was issued to, or None if it does not verify
def decode_access_token(token: str, secret_key: str = SECRET_KEY) -> Optional[str]:
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    account = payload.get("sub")
    if not isinstance(account, str) or not account:
        return None
    return account
