"""
security.py
------------
Password hashing, JWT tokens and the per-request session context.

Notes:
- Argon2 via passlib for password hashing.
- Tokens carry the username as "sub" and the display name as "name".
- `get_current_session` hands routes an explicit SessionContext instead of
  a process-wide auth store.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from lessoncraft.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from lessoncraft.models.lesson_plan import User

# -------------------------
# Password Hashing
# -------------------------
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


# -------------------------
# Session Context
# -------------------------
@dataclass(frozen=True)
class SessionContext:
    username: str
    user: User
    token: str


# -------------------------
# JWT Token Handling
# -------------------------
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a signed JWT access token.

    Args:
        data (dict): Claims to encode (e.g. {"sub": username, "name": display_name}).
        expires_delta (timedelta, optional): Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: Encoded JWT token.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# OAuth2PasswordBearer tells FastAPI where to find the login endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_session(token: str = Depends(oauth2_scheme)) -> SessionContext:
    """
    Decodes and verifies a JWT token and builds the caller's SessionContext.

    Raises:
        HTTPException: If the token is invalid or expired.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _credentials_exception()

    username = payload.get("sub")
    if username is None:
        raise _credentials_exception()
    user = User(email=payload.get("email", username), name=payload.get("name", username))
    return SessionContext(username=username, user=user, token=token)
