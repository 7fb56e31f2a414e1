"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes (students and the admin)

Every protected route reads the caller from its bearer token; nothing about
the session is kept server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.core.exceptions import Forbidden, Unauthorized

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (missing header handled below as 401)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - map the bearer token to {"id", "role"}.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    payload = decode_token(credentials.credentials)
    if not payload:
        raise Forbidden()

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in (ROLE_STUDENT, ROLE_ADMIN):
        raise Forbidden()

    return {"id": user_id, "role": role}


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role."""
    if user["role"] != ROLE_STUDENT:
        raise Forbidden("Students only")
    return user


async def get_current_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require the admin principal."""
    if user["role"] != ROLE_ADMIN:
        raise Forbidden("Admins only")
    return user


def create_student_token(student_id: str) -> str:
    return create_access_token(data={"sub": str(student_id), "role": ROLE_STUDENT})


def create_admin_token() -> str:
    return create_access_token(data={"sub": "admin", "role": ROLE_ADMIN})
