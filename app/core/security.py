from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, Response
from jose import JWTError, jwt

from app.core.config import settings
from app.core.logger import logger

COOKIE_NAME = "token"


def create_session_token(claims: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """Sign the caller supplied claims with an expiry (default one hour)."""
    if expires_minutes is None:
        expires_minutes = settings.TOKEN_EXPIRE_MINUTES
    to_encode = dict(claims)
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode(to_encode, settings.ACCESS_TOKEN_SECRET, algorithm=settings.TOKEN_ALGORITHM)


def decode_session_token(token: str) -> Dict[str, Any]:
    # Raises JWTError (ExpiredSignatureError included) on a bad token
    return jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.TOKEN_ALGORITHM])


def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.TOKEN_EXPIRE_MINUTES * 60,
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        key=COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


async def verify_token(request: Request) -> Dict[str, Any]:
    """
    Token gate for routes that need a session.
    No cookie -> 401, bad or expired signature -> 403.
    The decoded claims end up on request.state.user.
    """
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="unauthorized access")

    try:
        claims = decode_session_token(token)
    except JWTError as e:
        logger.warning(f"⚠️ Rejected session token: {e}")
        raise HTTPException(status_code=403, detail="forbidden access")

    request.state.user = claims
    return claims


async def booking_caller(request: Request) -> Optional[Dict[str, Any]]:
    if not settings.PROTECT_BOOKINGS:
        return None
    return await verify_token(request)
