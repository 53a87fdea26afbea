# ============================================================================
# FILE: appointly/api/dependencies.py
# Authentication and request-scoped dependencies
# ============================================================================
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from appointly.config.redis import get_redis
from appointly.config.settings import settings
from appointly.services.rate_limit.rate_limit_service import RateLimitService

logger = logging.getLogger(__name__)

ROLE_BUSINESS_OWNER = "business_owner"
ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"

# ============================================================================
# Security Schemes
# ============================================================================

jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Enter your JWT access token"
)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller decoded from an access token"""
    user_id: UUID
    role: str
    business_id: Optional[UUID] = None


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary with claims (should include 'sub', 'role' and,
            for business owners, 'business_id')
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "type": "access"
    })

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def verify_access_token(token: str) -> dict:
    """
    Verify and decode a JWT access token.

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Could not validate credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


# ============================================================================
# Principal Dependencies
# ============================================================================

async def get_current_principal(
        credentials: HTTPAuthorizationCredentials = Depends(jwt_security)
) -> Principal:
    payload = verify_access_token(credentials.credentials)

    try:
        business_id = payload.get("business_id")
        return Principal(
            user_id=UUID(payload["sub"]),
            role=payload.get("role", ROLE_CUSTOMER),
            business_id=UUID(business_id) if business_id else None,
        )
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Malformed token claims",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_business_owner(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != ROLE_BUSINESS_OWNER or principal.business_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Business owner access required"
        )
    return principal


async def require_customer(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != ROLE_CUSTOMER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only customers can book"
        )
    return principal


async def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return principal


# ============================================================================
# Rate Limiting
# ============================================================================

async def get_rate_limiter() -> RateLimitService:
    return RateLimitService(await get_redis())


async def booking_rate_limit(
        request: Request,
        limiter: RateLimitService = Depends(get_rate_limiter)
) -> None:
    """Throttle anonymous booking submissions per client address"""
    client = request.client.host if request.client else "unknown"
    allowed = await limiter.hit(client, limit=settings.BOOKING_RATE_LIMIT_PER_MINUTE, window_seconds=60)
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many booking attempts. Please try again later.",
            headers={"Retry-After": "60"},
        )
