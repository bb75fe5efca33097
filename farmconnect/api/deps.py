# farmconnect/api/deps.py
import hashlib
from functools import lru_cache

from fastapi import Depends, Header, Request, Response
from sqlalchemy.orm import Session

from farmconnect.data.database import get_db
from farmconnect.data.models.user import UserModel
from farmconnect.domain.errors import AuthenticationError, AuthorizationError, RateLimitExceededError
from farmconnect.domain.permissions import Action, can
from farmconnect.domain.schemas import Identity
from farmconnect.services.identity_client import FirebaseIdentityClient
from farmconnect.services.notification_service import NotificationService
from farmconnect.services.rate_limiter import RedisRateLimiter
from farmconnect.services.user_service import UserService
from farmconnect.utils.settings import RATE_LIMIT_ENABLED


@lru_cache
def get_token_verifier() -> FirebaseIdentityClient:
    return FirebaseIdentityClient()


@lru_cache
def get_rate_limiter() -> RedisRateLimiter | None:
    if not RATE_LIMIT_ENABLED:
        return None
    return RedisRateLimiter()


def get_notification_service() -> NotificationService:
    return NotificationService()


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


def rate_limit(
    request: Request,
    response: Response,
    authorization: str | None = Header(None),
    limiter=Depends(get_rate_limiter),
):
    if limiter is None:
        return

    token = _bearer_token(authorization)
    if token:
        client = "tok:" + hashlib.sha256(token.encode()).hexdigest()[:32]
    else:
        client = "ip:" + (request.client.host if request.client else "unknown")

    result = limiter.hit(client)
    if not result.allowed:
        raise RateLimitExceededError(retry_after=result.retry_after)
    response.headers["X-RateLimit-Remaining"] = str(result.remaining)


def get_identity(
    authorization: str | None = Header(None),
    verifier=Depends(get_token_verifier),
) -> Identity:
    token = _bearer_token(authorization)
    if not token:
        raise AuthenticationError("Missing token")
    return verifier.verify_token(token)


def get_current_user(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> UserModel:
    user = UserService(db).get_by_identity(identity)
    if not user:
        raise AuthorizationError("User not registered")
    return user


def require(action: Action):
    """Dependency factory: the current user's role must grant ``action``."""

    def _checker(user: UserModel = Depends(get_current_user)) -> UserModel:
        if not can(user.role, action):
            raise AuthorizationError(f"Access denied: {user.role.value} cannot {action.value}")
        return user

    return _checker
