# src/storefront/api/auth.py
"""JWT authentication and role checks as FastAPI dependencies."""

from typing import Callable, Optional

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request
from rich.markup import escape
from sqlalchemy.orm import Session

from storefront.api.schemas import AuthCheckResponse, UserOut
from storefront.core.config import AuthConfig
from storefront.core.logging import color_palette, log
from storefront.db.models import User

BEARER_PREFIX = "Bearer "


def extract_token(request: Request, cookie_name: str = "token") -> Optional[str]:
    """Token from the auth cookie, falling back to an `Authorization: Bearer` header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip() or None
    return None


class AuthGuard:
    """Builds the `current_user` and role-check dependencies."""

    def __init__(self, config: AuthConfig, db_dependency: Callable[..., Session]):
        self.config = config
        self.db_dependency = db_dependency
        self.current_user = self._build_current_user()

    def decode(self, token: str) -> dict:
        return jwt.decode(token, self.config.jwt_secret, algorithms=[self.config.jwt_algorithm])

    def _build_current_user(self) -> Callable[..., User]:
        guard = self

        def current_user(request: Request, db: Session = Depends(self.db_dependency)) -> User:
            token = extract_token(request, guard.config.cookie_name)
            if not token:
                raise HTTPException(status_code=401, detail="Please Login to Access")

            try:
                payload = guard.decode(token)
                user_id = int(payload["id"])
            except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
                log.warn(f"JWT verification error: {escape(str(e))}")
                raise HTTPException(status_code=401, detail="Invalid token")

            user = db.get(User, user_id)
            if user is None:
                raise HTTPException(status_code=401, detail="User not found")

            log.debug(f"Authenticated {color_palette['user'](user.name)} (role: {user.role})")
            return user

        return current_user

    def require_roles(self, *roles: str) -> Callable[..., User]:
        """Dependency that rejects users whose role is not in `roles`."""

        def check_role(user: User = Depends(self.current_user)) -> User:
            if user.role not in roles:
                raise HTTPException(status_code=403, detail=f"Role: {user.role} is not allowed")
            return user

        return check_role

    def router(self) -> APIRouter:
        router = APIRouter(tags=["Auth"])

        @router.get("/test-auth", response_model=AuthCheckResponse, summary="Check authentication")
        def test_auth(user: User = Depends(self.current_user)) -> AuthCheckResponse:
            return AuthCheckResponse(user=UserOut.model_validate(user))

        return router
