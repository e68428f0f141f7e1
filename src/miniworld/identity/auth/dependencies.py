"""FastAPI dependencies that gate routes on the caller's role."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from miniworld import services
from miniworld.identity.auth.provider import AuthenticatedUser
from miniworld.identity.auth.sessions import (
    AdminSession,
    CustomerSession,
    admin_session_for,
    customer_session_for,
)

_bearer = HTTPBearer(auto_error=False)


def authenticated_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = services.auth_provider().authenticate(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(user: AuthenticatedUser = Depends(authenticated_user)) -> AdminSession:
    session = admin_session_for(user)
    if session is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return session


def require_admin_manager(session: AdminSession = Depends(require_admin)) -> AdminSession:
    if not session.can_manage_admins:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized. Admin access required.")
    return session


def optional_customer(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> CustomerSession | None:
    if credentials is None:
        return None
    user = services.auth_provider().authenticate(credentials.credentials)
    if user is None:
        return None
    return customer_session_for(user)
