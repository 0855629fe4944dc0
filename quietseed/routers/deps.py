from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from quietseed.core.config import settings
from quietseed.models.user import User
from quietseed.services.auth import AuthService
from quietseed.storage import Storage

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="api/login", auto_error=False)

def get_storage(request: Request) -> Storage:
    return request.app.state.storage

def get_auth_service(storage: Storage = Depends(get_storage)) -> AuthService:
    return AuthService(storage)

def get_current_user_optional(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme_optional),
    service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    # Bearer header first, then the cookie set by /api/login
    token = token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return service.get_user_from_token(token)

def get_current_user(current_user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user

def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
