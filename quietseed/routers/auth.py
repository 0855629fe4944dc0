from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from quietseed.core.config import settings
from quietseed.models.user import LoginRequest, User, UserCreate, UserPublic
from quietseed.routers.deps import get_auth_service, get_current_user
from quietseed.services.auth import AuthService

router = APIRouter()


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserPublic

@router.post("/login", response_model=Token)
def login(
    credentials: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    user = service.authenticate_user(credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = service.create_session_token(user)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return {"access_token": access_token, "token_type": "bearer", "user": user}

@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: User = Depends(get_current_user)):
    """
    Get current user.
    """
    return current_user

@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, service: AuthService = Depends(get_auth_service)):
    return service.register_user(user_in.username, user_in.password, display_name=user_in.display_name)
