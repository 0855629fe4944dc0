from fastapi import APIRouter, Depends, HTTPException

from quietseed.models.user import User, UserPublic, UserUpdate
from quietseed.routers.deps import get_auth_service, get_current_admin
from quietseed.services.auth import AuthService

router = APIRouter()

@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_admin),
    service: AuthService = Depends(get_auth_service),
):
    """
    Update a user's username, password or display name. Only for admins.
    """
    updated_user = service.update_credentials(
        user_id,
        username=user_in.username,
        password=user_in.password,
        display_name=user_in.display_name,
    )
    if not updated_user:
        raise HTTPException(status_code=404, detail="User not found")
    return updated_user
