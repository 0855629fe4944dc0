from datetime import datetime, timedelta, timezone
import logging
from typing import Optional
from passlib.context import CryptContext
from jose import jwt, JWTError

from quietseed.models.user import User
from quietseed.core.config import settings
from quietseed.storage import Storage

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def get_password_hash(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            # Use the default from config (7 days)
            expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        return encoded_jwt

    def create_session_token(self, user: User) -> str:
        # Keyed by id so a username change does not invalidate the session
        return self.create_access_token(data={"sub": str(user.id)})

    def get_user_from_token(self, token: str) -> Optional[User]:
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
            subject = payload.get("sub")
            user_id = int(subject) if subject is not None else None
        except (JWTError, ValueError):
            return None
        if user_id is None:
            return None
        return self.storage.get_user(user_id)

    def authenticate_user(self, username: str, password: str) -> Optional[User]:
        user = self.storage.get_user_by_username(username)
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for username %r", username)
            return None
        return user

    def register_user(self, username: str, password: str, display_name: Optional[str] = None,
                      is_admin: bool = False) -> User:
        return self.storage.create_user({
            "username": username,
            "password_hash": self.get_password_hash(password),
            "display_name": display_name or username,
            "is_admin": is_admin,
        })

    def update_credentials(self, user_id: int, username: Optional[str] = None,
                           password: Optional[str] = None,
                           display_name: Optional[str] = None) -> Optional[User]:
        changes = {}
        if username is not None:
            changes["username"] = username
        if password is not None:
            changes["password_hash"] = self.get_password_hash(password)
        if display_name is not None:
            changes["display_name"] = display_name
        return self.storage.update_user(user_id, changes)
