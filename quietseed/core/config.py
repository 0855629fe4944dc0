from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "The Quiet Seed API"

    # "database" for the SQLModel store, "memory" for the volatile one
    STORAGE_BACKEND: str = "database"
    DATABASE_URL: str = "sqlite:///./quietseed.db"

    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7 # 1 week
    SESSION_COOKIE_NAME: str = "access_token"

    # Demo content and the initial admin account
    SEED_DEMO_DATA: bool = True
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_DISPLAY_NAME: str = "Admin User"
    DEMO_AUTHOR_USERNAME: str = "maichi"
    DEMO_AUTHOR_PASSWORD: str = "password123"
    DEMO_AUTHOR_DISPLAY_NAME: str = "Mai Chi"

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
