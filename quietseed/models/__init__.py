# Import all models to register them with SQLModel
from quietseed.models.user import User, UserPublic, UserCreate, UserUpdate, LoginRequest
from quietseed.models.category import Category
from quietseed.models.post import Post, PostWithDetails, PostCreate, PostUpdate
from quietseed.models.site_settings import SiteSettings, SiteSettingsUpdate, DEFAULT_TAGLINE
from quietseed.models.page_content import PageContent, PageContentUpdate, DEFAULT_PAGES

__all__ = [
    "User",
    "UserPublic",
    "UserCreate",
    "UserUpdate",
    "LoginRequest",
    "Category",
    "Post",
    "PostWithDetails",
    "PostCreate",
    "PostUpdate",
    "SiteSettings",
    "SiteSettingsUpdate",
    "DEFAULT_TAGLINE",
    "PageContent",
    "PageContentUpdate",
    "DEFAULT_PAGES",
]
