from fastapi import APIRouter, Depends, HTTPException

from quietseed.models.page_content import PageContent, PageContentUpdate
from quietseed.models.site_settings import SiteSettings, SiteSettingsUpdate
from quietseed.models.user import User
from quietseed.routers.deps import get_current_admin, get_storage
from quietseed.storage import Storage

router = APIRouter()

@router.get("/settings", response_model=SiteSettings)
def read_site_settings(storage: Storage = Depends(get_storage)):
    return storage.get_site_settings()

@router.put("/settings", response_model=SiteSettings)
def update_site_settings(
    settings_in: SiteSettingsUpdate,
    current_user: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.update_site_settings(settings_in.model_dump(exclude_unset=True))

@router.get("/pages/{page_id}", response_model=PageContent)
def read_page_content(page_id: str, storage: Storage = Depends(get_storage)):
    page = storage.get_page_content(page_id)
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return page

@router.put("/pages/{page_id}", response_model=PageContent)
def update_page_content(
    page_id: str,
    page_in: PageContentUpdate,
    current_user: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    """Edit a static page, creating it if it does not exist yet."""
    return storage.update_page_content(page_id, page_in.model_dump(exclude_unset=True))
