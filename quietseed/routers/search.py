from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException

from quietseed.models.post import Post
from quietseed.routers.deps import get_storage
from quietseed.storage import Storage

router = APIRouter()

@router.get("/search", response_model=List[Post])
def search(q: Optional[str] = None, storage: Storage = Depends(get_storage)):
    # Unlike /api/posts/search, this endpoint insists on a query
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return storage.search_posts(q)

@router.get("/category/{category_slug}", response_model=List[Post])
def posts_in_category(category_slug: str, storage: Storage = Depends(get_storage)):
    return storage.get_posts_by_category(category_slug)
