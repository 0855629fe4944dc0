import re
from typing import List, Optional, Union
from fastapi import APIRouter, Depends, HTTPException, status

from quietseed.models.post import Post, PostCreate, PostUpdate, PostWithDetails
from quietseed.models.user import User
from quietseed.routers.deps import get_current_admin, get_storage
from quietseed.storage import Storage

router = APIRouter()

_POST_ID_RE = re.compile(r"[0-9]+")


def resolve_post(storage: Storage, id_or_slug: str) -> Optional[Union[Post, PostWithDetails]]:
    """Look a post up by numeric id, or by slug with category and author joined.

    Only a run of ASCII digits is an id, so slugs such as
    ``5-simple-morning-rituals`` or ``1_000`` still resolve by slug.
    """
    if _POST_ID_RE.fullmatch(id_or_slug):
        return storage.get_post(int(id_or_slug))
    return storage.get_post_with_details(id_or_slug)

@router.get("", response_model=List[Post])
def read_posts(storage: Storage = Depends(get_storage)):
    return storage.get_all_posts()

@router.get("/featured", response_model=PostWithDetails)
def read_featured_post(storage: Storage = Depends(get_storage)):
    post = storage.get_featured_post()
    if not post:
        raise HTTPException(status_code=404, detail="No featured post found")
    return post

@router.get("/search", response_model=List[Post])
def search_posts(q: Optional[str] = None, storage: Storage = Depends(get_storage)):
    """Search posts; an empty query lists every post."""
    return storage.search_posts(q)

@router.get("/category/{category_slug}", response_model=List[Post])
def read_posts_by_category(category_slug: str, storage: Storage = Depends(get_storage)):
    return storage.get_posts_by_category(category_slug)

@router.get("/{id_or_slug}")
def read_post(id_or_slug: str, storage: Storage = Depends(get_storage)):
    post = resolve_post(storage, id_or_slug)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    data = post_in.model_dump(exclude_unset=True)
    if data.get("author_id") is None:
        data["author_id"] = current_user.id
    return storage.create_post(data)

@router.put("/{post_id}", response_model=Post)
def update_post(
    post_id: int,
    post_in: PostUpdate,
    current_user: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    post = storage.update_post(post_id, post_in.model_dump(exclude_unset=True))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_post(post_id):
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post deleted successfully"}
