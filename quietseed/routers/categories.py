from typing import List
from fastapi import APIRouter, Depends

from quietseed.models.category import Category
from quietseed.routers.deps import get_storage
from quietseed.storage import Storage

router = APIRouter()

@router.get("", response_model=List[Category])
def read_categories(storage: Storage = Depends(get_storage)):
    return storage.get_all_categories()
