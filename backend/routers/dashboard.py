from fastapi import APIRouter, Depends

from db.database import get_store
from db.store import CatalogStore
from schemas.dashboard import CatalogStats

router = APIRouter()


@router.get("/stats", response_model=CatalogStats)
async def get_stats(store: CatalogStore = Depends(get_store)):
    return store.stats()
