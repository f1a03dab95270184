from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.imports import ImportResult
from schemas.location import Location, LocationCreate, LocationDetail, LocationUpdate

router = APIRouter()


@router.get("/", response_model=List[Location])
async def list_locations(store: CatalogStore = Depends(get_store)):
    return store.list_locations()


@router.get("/export")
async def export_locations(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_locations(), "locations"), "locations.csv")


@router.post("/import", response_model=ImportResult)
async def import_locations(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "locations", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{location_id}", response_model=Location)
async def get_location(location_id: int, store: CatalogStore = Depends(get_store)):
    location = store.get_location(location_id)
    if not location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location with id {location_id} not found"
        )
    return location


@router.get("/{location_id}/details", response_model=LocationDetail)
async def get_location_details(location_id: int, store: CatalogStore = Depends(get_store)):
    detail = store.location_details(location_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location with id {location_id} not found"
        )
    return detail


@router.post("/",response_model=Location, status_code=status.HTTP_201_CREATED)
async def create_location(payload: LocationCreate, store: CatalogStore = Depends(get_store)):
    return store.create_location(payload.model_dump(exclude_unset=True))


@router.patch("/{location_id}", response_model=Location)
async def update_location(location_id: int, payload: LocationUpdate, store: CatalogStore = Depends(get_store)):
    location = store.update_location(location_id, payload.model_dump(exclude_unset=True))
    if not location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location with id {location_id} not found"
        )
    return location


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(location_id: int, store: CatalogStore = Depends(get_store)):
    store.delete_location(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
