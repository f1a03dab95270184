from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.capacity import Capacity, CapacityCreate, CapacityUpdate, CapacityValidation
from schemas.imports import ImportResult

router = APIRouter()


@router.get("/", response_model=List[Capacity])
async def list_capacity(store: CatalogStore = Depends(get_store)):
    """Get all capacity records"""
    return store.list_capacity()


@router.get("/export")
async def export_capacity(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_capacity(), "capacity"), "capacity.csv")


@router.post("/import", response_model=ImportResult)
async def import_capacity(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "capacity", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/validate", response_model=CapacityValidation)
async def validate_capacity(payload: CapacityCreate, store: CatalogStore = Depends(get_store)):
    return store.validate_capacity(payload.model_dump(exclude_unset=True))


@router.get("/{capacity_id}", response_model=Capacity)
async def get_capacity(capacity_id: int, store: CatalogStore = Depends(get_store)):
    """Get a capacity record by ID"""
    capacity = store.get_capacity(capacity_id)
    if not capacity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Capacity with id {capacity_id} not found"
        )
    return capacity


@router.get("/{capacity_id}/details", response_model=Capacity)
async def get_capacity_details(capacity_id: int, store: CatalogStore = Depends(get_store)):
    """Get a capacity record with its commodity and location looked up now"""
    capacity = store.capacity_details(capacity_id)
    if not capacity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Capacity with id {capacity_id} not found"
        )
    return capacity


@router.post("/", response_model=Capacity, status_code=status.HTTP_201_CREATED)
async def create_capacity(payload: CapacityCreate, store: CatalogStore = Depends(get_store)):
    """Create a new capacity record"""
    return store.create_capacity(payload.model_dump(exclude_unset=True))


@router.patch("/{capacity_id}", response_model=Capacity)
async def update_capacity(capacity_id: int, payload: CapacityUpdate, store: CatalogStore = Depends(get_store)):
    """Update an existing capacity record"""
    capacity = store.update_capacity(capacity_id, payload.model_dump(exclude_unset=True))
    if not capacity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Capacity with id {capacity_id} not found"
        )
    return capacity


@router.delete("/{capacity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_capacity(capacity_id: int, store: CatalogStore = Depends(get_store)):
    store.delete_capacity(capacity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
