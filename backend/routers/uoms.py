from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.imports import ImportResult
from schemas.uom import UOM, UOMCreate, UOMUpdate

router = APIRouter()


@router.get("/", response_model=List[UOM])
async def list_uoms(store: CatalogStore = Depends(get_store)):
    """Get all units of measure"""
    return store.list_uoms()


@router.get("/export")
async def export_uoms(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_uoms(), "uoms"), "uoms.csv")


@router.post("/import", response_model=ImportResult)
async def import_uoms(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "uoms", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{uom_id}", response_model=UOM)
async def get_uom(uom_id: int, store: CatalogStore = Depends(get_store)):
    """Get a unit of measure by ID"""
    uom = store.get_uom(uom_id)
    if not uom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"UOM with id {uom_id} not found"
        )
    return uom


@router.post("/", response_model=UOM, status_code=status.HTTP_201_CREATED)
async def create_uom(payload: UOMCreate, store: CatalogStore = Depends(get_store)):
    """Create a new unit of measure"""
    return store.create_uom(payload.model_dump(exclude_unset=True))


@router.patch("/{uom_id}", response_model=UOM)
async def update_uom(uom_id: int, payload: UOMUpdate, store: CatalogStore = Depends(get_store)):
    """Update an existing unit of measure"""
    uom = store.update_uom(uom_id, payload.model_dump(exclude_unset=True))
    if not uom:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"UOM with id {uom_id} not found"
        )
    return uom


@router.delete("/{uom_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_uom(uom_id: int, store: CatalogStore = Depends(get_store)):
    """Delete a unit of measure; commodities keep their embedded copy"""
    store.delete_uom(uom_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
