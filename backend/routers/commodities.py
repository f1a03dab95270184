from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.commodity import Commodity, CommodityCreate, CommodityUpdate
from schemas.imports import ImportResult

router = APIRouter()


@router.get("/", response_model=List[Commodity])
async def list_commodities(store: CatalogStore = Depends(get_store)):
    """Get all commodities"""
    return store.list_commodities()


@router.get("/export")
async def export_commodities(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_commodities(), "commodities"), "commodities.csv")


@router.post("/import", response_model=ImportResult)
async def import_commodities(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "commodities", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{commodity_id}", response_model=Commodity)
async def get_commodity(commodity_id: int, store: CatalogStore = Depends(get_store)):
    """Get a commodity by ID, with the UOM snapshot taken when it was last saved"""
    commodity = store.get_commodity(commodity_id)
    if not commodity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Commodity with id {commodity_id} not found"
        )
    return commodity


@router.get("/{commodity_id}/details", response_model=Commodity)
async def get_commodity_details(commodity_id: int, store: CatalogStore = Depends(get_store)):
    """Get a commodity by ID with its UOM looked up now"""
    commodity = store.commodity_details(commodity_id)
    if not commodity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Commodity with id {commodity_id} not found"
        )
    return commodity


@router.post("/", response_model=Commodity, status_code=status.HTTP_201_CREATED)
async def create_commodity(payload: CommodityCreate, store: CatalogStore = Depends(get_store)):
    """Create a new commodity"""
    return store.create_commodity(payload.model_dump(exclude_unset=True))


@router.patch("/{commodity_id}", response_model=Commodity)
async def update_commodity(commodity_id: int, payload: CommodityUpdate, store: CatalogStore = Depends(get_store)):
    """Update an existing commodity"""
    commodity = store.update_commodity(commodity_id, payload.model_dump(exclude_unset=True))
    if not commodity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Commodity with id {commodity_id} not found"
        )
    return commodity


@router.delete("/{commodity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_commodity(commodity_id: int, store: CatalogStore = Depends(get_store)):
    """Delete a commodity; blends, components and capacity keep their references"""
    store.delete_commodity(commodity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
