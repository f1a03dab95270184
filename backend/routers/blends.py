import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.blend import Blend, BlendCreate, BlendProportion, BlendUpdate, BlendWithComponentsCreate
from schemas.blend_component import BlendDetail
from schemas.imports import ImportResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[Blend])
async def list_blends(store: CatalogStore = Depends(get_store)):
    """Get all blends"""
    return store.list_blends()


@router.get("/export")
async def export_blends(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_blends(), "blends"), "blends.csv")


@router.post("/import", response_model=ImportResult)
async def import_blends(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "blends", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/with-components", response_model=Blend, status_code=status.HTTP_201_CREATED)
async def create_blend_with_components(payload: BlendWithComponentsCreate, store: CatalogStore = Depends(get_store)):
    """Create a blend together with its components.

    Every component commodity must exist. The percentages are not required
    to add up to 100; use the validate endpoint to check the result.
    """
    for component in payload.components:
        if not store.get_commodity(component.component_commodity_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Commodity with id {component.component_commodity_id} not found"
            )

    data = payload.model_dump(exclude_unset=True, exclude={"components"})
    components = [c.model_dump() for c in payload.components]
    try:
        return store.create_blend_with_components(data, components)
    except Exception as e:
        logger.exception("create_blend_with_components failed for %r", payload.name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating blend: {str(e)}"
        )


@router.get("/{blend_id}", response_model=Blend)
async def get_blend(blend_id: int, store: CatalogStore = Depends(get_store)):
    """Get a blend by ID"""
    blend = store.get_blend(blend_id)
    if not blend:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend with id {blend_id} not found"
        )
    return blend


@router.get("/{blend_id}/details", response_model=BlendDetail)
async def get_blend_details(blend_id: int, store: CatalogStore = Depends(get_store)):
    """Get a blend with its commodity, components and proportion check, all read live"""
    detail = store.blend_details(blend_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend with id {blend_id} not found"
        )
    return detail


@router.get("/{blend_id}/validate", response_model=BlendProportion)
async def validate_blend_proportion(blend_id: int, store: CatalogStore = Depends(get_store)):
    """Check whether the blend's component percentages total 100"""
    return store.validate_blend_proportion(blend_id)


@router.post("/", response_model=Blend, status_code=status.HTTP_201_CREATED)
async def create_blend(payload: BlendCreate, store: CatalogStore = Depends(get_store)):
    """Create a new blend without components"""
    return store.create_blend(payload.model_dump(exclude_unset=True))


@router.patch("/{blend_id}", response_model=Blend)
async def update_blend(blend_id: int, payload: BlendUpdate, store: CatalogStore = Depends(get_store)):
    """Update an existing blend"""
    blend = store.update_blend(blend_id, payload.model_dump(exclude_unset=True))
    if not blend:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend with id {blend_id} not found"
        )
    return blend


@router.delete("/{blend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blend(blend_id: int, store: CatalogStore = Depends(get_store)):
    """Delete a blend and all of its components"""
    store.delete_blend(blend_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
