from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.blend_component import BlendComponent, BlendComponentCreate, BlendComponentUpdate
from schemas.imports import ImportResult

router = APIRouter()


@router.get("/", response_model=List[BlendComponent])
async def list_blend_components(
    blend_id: int | None = Query(None, description="Filter by blend ID"),
    store: CatalogStore = Depends(get_store),
):
    """Get all blend components, optionally only those of one blend"""
    if blend_id is not None:
        return store.list_blend_components_by_blend(blend_id)
    return store.list_blend_components()


@router.get("/export")
async def export_blend_components(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_blend_components(), "blend_components"), "blend_components.csv")


@router.post("/import", response_model=ImportResult)
async def import_blend_components(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "blend_components", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{component_id}", response_model=BlendComponent)
async def get_blend_component(component_id: int, store: CatalogStore = Depends(get_store)):
    component = store.get_blend_component(component_id)
    if not component:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend component with id {component_id} not found"
        )
    return component


@router.get("/{component_id}/details", response_model=BlendComponent)
async def get_blend_component_details(component_id: int, store: CatalogStore = Depends(get_store)):
    """Get a blend component with its blend and commodity looked up now"""
    component = store.blend_component_details(component_id)
    if not component:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend component with id {component_id} not found"
        )
    return component


@router.post("/", response_model=BlendComponent, status_code=status.HTTP_201_CREATED)
async def create_blend_component(payload: BlendComponentCreate, store: CatalogStore = Depends(get_store)):
    """Add a component to an existing blend"""
    if not store.get_blend(payload.blend_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend with id {payload.blend_id} not found"
        )
    if not store.get_commodity(payload.component_commodity_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Commodity with id {payload.component_commodity_id} not found"
        )
    return store.create_blend_component(payload.model_dump(exclude_unset=True))


@router.patch("/{component_id}", response_model=BlendComponent)
async def update_blend_component(
    component_id: int,
    payload: BlendComponentUpdate,
    store: CatalogStore = Depends(get_store),
):
    component = store.update_blend_component(component_id, payload.model_dump(exclude_unset=True))
    if not component:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Blend component with id {component_id} not found"
        )
    return component


@router.delete("/{component_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blend_component(component_id: int, store: CatalogStore = Depends(get_store)):
    store.delete_blend_component(component_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
