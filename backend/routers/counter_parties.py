from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from typing import List

from core.csv_export import csv_response, export_entity
from core.exceptions import ImportFileError
from core.importer import import_file
from db.database import get_store
from db.store import CatalogStore
from schemas.counter_party import CounterParty, CounterPartyCreate, CounterPartyUpdate
from schemas.imports import ImportResult

router = APIRouter()


@router.get("/", response_model=List[CounterParty])
async def list_counter_parties(store: CatalogStore = Depends(get_store)):
    return store.list_counter_parties()


@router.get("/export")
async def export_counter_parties(store: CatalogStore = Depends(get_store)):
    return csv_response(export_entity(store.list_counter_parties(), "counter_parties"), "counter_parties.csv")


@router.post("/import", response_model=ImportResult)
async def import_counter_parties(file: UploadFile = File(...), store: CatalogStore = Depends(get_store)):
    content = await file.read()
    try:
        return import_file(store, "counter_parties", file.filename, content)
    except ImportFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{counter_party_id}", response_model=CounterParty)
async def get_counter_party(counter_party_id: int, store: CatalogStore = Depends(get_store)):
    counter_party = store.get_counter_party(counter_party_id)
    if not counter_party:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Counter party with id {counter_party_id} not found"
        )
    return counter_party


@router.post("/", response_model=CounterParty, status_code=status.HTTP_201_CREATED)
async def create_counter_party(payload: CounterPartyCreate, store: CatalogStore = Depends(get_store)):
    return store.create_counter_party(payload.model_dump(exclude_unset=True))


@router.patch("/{counter_party_id}", response_model=CounterParty)
async def update_counter_party(
    counter_party_id: int,
    payload: CounterPartyUpdate,
    store: CatalogStore = Depends(get_store),
):
    counter_party = store.update_counter_party(counter_party_id, payload.model_dump(exclude_unset=True))
    if not counter_party:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Counter party with id {counter_party_id} not found"
        )
    return counter_party


@router.delete("/{counter_party_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_counter_party(counter_party_id: int, store: CatalogStore = Depends(get_store)):
    """Delete a counter party; locations keep their counterparty_id"""
    store.delete_counter_party(counter_party_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
