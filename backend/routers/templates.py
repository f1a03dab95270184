from fastapi import APIRouter

from core.csv_export import csv_response, template_csv

router = APIRouter()


@router.get("/{entity_key}")
async def download_template(entity_key: str):
    """Header-only CSV for an import; unknown keys get a generic two-column template"""
    return csv_response(template_csv(entity_key), f"{entity_key}_import_template.csv")
