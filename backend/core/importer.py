import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Tuple, Type

from openpyxl import load_workbook
from pydantic import BaseModel, ValidationError

from core.config import settings
from core.csv_export import TEMPLATE_COLUMNS
from core.exceptions import ImportFileError, RowImportError
from db.store import CatalogStore
from schemas.blend import BlendCreate
from schemas.blend_component import BlendComponentCreate
from schemas.capacity import CapacityCreate
from schemas.commodity import CommodityCreate
from schemas.counter_party import CounterPartyCreate
from schemas.imports import FailedRow, ImportedRow, ImportErrorDetail, ImportResult, ImportSummary
from schemas.location import LocationCreate
from schemas.uom import UOMCreate

logger = logging.getLogger(__name__)

# (row number, {column: cell value}); header is row 1
Row = Tuple[int, Dict[str, Any]]


@dataclass(frozen=True)
class ImportTarget:
    schema: Type[BaseModel]
    create: str
    # foreign key -> (store lookup, label used in error messages)
    references: Dict[str, Tuple[str, str]] = field(default_factory=dict)


IMPORT_TARGETS: Dict[str, ImportTarget] = {
    "uoms": ImportTarget(UOMCreate, "create_uom"),
    "commodities": ImportTarget(
        CommodityCreate, "create_commodity",
        {"uom_id": ("get_uom", "UOM")},
    ),
    "locations": ImportTarget(
        LocationCreate, "create_location",
        {"counterparty_id": ("get_counter_party", "Counter party")},
    ),
    "counter_parties": ImportTarget(CounterPartyCreate, "create_counter_party"),
    "blends": ImportTarget(
        BlendCreate, "create_blend",
        {"commodity_id": ("get_commodity", "Commodity")},
    ),
    "blend_components": ImportTarget(
        BlendComponentCreate, "create_blend_component",
        {
            "blend_id": ("get_blend", "Blend"),
            "component_commodity_id": ("get_commodity", "Commodity"),
        },
    ),
    "capacity": ImportTarget(
        CapacityCreate, "create_capacity",
        {
            "commodity_id": ("get_commodity", "Commodity"),
            "location_id": ("get_location", "Location"),
        },
    ),
}


def _cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, datetime):
        # spreadsheet date cells come back as midnight datetimes
        return value.date()
    return value


def _rows_from_table(filename: str, table) -> List[Row]:
    iterator = iter(table)
    header = next(iterator, None)
    if header is None:
        raise ImportFileError(filename, "file is empty")
    columns = [str(c).strip() if c is not None else "" for c in header]
    if not any(columns):
        raise ImportFileError(filename, "header row is empty")

    rows: List[Row] = []
    for row_number, values in enumerate(iterator, start=2):
        cells = [_cell(v) for v in values]
        if all(c is None for c in cells):
            continue
        rows.append((row_number, {col: cell for col, cell in zip(columns, cells) if col}))
    return rows


def _read_csv(filename: str, content: bytes) -> List[Row]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ImportFileError(filename, "file is not UTF-8 text") from e
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=settings.csv_delimiter)
    try:
        return _rows_from_table(filename, reader)
    except csv.Error as e:
        raise ImportFileError(filename, f"malformed CSV ({e})") from e


def _read_xlsx(filename: str, content: bytes) -> List[Row]:
    try:
        wb = load_workbook(filename=io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise ImportFileError(filename, f"not a readable .xlsx workbook ({e})") from e
    try:
        return _rows_from_table(filename, wb.active.iter_rows(values_only=True))
    finally:
        wb.close()


def read_rows(filename: str, content: bytes) -> List[Row]:
    """Parse an uploaded .csv or .xlsx file into numbered rows keyed by header."""
    name = (filename or "").lower()
    if name.endswith(".xls"):
        raise ImportFileError(filename, "legacy .xls workbooks are not supported, save as .xlsx or .csv")
    if name.endswith(".xlsx"):
        return _read_xlsx(filename, content)
    return _read_csv(filename, content)


def _check_references(store: CatalogStore, target: ImportTarget, fields: Dict[str, Any]) -> None:
    for foreign_key, (lookup, label) in target.references.items():
        value = fields.get(foreign_key)
        if value is not None and getattr(store, lookup)(value) is None:
            raise RowImportError(foreign_key, f"{label} {value} not found", str(value))


def import_rows(store: CatalogStore, entity_key: str, rows: List[Row]) -> ImportResult:
    """Validate and create every row on its own; bad rows are reported, never fatal."""
    target = IMPORT_TARGETS[entity_key]
    columns = set(TEMPLATE_COLUMNS[entity_key])
    successful: List[ImportedRow] = []
    failed: List[FailedRow] = []
    errors: List[ImportErrorDetail] = []

    for row_number, raw in rows:
        data = {k: v for k, v in raw.items() if k in columns and v is not None}
        try:
            payload = target.schema.model_validate(data)
            fields = payload.model_dump(exclude_unset=True)
            _check_references(store, target, fields)
        except ValidationError as e:
            first = e.errors()[0]
            column = ".".join(str(p) for p in first["loc"]) or "row"
            value = None if first["type"] == "missing" else str(first.get("input"))
            error = RowImportError(column, first["msg"], value)
        except RowImportError as e:
            error = e
        else:
            getattr(store, target.create)(fields)
            successful.append(ImportedRow(row=row_number, data=payload.model_dump(mode="json", exclude_unset=True)))
            continue

        logger.debug("%s import row %s rejected: %s", entity_key, row_number, error)
        failed.append(FailedRow(row=row_number, data=data, error=str(error)))
        errors.append(ImportErrorDetail(row=row_number, field=error.field, message=error.message, value=error.value))

    summary = ImportSummary(total=len(rows), successful=len(successful), failed=len(failed))
    logger.info(
        "%s import: %s rows, %s created, %s failed",
        entity_key, summary.total, summary.successful, summary.failed,
    )
    return ImportResult(successful=successful, failed=failed, summary=summary, errors=errors)


def import_file(store: CatalogStore, entity_key: str, filename: str, content: bytes) -> ImportResult:
    return import_rows(store, entity_key, read_rows(filename, content))
