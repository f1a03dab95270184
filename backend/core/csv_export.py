import csv
import io
from datetime import date
from typing import Any, Iterable, List, Optional

from fastapi.responses import Response
from pydantic import BaseModel

from core.config import settings

# Column order shared by exports and import templates, so exports re-import as-is
TEMPLATE_COLUMNS = {
    "commodities": ["name", "description", "uom_id", "density", "energy_uom", "is_active"],
    "uoms": ["name", "description", "type", "base_uom", "is_active"],
    "locations": ["name", "location_type", "address", "counterparty_id", "is_active"],
    "counter_parties": ["name", "type", "contact_info", "credit_status", "is_active"],
    "blends": ["name", "commodity_id", "description", "is_active"],
    "blend_components": ["blend_id", "component_commodity_id", "percentage", "is_active"],
    "capacity": [
        "commodity_id",
        "location_id",
        "capacity_type",
        "quantity",
        "start_date",
        "end_date",
        "is_active",
    ],
}

GENERIC_TEMPLATE_COLUMNS = ["column1", "column2"]


def render_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def build_csv(records: Iterable[BaseModel], columns: List[str], delimiter: Optional[str] = None) -> str:
    """Render records as delimited text, one header line then one line per record.

    Cells containing the delimiter, a quote or a line break are quoted.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter or settings.csv_delimiter, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow([render_cell(getattr(record, column, None)) for column in columns])
    return buf.getvalue()


def export_entity(records: Iterable[BaseModel], entity_key: str) -> str:
    return build_csv(records, TEMPLATE_COLUMNS[entity_key])


def template_csv(entity_key: str) -> str:
    return build_csv([], TEMPLATE_COLUMNS.get(entity_key, GENERIC_TEMPLATE_COLUMNS))


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
