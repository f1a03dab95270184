from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ImportedRow(BaseModel):
    row: int
    data: Dict[str, Any]


class FailedRow(BaseModel):
    row: int
    data: Dict[str, Any]
    error: str


class ImportErrorDetail(BaseModel):
    row: Optional[int] = None
    field: str
    message: str
    value: Optional[str] = None


class ImportSummary(BaseModel):
    total: int
    successful: int
    failed: int


class ImportResult(BaseModel):
    successful: List[ImportedRow] = []
    failed: List[FailedRow] = []
    summary: ImportSummary
    errors: List[ImportErrorDetail] = []
