from typing import Optional


def strip_required(v: Optional[str]) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("field is required")
    return v


def blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def strip_optional(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return strip_required(v)
