from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a whole number") from exc


def optional_text(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None
