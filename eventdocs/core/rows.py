from __future__ import annotations

from typing import Any


def row_get(row: Any, name: str, default: Any = None) -> Any:
    """
    Read one field from a row, whether the row is a dict (raw row from the
    data store), a pydantic model, a SQLModel row or a dataclass.
    Missing fields give default.
    """
    if row is None:
        return default
    if isinstance(row, dict):
        return row.get(name, default)
    return getattr(row, name, default)


def row_id(row: Any) -> Any:
    return row_get(row, "id")


def to_float(value: Any) -> float:
    """
    Read an amount or quantity as float. None, empty or garbage → 0.0.
    """
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
