"""I/O helpers — load a facility validation result from JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from facility_report.models import (
    CategoryEntry,
    Column,
    ColumnKind,
    Facility,
    RequirementGroup,
    Table,
)

# ── Parsing ──────────────────────────────────────────────────────


def _expect(obj: Any, kind: type, where: str) -> Any:
    if not isinstance(obj, kind):
        raise ValueError(f"{where} must be a JSON {kind.__name__}, got {type(obj).__name__}")
    return obj


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key} must be a string")
    return value


def parse_table(data: Any, where: str = "table") -> Table:
    """Build a :class:`Table` from ``{"columns": [...], "rows": [...]}``.

    Rows are positional lists or objects keyed by column caption; a missing
    key or ``null`` is an absent value.
    """
    data = _expect(data, dict, where)
    columns: list[Column] = []
    for idx, raw in enumerate(_expect(data.get("columns", []), list, f"{where}.columns")):
        col_where = f"{where}.columns[{idx}]"
        if isinstance(raw, str):
            columns.append(Column(raw))
            continue
        raw = _expect(raw, dict, col_where)
        caption = raw.get("caption")
        if not isinstance(caption, str):
            raise ValueError(f"{col_where}.caption must be a string")
        kind = raw.get("kind", ColumnKind.TEXT.value)
        if not isinstance(kind, str):
            raise ValueError(f"{col_where}.kind must be a string")
        columns.append(
            Column(
                caption=caption,
                kind=ColumnKind.parse(kind),
                auto_increment=bool(raw.get("auto_increment", False)),
            )
        )

    rows: list[tuple[Any, ...]] = []
    captions = [col.caption for col in columns]
    for idx, raw_row in enumerate(_expect(data.get("rows", []), list, f"{where}.rows")):
        if isinstance(raw_row, dict):
            unknown = sorted(set(raw_row) - set(captions))
            if unknown:
                raise ValueError(f"{where}.rows[{idx}] has unknown columns: {', '.join(unknown)}")
            rows.append(tuple(raw_row.get(caption) for caption in captions))
        elif isinstance(raw_row, list):
            if len(raw_row) != len(columns):
                raise ValueError(
                    f"{where}.rows[{idx}] has {len(raw_row)} values, expected {len(columns)}"
                )
            rows.append(tuple(raw_row))
        else:
            raise ValueError(f"{where}.rows[{idx}] must be a JSON list or object")
    return Table(columns=columns, rows=rows)


def parse_facility(data: Any) -> Facility:
    data = _expect(data, dict, "facility")
    groups: list[RequirementGroup] = []
    raw_groups = _expect(data.get("requirement_groups", []), list, "requirement_groups")
    for idx, raw in enumerate(raw_groups):
        where = f"requirement_groups[{idx}]"
        raw = _expect(raw, dict, where)
        name = raw.get("name")
        if not isinstance(name, str):
            raise ValueError(f"{where}.name must be a string")

        categories = []
        for c_idx, cat in enumerate(_expect(raw.get("categories", []), list, f"{where}.categories")):
            cat_where = f"{where}.categories[{c_idx}]"
            cat = _expect(cat, dict, cat_where)
            categories.append(
                CategoryEntry(
                    classification=_optional_str(cat, "classification", cat_where) or "",
                    code=_optional_str(cat, "code", cat_where) or "",
                    description=_optional_str(cat, "description", cat_where) or "",
                )
            )

        groups.append(
            RequirementGroup(
                name=name,
                external_system=_optional_str(raw, "external_system", where),
                external_id=_optional_str(raw, "external_id", where),
                categories=categories,
                attributes=parse_table(raw.get("attributes", {}), f"{where}.attributes"),
            )
        )

    name = data.get("name", "")
    if not isinstance(name, str):
        raise ValueError("facility.name must be a string")
    return Facility(name=name, requirement_groups=groups)


# ── Loading ──────────────────────────────────────────────────────


def load_facility(path: Path) -> Facility:
    """Load a facility validation result from a JSON document.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the document is not valid JSON or does not describe a facility.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if path.is_dir():
        raise ValueError(f"Input is a directory, not a file: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except UnicodeDecodeError as exc:
        raise ValueError(f"Could not decode {path} as UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Could not parse JSON {path}: {exc}") from exc
    return parse_facility(data)
