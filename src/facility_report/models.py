"""Data models shared by the renderer and its collaborators."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd


class ColumnKind(str, Enum):
    """Closed set of scalar kinds a table column may declare."""

    TEXT = "text"
    INTEGER = "integer"
    OTHER = "other"

    @classmethod
    def parse(cls, name: str) -> ColumnKind:
        """Resolve a kind from its name; unknown names fall back to ``OTHER``."""
        if not isinstance(name, str):
            raise TypeError("column kind must be a string")
        normalized = name.strip().lower()
        if normalized in ("string", "str"):
            return cls.TEXT
        if normalized in ("int", "int32", "int64"):
            return cls.INTEGER
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER

    @classmethod
    def from_series(cls, series: pd.Series) -> ColumnKind:
        inferred = pd.api.types.infer_dtype(series, skipna=True)
        if inferred == "string":
            return cls.TEXT
        if inferred == "integer":
            return cls.INTEGER
        return cls.OTHER


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


@dataclass(frozen=True)
class Column:
    caption: str
    kind: ColumnKind = ColumnKind.TEXT
    auto_increment: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.caption, str):
            raise TypeError("caption must be a string")
        if not isinstance(self.kind, ColumnKind):
            raise TypeError("kind must be a ColumnKind")


@dataclass
class Table:
    """Typed columns plus rows of optional values.

    Contract invariant: every row holds exactly one value per column, with
    ``None`` marking an absent value.
    """

    columns: list[Column] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.columns, (str, bytes)):
            raise TypeError("columns must be a sequence of Column")
        self.columns = list(self.columns)
        for col in self.columns:
            if not isinstance(col, Column):
                raise TypeError("columns items must be Column instances")

        width = len(self.columns)
        normalized: list[tuple[Any, ...]] = []
        for idx, row in enumerate(self.rows):
            if isinstance(row, (str, bytes)):
                raise TypeError(f"row {idx} must be a sequence of values")
            values = tuple(row)
            if len(values) != width:
                raise ValueError(
                    f"row {idx} has {len(values)} values, expected {width}"
                )
            normalized.append(values)
        self.rows = normalized

    @property
    def rendered_columns(self) -> list[Column]:
        """Columns that produce grid cells (auto-numbering columns excluded)."""
        return [col for col in self.columns if not col.auto_increment]

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        *,
        auto_increment: Iterable[str] = (),
        captions: Mapping[str, str] | None = None,
    ) -> Table:
        """Build a table from *df*, resolving each column's kind once.

        Every pandas missing marker (``NaN``, ``NaT``, ``pd.NA``) becomes ``None``.
        """
        auto = set(auto_increment)
        captions = captions or {}
        columns = [
            Column(
                caption=captions.get(str(name), str(name)),
                kind=ColumnKind.from_series(df[name]),
                auto_increment=str(name) in auto,
            )
            for name in df.columns
        ]
        rows = [
            tuple(None if _is_absent(val) else val for val in row_vals)
            for row_vals in df.itertuples(index=False, name=None)
        ]
        return cls(columns=columns, rows=rows)


@dataclass(frozen=True)
class CategoryEntry:
    classification: str = ""
    code: str = ""
    description: str = ""


@dataclass
class RequirementGroup:
    """One asset-type requirement category of a facility."""

    name: str
    external_system: str | None = None
    external_id: str | None = None
    categories: list[CategoryEntry] = field(default_factory=list)
    attributes: Table = field(default_factory=Table)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError("name must be a string")
        self.categories = list(self.categories)
        if not isinstance(self.attributes, Table):
            raise TypeError("attributes must be a Table")


@dataclass
class Facility:
    """Root validation result handed to the report."""

    name: str = ""
    requirement_groups: Sequence[RequirementGroup] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.requirement_groups = list(self.requirement_groups)
