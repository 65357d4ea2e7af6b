"""Facility summary table — one row per requirement group."""

from __future__ import annotations

from facility_report.models import CategoryEntry, Column, ColumnKind, Facility, RequirementGroup, Table

SUMMARY_COLUMNS: list[Column] = [
    Column("Row", ColumnKind.INTEGER, auto_increment=True),
    Column("Asset type", ColumnKind.TEXT),
    Column("Classification", ColumnKind.TEXT),
    Column("Code", ColumnKind.TEXT),
    Column("Description", ColumnKind.TEXT),
    Column("Matching categories", ColumnKind.INTEGER),
    Column("Attribute rows", ColumnKind.INTEGER),
]


def preferred_category(
    group: RequirementGroup, preferred_classification: str
) -> CategoryEntry | None:
    """Return the group's first category in the preferred scheme, else its first one."""
    wanted = (preferred_classification or "").strip().casefold()
    for cat in group.categories:
        if wanted and (cat.classification or "").strip().casefold() == wanted:
            return cat
    return group.categories[0] if group.categories else None


def build_summary_table(facility: Facility, preferred_classification: str) -> Table:
    """Summarise *facility*; groups classified in the preferred scheme sort first."""
    wanted = (preferred_classification or "").strip().casefold()
    ranked = sorted(
        facility.requirement_groups,
        key=lambda g: not any(
            wanted and (c.classification or "").strip().casefold() == wanted
            for c in g.categories
        ),
    )

    rows = []
    for row_id, group in enumerate(ranked, 1):
        cat = preferred_category(group, preferred_classification)
        rows.append(
            (
                row_id,
                group.name,
                cat.classification if cat else None,
                cat.code if cat else None,
                cat.description if cat else None,
                len(group.categories),
                len(group.attributes.rows),
            )
        )
    return Table(columns=list(SUMMARY_COLUMNS), rows=rows)
