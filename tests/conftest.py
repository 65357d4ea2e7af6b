from __future__ import annotations

import pytest

from facility_report.models import (
    CategoryEntry,
    Column,
    ColumnKind,
    Facility,
    RequirementGroup,
    Table,
)


def make_attributes(rows: list[tuple] | None = None) -> Table:
    return Table(
        columns=[
            Column("RowId", ColumnKind.INTEGER, auto_increment=True),
            Column("Attribute", ColumnKind.TEXT),
            Column("Provided", ColumnKind.INTEGER),
            Column("Value", ColumnKind.OTHER),
        ],
        rows=rows
        if rows is not None
        else [
            (1, "Width", 3, 0.9),
            (2, "FireRating", 1, None),
        ],
    )


def make_group(name: str = "Doors", rows: list[tuple] | None = None) -> RequirementGroup:
    return RequirementGroup(
        name=name,
        external_system="DPoW",
        external_id=f"{name}-01",
        categories=[CategoryEntry("Uniclass2015", "Pr_30_59_24", "Doorsets")],
        attributes=make_attributes(rows),
    )


@pytest.fixture
def doors_facility() -> Facility:
    return Facility(name="Lakeside", requirement_groups=[make_group("Doors")])


@pytest.fixture
def three_group_facility() -> Facility:
    return Facility(
        name="Lakeside",
        requirement_groups=[make_group("Doors"), make_group("Windows"), make_group("Doors")],
    )


@pytest.fixture
def group_factory():
    return make_group
