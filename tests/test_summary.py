from __future__ import annotations

from facility_report.models import CategoryEntry, Facility, RequirementGroup
from facility_report.summary import SUMMARY_COLUMNS, build_summary_table, preferred_category


def test_preferred_category_prefers_scheme_case_insensitively() -> None:
    group = RequirementGroup(
        name="Doors",
        categories=[
            CategoryEntry("NRM1", "2.8", "Internal doors"),
            CategoryEntry("uniclass2015", "Pr_30_59_24", "Doorsets"),
        ],
    )

    assert preferred_category(group, "Uniclass2015").code == "Pr_30_59_24"
    assert preferred_category(group, "OmniClass").code == "2.8"
    assert preferred_category(RequirementGroup(name="x"), "Uniclass2015") is None


def test_summary_rows_follow_groups_with_preferred_first(group_factory) -> None:
    unclassified = RequirementGroup(
        name="Pumps", categories=[CategoryEntry("NRM1", "5.6", "Pumps")]
    )
    facility = Facility(
        name="Site",
        requirement_groups=[unclassified, group_factory("Doors"), group_factory("Windows")],
    )

    table = build_summary_table(facility, "Uniclass2015")

    assert table.columns == SUMMARY_COLUMNS
    assert [row[1] for row in table.rows] == ["Doors", "Windows", "Pumps"]
    assert [row[0] for row in table.rows] == [1, 2, 3]
    assert table.rows[0][2:] == ("Uniclass2015", "Pr_30_59_24", "Doorsets", 1, 2)
    assert table.rows[2][2:5] == ("NRM1", "5.6", "Pumps")


def test_summary_marks_missing_classification_as_absent() -> None:
    facility = Facility(requirement_groups=[RequirementGroup(name="Bare")])

    table = build_summary_table(facility, "Uniclass2015")

    assert table.rows == [(1, "Bare", None, None, None, 0, 0)]


def test_summary_of_empty_facility_has_header_only() -> None:
    table = build_summary_table(Facility(), "Uniclass2015")

    assert table.rows == []
    assert table.columns[0].auto_increment is True
