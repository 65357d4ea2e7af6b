from __future__ import annotations

import pytest

from facility_report.naming import MAX_SHEET_NAME_LENGTH, SheetNamer, safe_sheet_name

_FORBIDDEN = set(':\\/?*[]')


def test_safe_sheet_name_replaces_forbidden_characters() -> None:
    assert safe_sheet_name("Doors: [int/ext]?*\\") == "Doors   int ext    "


def test_safe_sheet_name_truncates_to_limit() -> None:
    name = safe_sheet_name("x" * 40)

    assert len(name) == MAX_SHEET_NAME_LENGTH


@pytest.mark.parametrize("raw", ["", None])
def test_safe_sheet_name_maps_empty_to_placeholder(raw: str | None) -> None:
    assert safe_sheet_name(raw) == "empty"


def test_safe_sheet_name_replaces_edge_apostrophes() -> None:
    assert safe_sheet_name("'quoted'") == " quoted "


def test_namer_prefixes_running_counter() -> None:
    namer = SheetNamer()

    assert namer.next_name("Doors") == "1 Doors"
    assert namer.next_name("Windows") == "2 Windows"
    assert namer.counter == 3


def test_namer_keeps_duplicate_labels_distinct() -> None:
    namer = SheetNamer()

    names = [namer.next_name("Doors") for _ in range(12)]

    assert len(set(names)) == 12


def test_namer_resolves_collisions_after_truncation() -> None:
    namer = SheetNamer(start=1)
    long_label = "A" * 40
    first = namer.next_name(long_label)
    namer.counter = 1

    second = namer.next_name(long_label)

    assert first != second
    assert second.endswith(" (2)")
    assert len(second) <= MAX_SHEET_NAME_LENGTH


def test_namer_treats_reserved_names_case_insensitively() -> None:
    namer = SheetNamer(reserved=("Summary", "1 DOORS"))

    assert namer.next_name("doors") == "1 doors (2)"


@pytest.mark.parametrize(
    "labels",
    [
        ["Doors", "Doors", "Doors"],
        ["A/B", "A\\B", "A?B", "A*B", "[AB]"],
        ["Very long requirement group label exceeding the limit"] * 3,
        ["", None, "'"],
    ],
)
def test_namer_output_is_unique_and_valid(labels: list[str | None]) -> None:
    namer = SheetNamer()

    names = [namer.next_name(label) for label in labels]

    assert len({n.casefold() for n in names}) == len(names)
    for name in names:
        assert 0 < len(name) <= MAX_SHEET_NAME_LENGTH
        assert not (set(name) & _FORBIDDEN)
        assert not name.startswith("'")
        assert not name.endswith("'")


def test_safe_sheet_name_replaces_control_characters() -> None:
    assert safe_sheet_name("Doors\x00Frames\t\n") == "Doors Frames  "


def test_namer_never_emits_control_characters() -> None:
    assert SheetNamer().next_name("Doors\x00Frames") == "1 Doors Frames"
