import pytest

from header_validation import (
    DUPLICATE_TITLE,
    TITLE_REQUIRED,
    all_valid,
    header_error,
    rename_error,
    validate_headers,
)


@pytest.mark.parametrize(
    "headers, editable, expected",
    [
        (["a", "b"], ["a", "b"], ["", ""]),
        (["a", "b"], ["a", ""], ["", TITLE_REQUIRED]),
        (["a", "b"], ["   ", "b"], [TITLE_REQUIRED, ""]),
        (["a", "b"], ["b", "b"], [DUPLICATE_TITLE, DUPLICATE_TITLE]),
        (["a", "b"], ["c", "b"], ["", ""]),
        (["b", "b"], ["b", "b"], [DUPLICATE_TITLE, DUPLICATE_TITLE]),
        ([], [], []),
    ],
)
def test_validate_headers(headers, editable, expected):
    assert validate_headers(headers, editable) == expected


def test_rename_collision_flags_renamed_position():
    # renaming "a" to "b" while "b" exists, checked against the headers before the rename
    assert header_error(0, ["a", "b"], ["b", "b"]) == DUPLICATE_TITLE


def test_collision_with_header_whose_title_is_being_cleared():
    assert header_error(0, ["a", "b"], ["b", ""]) == DUPLICATE_TITLE


def test_retyping_own_name_is_valid():
    assert header_error(0, ["a", "b"], ["a", "b"]) == ""


def test_rename_error_checks_every_other_position():
    assert rename_error(1, ["a", "b"], "a") == DUPLICATE_TITLE
    assert rename_error(0, ["a", "b"], "b") == DUPLICATE_TITLE
    assert rename_error(2, ["a", "b", "column_3"], "column_3") == ""
    assert rename_error(0, ["a", "b"], " ") == TITLE_REQUIRED


def test_all_valid():
    assert all_valid(["", ""])
    assert all_valid([])
    assert not all_valid(["", TITLE_REQUIRED])
