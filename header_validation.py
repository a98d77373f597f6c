"""Header title rules shared by header edits and the save gate."""

TITLE_REQUIRED = "title required"
DUPLICATE_TITLE = "duplicate title"


def _first_index(items, value) -> int:
    try:
        return items.index(value)
    except ValueError:
        return -1


def header_error(index: int, headers, editable_headers) -> str:
    """Validate ``editable_headers[index]`` against ``headers``.

    A title collides when some canonical header equals it at a position other
    than the first editable position holding the same text. Returns "" when
    the title is acceptable.
    """
    candidate = editable_headers[index]
    if candidate.strip() == "":
        return TITLE_REQUIRED
    first = _first_index(editable_headers, candidate)
    for pos, header in enumerate(headers):
        if header == candidate and pos != first:
            return DUPLICATE_TITLE
    return ""


def rename_error(index: int, headers, candidate: str) -> str:
    """Check a title typed at ``index`` against the headers as they were before the edit."""
    if candidate.strip() == "":
        return TITLE_REQUIRED
    for pos, header in enumerate(headers):
        if header == candidate and pos != index:
            return DUPLICATE_TITLE
    return ""


def validate_headers(headers, editable_headers) -> list[str]:
    return [header_error(i, headers, editable_headers) for i in range(len(editable_headers))]


def all_valid(errors) -> bool:
    return all(err == "" for err in errors)
