"""Map a row picked from a filtered view back to its storage position.

Flat tables have no key column: a row's only identity is its position in
the unfiltered table. A row selected in a searched or sorted view is
located again by exact field-wise equality against the full table.

When two rows are identical the first one wins, so an edit meant for the
second duplicate lands on the first. If the table changed after the view
was rendered the row may no longer be found, or may match a different row
that happens to hold the same values.
"""

from typing import List, Optional, Sequence


def records_equal(left: Sequence[str], right: Sequence[str]) -> bool:
    """True when both records have the same cells in the same order."""
    return len(left) == len(right) and all(a == b for a, b in zip(left, right))


def resolve_index(
    collection: Sequence[Sequence[str]], selected: Sequence[str]
) -> Optional[int]:
    """Find the storage position of a selected record.

    Args:
        collection: Full unfiltered records, header excluded
        selected: Record value taken from the filtered view

    Returns:
        0-based position of the first equal record, or None if absent

    Example:
        >>> resolve_index([["A", "1"], ["B", "2"], ["A", "1"]], ["A", "1"])
        0
        >>> resolve_index([["A", "1"]], ["C", "3"]) is None
        True
    """
    for index, record in enumerate(collection):
        if records_equal(record, selected):
            return index
    return None


def filter_records(
    collection: Sequence[Sequence[str]], search_term: Optional[str]
) -> List[List[str]]:
    """Search view of a table: rows with any cell containing the term.

    Matching is case-insensitive. An empty term returns every row.

    Example:
        >>> filter_records([["Guindy", "Area 1"], ["Padi", "Area 2"]], "area 2")
        [['Padi', 'Area 2']]
    """
    rows = [list(record) for record in collection]
    if not search_term:
        return rows
    needle = search_term.lower()
    return [row for row in rows if any(needle in cell.lower() for cell in row)]
