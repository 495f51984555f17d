"""
Header resolution and registrant record building.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from khitan_board.config import HEADER_CANDIDATES
from khitan_board.data.schemas import CanonicalField, Registrant

HeaderMapping = Mapping[CanonicalField, Optional[int]]


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------

def find_column(headers_lower: Sequence[str], candidates: Sequence[str]) -> Optional[int]:
    """Index of the leftmost header containing the first candidate that matches anywhere."""
    for candidate in candidates:
        for i, header in enumerate(headers_lower):
            if candidate in header:
                return i
    return None


def resolve_headers(
    header_row: Sequence[str],
    candidates: Mapping[str, Sequence[str]] = HEADER_CANDIDATES,
) -> HeaderMapping:
    """Map each canonical field to a column index, or None when no candidate matched.

    Sheet editors rename and reorder columns, so matching is substring
    containment against a prioritized candidate list rather than exact text.
    """
    headers_lower = [h.lower() for h in header_row]
    mapping = {
        field: find_column(headers_lower, candidates.get(field.value, []))
        for field in CanonicalField
    }
    return MappingProxyType(mapping)


# ---------------------------------------------------------------------------
# Record building
# ---------------------------------------------------------------------------

def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def resolve_value(row: Sequence[str], mapping: HeaderMapping, field: CanonicalField) -> str:
    """Mapped column if resolved, else the field's positional fallback; "" when the row is short."""
    index = mapping.get(field)
    if index is None:
        index = field.fallback_index
    return _cell(row, index) or ""


def build_registrants(mapping: HeaderMapping, data_rows: Sequence[Sequence[str]]) -> list[Registrant]:
    """Build numbered registrants from data rows, dropping rows without a name.

    Numbering follows the filtered output, not the sheet row index.
    """
    candidates = [
        {field.value: resolve_value(row, mapping, field) for field in CanonicalField}
        for row in data_rows
    ]
    named = [values for values in candidates if values["name"].strip() != ""]
    return [Registrant(sequence_number=i, **values) for i, values in enumerate(named, 1)]
