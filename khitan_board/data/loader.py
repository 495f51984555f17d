"""
Sheet download, CSV tokenizing, and the text → registrants pipeline.
"""
from __future__ import annotations

import re

import requests

from khitan_board.config import (
    SHEET_CSV_URL, FETCH_TIMEOUT_SECONDS, NO_CACHE_HEADERS,
    MSG_HTTP_STATUS, MSG_UNREACHABLE, MSG_EMPTY_SHEET,
)
from khitan_board.data.errors import TransportError, EmptySourceError
from khitan_board.data.normalize import resolve_headers, build_registrants
from khitan_board.data.schemas import Registrant


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_line(line: str) -> list[str]:
    """Split one line on commas outside double quotes.

    Single-pass quote toggle: a `"` flips quoted state and is dropped.
    There is no `""` escape and unbalanced quotes simply carry to the end
    of the line. Fields come back trimmed.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
            continue
        if ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
            continue
        current.append(ch)
    fields.append("".join(current))

    return [f.strip() for f in fields]


def tokenize_csv(text: str) -> list[list[str]]:
    """Raw CSV text → rows of trimmed string fields, blank lines dropped.

    Lines are split before quote state is tracked, so a quoted field cannot
    span lines.
    """
    lines = [line for line in _LINE_BREAK_RE.split(text) if line.strip() != ""]
    return [split_line(line) for line in lines]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def parse_registrants(text: str) -> list[Registrant]:
    """Tokenize, resolve the header row, and build registrants.

    Raises EmptySourceError when there is not even a header row.
    A header-only sheet is valid and yields no registrants.
    """
    rows = tokenize_csv(text)
    if not rows:
        raise EmptySourceError(MSG_EMPTY_SHEET)

    mapping = resolve_headers(rows[0])
    return build_registrants(mapping, rows[1:])


# ---------------------------------------------------------------------------
# Download
# ---------------------------------------------------------------------------

def fetch_sheet_csv(url: str = SHEET_CSV_URL, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    """GET the published sheet as CSV text. Caching is disabled on every request."""
    try:
        resp = requests.get(url, headers=NO_CACHE_HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(MSG_UNREACHABLE.format(reason=type(exc).__name__)) from exc

    if resp.status_code // 100 != 2:
        raise TransportError(MSG_HTTP_STATUS.format(status=resp.status_code), status_code=resp.status_code)

    # The export is UTF-8; decode bytes ourselves so a missing charset never falls back to latin-1
    return resp.content.decode("utf-8-sig", errors="replace")
