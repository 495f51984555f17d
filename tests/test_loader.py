import pytest
import requests

from khitan_board.data import loader
from khitan_board.data.errors import TransportError, EmptySourceError
from khitan_board.data.loader import tokenize_csv, split_line, parse_registrants, fetch_sheet_csv


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def test_tokenize_drops_blank_lines_and_mixed_line_endings():
    text = 'a,b\r\n\n   \nc,"d,e"\n'
    assert tokenize_csv(text) == [["a", "b"], ["c", "d,e"]]


def test_fields_are_trimmed_inside_and_outside_quotes():
    assert split_line('  a , "  b  " ,c  ') == ["a", "b", "c"]


def test_empty_fields_are_kept():
    assert split_line("a,,b,") == ["a", "", "b", ""]


def test_doubled_quote_is_not_an_escape():
    # "" toggles twice, so the quotes vanish instead of producing a literal quote
    assert split_line('"say ""hi""",2') == ["say hi", "2"]


def test_unbalanced_quote_swallows_rest_of_line():
    assert split_line('x,"y,z') == ["x", "y,z"]


def test_quoted_newline_is_split_into_separate_rows():
    rows = tokenize_csv('name,address\nAli,"Jl. X\nBekasi"\n')
    assert rows == [["name", "address"], ["Ali", "Jl. X"], ["Bekasi"]]


def test_rejoined_fields_round_trip():
    logical_rows = [
        ["Nama Anak", "Alamat"],
        ["Ali", "Jl. Mawar, Bekasi"],
        ["Siti", "RT 01, RW 02, Bogor"],
    ]

    def quote(field):
        return f'"{field}"' if "," in field else field

    text = "\n".join(",".join(quote(f) for f in row) for row in logical_rows)
    assert tokenize_csv(text) == logical_rows


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def test_parse_registrants_from_form_export(sheet_csv):
    registrants = parse_registrants(sheet_csv)

    assert [r.sequence_number for r in registrants] == [1, 2]
    first, second = registrants
    assert first.name == "Ahmad Fauzi"
    assert first.birth_info == "Bekasi, 12 Mei 2016"
    assert first.father_name == "Rahmat"
    assert first.mother_name == "Siti Aminah"
    assert first.phone == "081234567890"
    assert first.address == "Jl. Melati No. 5, Bekasi"
    assert second.name == "Bima Saputra"
    assert second.mother_name == ""
    assert second.address == ""


def test_header_only_sheet_is_valid_and_empty():
    assert parse_registrants("Nama Anak,TTL,Ayah\n") == []


@pytest.mark.parametrize("text", ["", "\n", "  \r\n \n"])
def test_blank_body_raises_empty_source(text):
    with pytest.raises(EmptySourceError, match="Sheet kosong"):
        parse_registrants(text)


# ---------------------------------------------------------------------------
# Download
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, status_code, content=b""):
        self.status_code = status_code
        self.content = content


def test_fetch_disables_caching_and_strips_bom(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen.update(url=url, headers=headers, timeout=timeout)
        return FakeResponse(200, b"\xef\xbb\xbfNama Anak\nAli\n")

    monkeypatch.setattr(loader.requests, "get", fake_get)

    text = fetch_sheet_csv("https://example.test/sheet.csv", timeout=3)

    assert text == "Nama Anak\nAli\n"
    assert seen["url"] == "https://example.test/sheet.csv"
    assert seen["timeout"] == 3
    assert "no-cache" in seen["headers"]["Cache-Control"]
    assert seen["headers"]["Pragma"] == "no-cache"


def test_fetch_non_2xx_is_transport_error_with_status(monkeypatch):
    monkeypatch.setattr(loader.requests, "get", lambda *a, **kw: FakeResponse(404))

    with pytest.raises(TransportError) as excinfo:
        fetch_sheet_csv("https://example.test/sheet.csv")

    assert excinfo.value.status_code == 404
    assert "status 404" in str(excinfo.value)


def test_fetch_network_failure_is_transport_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(loader.requests, "get", boom)

    with pytest.raises(TransportError) as excinfo:
        fetch_sheet_csv("https://example.test/sheet.csv")

    assert excinfo.value.status_code is None
    assert "ConnectionError" in str(excinfo.value)
