import pytest

from khitan_board.data.normalize import resolve_headers, build_registrants
from khitan_board.data.schemas import CanonicalField, quota_remaining

F = CanonicalField


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------

def test_short_headers_resolve_to_matching_columns():
    mapping = resolve_headers(["Nama Anak", "TTL", "Ayah", "Ibu", "No WA", "Alamat"])
    assert dict(mapping) == {
        F.NAME: 0,
        F.BIRTH_INFO: 1,
        F.FATHER_NAME: 2,
        F.MOTHER_NAME: 3,
        F.PHONE: 4,
        F.ADDRESS: 5,
    }


def test_earlier_candidate_beats_leftmost_column():
    # "nama" would hit column 1 first, but "nama anak" is tried before it
    mapping = resolve_headers(["Timestamp", "Nama Ayah", "Nama Anak"])
    assert mapping[F.NAME] == 2
    assert mapping[F.FATHER_NAME] == 1


def test_leftmost_column_wins_for_same_candidate():
    mapping = resolve_headers(["Alamat Rumah", "Alamat Kantor"])
    assert mapping[F.ADDRESS] == 0


def test_matching_is_case_insensitive_substring():
    mapping = resolve_headers(["NO HANDPHONE AKTIF", "ALAMAT LENGKAP"])
    assert mapping[F.PHONE] == 0
    assert mapping[F.ADDRESS] == 1


def test_shared_substring_can_claim_an_unintended_column():
    mapping = resolve_headers(["Nama Ibu", "Kota"])
    assert mapping[F.NAME] == 0
    assert mapping[F.MOTHER_NAME] == 0


def test_blank_header_row_leaves_every_field_unresolved():
    first = resolve_headers(["", "", ""])
    second = resolve_headers(["", "", ""])
    assert dict(first) == dict(second)
    assert all(index is None for index in first.values())


def test_mapping_is_read_only():
    mapping = resolve_headers(["Nama Anak"])
    with pytest.raises(TypeError):
        mapping[F.NAME] = 3


# ---------------------------------------------------------------------------
# Record building
# ---------------------------------------------------------------------------

def test_single_row_builds_numbered_record():
    mapping = resolve_headers(["Nama Anak", "TTL", "Ayah", "Ibu", "No WA", "Alamat"])
    registrants = build_registrants(mapping, [["Ali", "2015-01-01", "Udin", "Siti", "0812...", "Jl. X"]])

    assert len(registrants) == 1
    ali = registrants[0]
    assert ali.sequence_number == 1
    assert ali.name == "Ali"
    assert ali.birth_info == "2015-01-01"
    assert ali.father_name == "Udin"
    assert ali.mother_name == "Siti"
    assert ali.phone == "0812..."
    assert ali.address == "Jl. X"


def test_blank_names_are_dropped_without_consuming_numbers():
    mapping = resolve_headers(["Alamat", "Nama Anak"])
    rows = [
        ["Jl. A", "Ali"],
        ["Jl. B", "   "],
        [],
        ["Jl. C", "Budi"],
    ]
    registrants = build_registrants(mapping, rows)

    assert [(r.sequence_number, r.name, r.address) for r in registrants] == [
        (1, "Ali", "Jl. A"),
        (2, "Budi", "Jl. C"),
    ]


def test_short_and_long_rows_degrade_gracefully():
    mapping = resolve_headers(["Nama Anak", "TTL", "Ayah", "Ibu", "No WA", "Alamat"])
    registrants = build_registrants(mapping, [["Citra"], ["Dewi", "a", "b", "c", "d", "e", "extra", "more"]])

    assert registrants[0].name == "Citra"
    assert registrants[0].address == ""
    assert registrants[1].address == "e"


def test_unresolved_fields_fall_back_to_position():
    mapping = resolve_headers(["", "", "", "", "", ""])
    registrants = build_registrants(mapping, [["Eka", "2016", "Fajar", "Gita", "0857", "Jl. Y"]])

    eka = registrants[0]
    assert (eka.name, eka.birth_info, eka.father_name, eka.mother_name, eka.phone, eka.address) == (
        "Eka", "2016", "Fajar", "Gita", "0857", "Jl. Y",
    )


def test_partial_resolution_mixes_mapped_and_positional_columns():
    mapping = resolve_headers(["Nama Lengkap", "Kota"])
    registrants = build_registrants(mapping, [["Hana", "Depok", "Iwan"]])

    assert registrants[0].name == "Hana"
    assert registrants[0].birth_info == "Depok"   # fallback index 1
    assert registrants[0].father_name == "Iwan"  # fallback index 2
    assert registrants[0].phone == ""


# ---------------------------------------------------------------------------
# Quota
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("registered, expected", [(0, 50), (49, 1), (50, 0), (73, 0)])
def test_quota_remaining_never_negative(registered, expected):
    assert quota_remaining(registered, 50) == expected
