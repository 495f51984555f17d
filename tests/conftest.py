import datetime as dt

import pytest

from khitan_board.data.schemas import Registrant

# Header row as the Google Form writes it, with a leading timestamp column
SHEET_CSV = (
    "Timestamp,Nama Anak / Peserta,Tanggal Lahir,Nama Ayah / Wali,Nama Ibu,No HP / WhatsApp,Alamat Lengkap\r\n"
    '01/07/2025 09:00:00,Ahmad Fauzi,"Bekasi, 12 Mei 2016",Rahmat,Siti Aminah,081234567890,"Jl. Melati No. 5, Bekasi"\r\n'
    "01/07/2025 09:05:00,   ,2017-01-01,Budi,Ani,0813,Jl. Kenanga\r\n"
    "\r\n"
    "01/07/2025 09:10:00,Bima Saputra,2015-03-02,Joko,,0857,\r\n"
)

FIXED_NOW = dt.datetime(2025, 7, 1, 9, 30, 0)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def sheet_csv():
    return SHEET_CSV


@pytest.fixture
def make_registrants():
    def _make(count: int, address: str = "Jl. Masjid Al Hidayah") -> list[Registrant]:
        return [
            Registrant(
                sequence_number=i,
                name=f"Anak {i}",
                birth_info="2016-01-01",
                father_name=f"Ayah {i}",
                mother_name=f"Ibu {i}",
                phone="" if i % 3 == 0 else f"0812000{i:04d}",
                address=address,
            )
            for i in range(1, count + 1)
        ]
    return _make
