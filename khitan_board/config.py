"""
Khitan Board — Configuration: source URL, quota, refresh cadence, header rules.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Data source: override with KHITAN_SHEET_CSV_URL for another sheet/tab
# ---------------------------------------------------------------------------
SHEET_CSV_URL = os.environ.get(
    "KHITAN_SHEET_CSV_URL",
    "https://docs.google.com/spreadsheets/d/1YfG_YoJbRCMVEbLuzcxq-d_Gxv1c1i59iN4tWQCcloo"
    "/export?format=csv&gid=1769997494",
)
FETCH_TIMEOUT_SECONDS = float(os.environ.get("KHITAN_FETCH_TIMEOUT", "15"))

# Sent on every fetch so proxies and the sheet export never serve a stale copy
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}

# ---------------------------------------------------------------------------
# Refresh cadence + quota
# ---------------------------------------------------------------------------
REFRESH_INTERVAL_SECONDS = float(os.environ.get("KHITAN_REFRESH_SECONDS", "30"))

# Display/report arithmetic only: registrants beyond the quota are still listed
MAX_QUOTA = int(os.environ.get("KHITAN_MAX_QUOTA", "50"))

# ---------------------------------------------------------------------------
# Paths: override with KHITAN_DATA_DIR for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("KHITAN_DATA_DIR", str(Path.home() / "Khitan Board")))
BASE_FOLDER = _data_dir
REPORTS_FOLDER = _data_dir / "reports"

# ---------------------------------------------------------------------------
# Header candidates per canonical field (order matters: first match wins).
# Matched as lower-case substrings against the sheet's header row.
# ---------------------------------------------------------------------------
HEADER_CANDIDATES = {
    "name": ["nama anak", "nama anak/ peserta", "nama", "nama anak"],
    "birth_info": ["tanggal lahir", "tgl lahir", "ttl", "tanggal"],
    "father_name": ["nama ayah", "ayah", "nama ayah / wali"],
    "mother_name": ["nama ibu", "ibu"],
    "phone": ["no hp", "no handphone", "whatsapp", "no wa", "phone", "hp"],
    "address": ["alamat", "address"],
}

# ---------------------------------------------------------------------------
# User-facing messages (the sheet is maintained by Indonesian-speaking staff)
# ---------------------------------------------------------------------------
MSG_HTTP_STATUS = "Tidak dapat memuat data sheet (status {status})"
MSG_UNREACHABLE = "Tidak dapat memuat data sheet ({reason})"
MSG_EMPTY_SHEET = "Sheet kosong"

# ---------------------------------------------------------------------------
# Report texts
# ---------------------------------------------------------------------------
REPORT_TITLE = "Daftar Pendaftar Bakti Amal Khitan"
REPORT_SUBTITLES = [
    "Masjid Al Hidayah - Periode ke-8",
    "Tahun 1447 H / 2025 M",
]
REPORT_FILE_STEM = "Daftar_Pendaftar_Bakti_Khitan"
REPORT_PLACEHOLDER = "-"

# (key, label, relative width): fixed column order of the printed table
REPORT_COLUMNS = [
    ("sequence_number", "No", 0.05),
    ("name", "Nama Anak", 0.17),
    ("birth_info", "Tanggal Lahir", 0.12),
    ("father_name", "Nama Ayah", 0.15),
    ("mother_name", "Nama Ibu", 0.15),
    ("phone", "No HP / WhatsApp", 0.13),
    ("address", "Alamat", 0.23),
]
