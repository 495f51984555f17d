"""Sheet fetching, CSV tokenizing, header resolution, and the refresh controller."""
from .loader import tokenize_csv, parse_registrants, fetch_sheet_csv
from .normalize import resolve_headers, build_registrants
from .schemas import CanonicalField, Registrant, Loading, Success, Failure, RefreshSnapshot, quota_remaining
from .store import RefreshController
