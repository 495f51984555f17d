"""
Report download endpoints — printable PDF and Excel registrant lists.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from khitan_board.config import MAX_QUOTA
from khitan_board.data.store import RefreshController
from khitan_board.api.dependencies import get_controller
from khitan_board.reports import registrant_report

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/registrants.{fmt}")
def download_registrants(fmt: str, controller: RefreshController = Depends(get_controller)):
    """Render the current list; unavailable mid-fetch or while nobody is registered."""
    generator = registrant_report.GENERATORS.get(fmt)
    if generator is None:
        raise HTTPException(404, f"Unknown report format: {fmt}. Valid: {list(registrant_report.GENERATORS)}")

    snap = controller.snapshot()
    if not snap.can_export:
        reason = "Data is still loading" if snap.loading else "No registrants yet"
        raise HTTPException(409, reason)

    now = dt.datetime.now()
    content = generator(snap.registrants, MAX_QUOTA, now)
    filename = registrant_report.report_filename(now, fmt)
    return Response(
        content=content,
        media_type=registrant_report.MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
