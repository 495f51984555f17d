"""
Status endpoints: health, fetch status, registrant list, manual refresh.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from khitan_board.config import MAX_QUOTA
from khitan_board.data.schemas import quota_remaining
from khitan_board.data.store import RefreshController
from khitan_board.api.dependencies import get_controller
from khitan_board.api.response_models import (
    HealthResponse, StatusResponse, RegistrantsResponse, RegistrantOut,
)

router = APIRouter(prefix="/api", tags=["status"])


def build_status(controller: RefreshController) -> StatusResponse:
    snap = controller.snapshot()
    return StatusResponse(
        state=controller.status.kind.value,
        loading=snap.loading,
        error=snap.error,
        last_updated=snap.last_updated,
        registered=snap.registered_count,
        quota=MAX_QUOTA,
        quota_remaining=quota_remaining(snap.registered_count, MAX_QUOTA),
        can_export=snap.can_export,
    )


@router.get("/health", response_model=HealthResponse)
def health(controller: RefreshController = Depends(get_controller)):
    return HealthResponse(
        status="ok",
        state=controller.status.kind.value,
        registered=len(controller.registrants),
        refreshing=controller.is_refreshing,
    )


@router.get("/status", response_model=StatusResponse)
def status(controller: RefreshController = Depends(get_controller)):
    return build_status(controller)


@router.get("/registrants", response_model=RegistrantsResponse)
def list_registrants(controller: RefreshController = Depends(get_controller)):
    snap = controller.snapshot()
    return RegistrantsResponse(
        registrants=[RegistrantOut(**r.as_dict()) for r in snap.registrants],
        count=snap.registered_count,
        last_updated=snap.last_updated,
    )


@router.post("/refresh", response_model=StatusResponse)
async def refresh(controller: RefreshController = Depends(get_controller)):
    """Fetch the sheet now. Joins the running fetch instead of starting a second one."""
    await controller.refresh()
    return build_status(controller)
