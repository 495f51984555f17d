"""
FastAPI dependencies — the refresh controller owned by the app lifespan.
"""
from __future__ import annotations

from fastapi import HTTPException

from khitan_board.data.store import RefreshController

# ---------------------------------------------------------------------------
# Controller handle (set while the lifespan scope is open)
# ---------------------------------------------------------------------------
_controller: RefreshController | None = None


def set_controller(controller: RefreshController | None) -> None:
    global _controller
    _controller = controller


def get_controller() -> RefreshController:
    if _controller is None or _controller.disposed:
        raise HTTPException(503, "Server not initialized yet")
    return _controller
