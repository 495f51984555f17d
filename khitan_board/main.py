"""
Khitan Board — FastAPI app factory; the lifespan owns the refresh controller.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from khitan_board.data.store import RefreshController
from khitan_board.api.dependencies import set_controller
from khitan_board.api.router_meta import router as meta_router
from khitan_board.api.router_reports import router as reports_router


def create_app(controller_factory: Optional[Callable[[], RefreshController]] = None) -> FastAPI:
    factory = controller_factory or RefreshController

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start polling the sheet at startup; cancel the timer on every shutdown path."""
        from khitan_board.config import SHEET_CSV_URL, REFRESH_INTERVAL_SECONDS, MAX_QUOTA

        print(f"  SHEET_CSV_URL = {SHEET_CSV_URL}")
        print(f"  Refresh every {REFRESH_INTERVAL_SECONDS:g}s, quota {MAX_QUOTA}")

        async with factory() as controller:
            set_controller(controller)
            try:
                print("\nKhitan Board ready — first sync running in background\n")
                yield
            finally:
                set_controller(None)
        print("  Refresh timer stopped")

    app = FastAPI(
        title="Khitan Board API",
        description="Registrant list synced from a shared sheet, with printable reports",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(reports_router)

    return app


app = create_app()
