"""
FastAPI factory: CORS, routers, and the AppContext on app.state.
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizdesk.context import AppContext, build_context
from bizdesk.core.config import get_settings
from bizdesk.core.logging import configure_logging
from bizdesk.routers import accounts, auth, hr, users, vendors


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    settings = context.settings if context else get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Bizdesk API",
        description="Accounting, HR, vendor and user administration over a hosted Postgres store.",
    )
    app.state.context = context or build_context(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(accounts.router)
    app.include_router(users.router)
    app.include_router(vendors.router)
    app.include_router(hr.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
