"""Shared router dependencies, the per-client session cookie and the mutation envelope."""
from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import Depends, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from bizdesk.context import AppContext
from bizdesk.core.errors import BackendFailure
from bizdesk.services.base import MutationResult
from bizdesk.services.session_store import SessionStore

SESSION_COOKIE = "bizdesk_session"


class IdsBody(BaseModel):
    ids: list[str]


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(SESSION_COOKIE)


def get_client_session(
    token: Optional[str] = Depends(session_token),
    ctx: AppContext = Depends(get_context),
) -> Optional[SessionStore]:
    """This caller's authenticated session, or None."""
    return ctx.sessions.get(token)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")


def require_session(
    ctx: AppContext = Depends(get_context),
    session: Optional[SessionStore] = Depends(get_client_session),
) -> AppContext:
    """Gate for data routes: the caller must hold an authenticated session."""
    if session is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return ctx


def require_permission(permission: str):
    def dependency(
        ctx: AppContext = Depends(require_session),
        session: Optional[SessionStore] = Depends(get_client_session),
    ) -> AppContext:
        if session is None or not session.has_permission(permission):
            raise HTTPException(status_code=403, detail=f"Missing permission: {permission}")
        return ctx

    return dependency


def run_mutation(ctx: AppContext, mutation: Callable[..., MutationResult], *args: Any) -> JSONResponse:
    """Run one service mutation; the body carries only the notifications it sent."""
    with ctx.notifier.capture() as notes:
        result = mutation(*args)
    body = {
        "ok": result.ok,
        "data": jsonable_encoder(result.data),
        "error": result.error,
        "notifications": [n.to_dict() for n in notes],
    }
    return JSONResponse(status_code=200 if result.ok else 400, content=body)


def read_collection(service) -> list:
    """Cached read; backend failures surface as 502."""
    try:
        return service.list()
    except BackendFailure as e:
        raise HTTPException(status_code=502, detail=e.message)
